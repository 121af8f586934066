"""
Parser for native function signature strings.

Signatures look like::

    add(Tensor self, Tensor other, *, Scalar alpha=1) -> Tensor

The parser is deliberately conservative. Argument lists that use syntax
it cannot split safely (namespaced or templated types with embedded
commas) are rejected whole instead of being guessed at.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..errors import SchemaError
from .signature import Argument, Signature

logger = logging.getLogger("atgen.parser")

RETURN_SEPARATOR = "->"
KEYWORD_ONLY_MARKER = "*"

_OPENING = {"(": ")", "[": "]", "{": "}", "<": ">"}
_CLOSING = {v: k for k, v in _OPENING.items()}


class UnsupportedSyntax(Exception):
    """Argument text that cannot be split into arguments reliably."""


def split_top_level(text: str) -> list[str]:
    """
    Split argument text on commas.

    Raises UnsupportedSyntax when a comma appears inside brackets or the
    brackets do not balance, since a plain comma split would then cut a
    type in half.
    """
    pieces = []
    stack: list[str] = []
    start = 0
    for i, ch in enumerate(text):
        if ch in _OPENING:
            stack.append(ch)
        elif ch in _CLOSING:
            if not stack or stack[-1] != _CLOSING[ch]:
                raise UnsupportedSyntax(f"unbalanced '{ch}'")
            stack.pop()
        elif ch == ",":
            if stack:
                raise UnsupportedSyntax("comma inside brackets")
            pieces.append(text[start:i])
            start = i + 1
    if stack:
        raise UnsupportedSyntax(f"unclosed '{stack[-1]}'")
    pieces.append(text[start:])
    return pieces


class SignatureParser:
    """
    Turns raw schema signature strings into Signature objects.

    Returns None for entries that are not signatures or use unsupported
    syntax. Raises SchemaError when the text is corrupt.
    """

    def __init__(self, rejected_markers: Iterable[str] = ("std::",)):
        """
        Initialize the parser.

        Args:
            rejected_markers: Substrings that reject an argument list outright
        """
        self.rejected_markers = tuple(rejected_markers)

    def parse(self, text: str) -> Optional[Signature]:
        """
        Parse one signature string.

        Args:
            text: Raw ``func`` value from the schema

        Returns:
            The parsed signature, or None if the entry is skipped
        """
        arrow = text.find(RETURN_SEPARATOR)
        if arrow < 0:
            # Aliases and comments have no return type
            logger.debug("Not a signature: %s", text)
            return None

        lhs = text[:arrow].strip()
        return_type = text[arrow + len(RETURN_SEPARATOR):].strip()

        name, paren, args_text = lhs.partition("(")
        if not paren:
            raise SchemaError(f"cannot separate name from arguments in {text!r}")
        if not args_text.endswith(")"):
            raise SchemaError(f"argument list not closed by ')' in {text!r}")
        name = name.strip()
        if not name:
            raise SchemaError(f"cannot separate name from arguments in {text!r}")
        args_text = args_text[:-1]

        if not args_text.strip():
            logger.debug("Rejected %s: empty argument list", name)
            return None
        for marker in self.rejected_markers:
            if marker in args_text:
                logger.debug("Rejected %s: argument list contains %r", name, marker)
                return None

        try:
            pieces = split_top_level(args_text)
        except UnsupportedSyntax as e:
            logger.debug("Rejected %s: %s", name, e)
            return None

        arguments = []
        for piece in pieces:
            argument = self._parse_argument(name, piece)
            if argument is not None:
                arguments.append(argument)

        return Signature(
            name=name,
            arguments=tuple(arguments),
            return_type=return_type,
        )

    def _parse_argument(self, func_name: str, piece: str) -> Optional[Argument]:
        """Parse a single ``TYPE NAME[=DEFAULT]`` piece."""
        piece = piece.strip()
        if piece == KEYWORD_ONLY_MARKER:
            return None

        parts = piece.split("=")
        if len(parts) == 1:
            decl, default = parts[0].strip(), None
        elif len(parts) == 2:
            decl, default = parts[0].strip(), parts[1].strip()
        else:
            raise SchemaError(f"unexpected arg format {piece} in {func_name}")

        declared_type, space, arg_name = decl.rpartition(" ")
        if not space:
            logger.warning("Unhandled argument format for %s: <%s>.", func_name, decl)
            return None

        return Argument(
            name=arg_name,
            declared_type=declared_type.strip(),
            default=default,
        )
