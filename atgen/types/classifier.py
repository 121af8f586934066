"""
Type classifier for parsed signatures.

Maps each declared argument type onto a Kind. A signature is
representable when every argument either maps to a Kind or carries a
default; defaulted arguments of other types are left out of the binding
and the native default applies.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import TypesConfig
from ..parser.signature import Signature
from .kinds import ClassifiedArgument, Kind

logger = logging.getLogger("atgen.types")


class TypeClassifier:
    """
    Decides which signatures can be bound and with which parameters.

    Results are cached per signature, so repeated lookups from the
    overload and emission stages see the same answer.
    """

    def __init__(self, value_type: str = "Tensor", types: Optional[TypesConfig] = None):
        """
        Initialize the classifier.

        Args:
            value_type: Name of the library's primary value type
            types: Recognized spellings for the scalar kinds
        """
        self.value_type = value_type.lower()
        self.types = types or TypesConfig()
        self._cache: dict[Signature, Optional[tuple[ClassifiedArgument, ...]]] = {}

    def kind_of(self, declared_type: str) -> Optional[Kind]:
        """
        Look up the Kind for a declared type spelling.

        Args:
            declared_type: Type as written in the schema

        Returns:
            The Kind, or None if the type cannot be bound
        """
        spelling = declared_type.strip().lower()

        if spelling in self.types.boolean:
            return Kind.BOOLEAN
        if spelling in self.types.integer:
            return Kind.INTEGER
        if spelling in self.types.floating:
            return Kind.FLOATING_POINT
        if spelling == self.value_type:
            return Kind.HANDLE
        if spelling.startswith(self.types.int_list_prefix):
            return Kind.INTEGER_LIST
        return None

    def classify(self, signature: Signature) -> Optional[tuple[ClassifiedArgument, ...]]:
        """
        Classify every argument of a signature.

        Args:
            signature: Parsed signature

        Returns:
            Bound parameters in declaration order, or None if the
            signature is not representable
        """
        if signature in self._cache:
            return self._cache[signature]

        result = self._classify(signature)
        self._cache[signature] = result
        return result

    def is_representable(self, signature: Signature) -> bool:
        return self.classify(signature) is not None

    def _classify(self, signature: Signature) -> Optional[tuple[ClassifiedArgument, ...]]:
        params = []
        for arg in signature.arguments:
            kind = self.kind_of(arg.declared_type)
            if kind is not None:
                params.append(ClassifiedArgument(arg.name, kind))
            elif not arg.has_default:
                logger.debug(
                    "Rejected %s: unsupported argument <%s>", signature.name, arg
                )
                return None
        return tuple(params)
