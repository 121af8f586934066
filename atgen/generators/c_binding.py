"""
C binding generator.

Emits a declarations header and an implementations file. Every
binding takes only C-compatible parameters, converts them back to the
native types at the call site and runs the call inside the protect
macro, which turns native exceptions into the wrapper's error channel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .base import Generator, GeneratedFile
from ..config import CodegenConfig
from ..exports import ExportedFunction, ExportTable
from ..types.kinds import ClassifiedArgument, Kind

logger = logging.getLogger("atgen.generators")

BANNER = "// THIS FILE IS AUTOMATICALLY GENERATED, DO NOT EDIT BY HAND!"

# C parameter declaration for each kind, "{name}" is the argument name.
# HANDLE uses the configured handle type.
PARAM_FORMS: dict[Kind, str] = {
    Kind.BOOLEAN: "int {name}",
    Kind.INTEGER: "int64_t {name}",
    Kind.FLOATING_POINT: "double {name}",
    Kind.HANDLE: "{handle} {name}",
    Kind.INTEGER_LIST: "int *{name}_data, int {name}_len",
}

# Expression rebuilding the native value from the C parameters
CALL_FORMS: dict[Kind, str] = {
    Kind.BOOLEAN: "(bool){name}",
    Kind.INTEGER: "{name}",
    Kind.FLOATING_POINT: "{name}",
    Kind.HANDLE: "*{name}",
    Kind.INTEGER_LIST: "{list_constructor}({name}_data, {name}_len)",
}


def _check_forms() -> None:
    """Every Kind needs both a parameter and a call-site form."""
    for table in (PARAM_FORMS, CALL_FORMS):
        missing = set(Kind) - set(table)
        if missing:
            raise RuntimeError(f"no emission rule for {sorted(k.name for k in missing)}")


_check_forms()


@dataclass(frozen=True)
class Binding:
    """Template view of one exported function."""
    exported_name: str
    symbol: str
    name: str
    params: str
    call_args: str


class CBindingGenerator(Generator):
    """
    Generator for the C declarations and implementations.
    """

    def __init__(self, config: CodegenConfig):
        super().__init__(config)

    def should_emit(self, func: ExportedFunction) -> bool:
        """
        Check the emission policy for a function.

        Only functions returning the primary value type are bound, and
        internal or hand-bound operations are left out.
        """
        library = self.config.library
        if func.signature.return_type != library.value_type:
            return False
        return not library.is_excluded(func.name)

    def bindings(self, exports: ExportTable) -> list[Binding]:
        """Build the template views for every emitted function."""
        result = []
        for exported_name, func in exports.items():
            if not self.should_emit(func):
                continue
            result.append(self._binding(exported_name, func))
        logger.debug("%d of %d exported functions emitted", len(result), len(exports))
        return result

    def generate(self, exports: ExportTable) -> list[GeneratedFile]:
        """Render the declarations and implementations files."""
        library = self.config.library
        bindings = self.bindings(exports)
        context = dict(
            banner=BANNER,
            bindings=bindings,
            handle_type=library.handle_type,
            namespace=library.namespace,
            value_type=library.value_type,
            protect_macro=library.protect_macro,
        )

        declarations = self.env.get_template("declarations.h.j2").render(**context)
        implementations = self.env.get_template("implementations.cpp.h.j2").render(**context)

        return [
            GeneratedFile(
                path=self.config.declarations_path,
                content=declarations,
                entries=len(bindings),
            ),
            GeneratedFile(
                path=self.config.implementations_path,
                content=implementations,
                entries=len(bindings),
            ),
        ]

    def _binding(self, exported_name: str, func: ExportedFunction) -> Binding:
        library = self.config.library
        return Binding(
            exported_name=exported_name,
            symbol=f"{library.function_prefix}{exported_name}",
            name=func.name,
            params=", ".join(self.param_decl(p) for p in func.params),
            call_args=", ".join(self.call_arg(p) for p in func.params),
        )

    def param_decl(self, param: ClassifiedArgument) -> str:
        """C parameter declaration for a classified argument."""
        return PARAM_FORMS[param.kind].format(
            name=param.name,
            handle=self.config.library.handle_type,
        )

    def call_arg(self, param: ClassifiedArgument) -> str:
        """Call-site expression for a classified argument."""
        return CALL_FORMS[param.kind].format(
            name=param.name,
            list_constructor=self.config.library.list_constructor,
        )
