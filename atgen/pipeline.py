"""
Generation pipeline.

Reader -> Parser -> Classifier -> Disambiguator -> Emitter. Every
stage runs to completion before output is touched, so a schema error
leaves previously generated files in place.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from .config import CodegenConfig
from .exports import ExportedFunction, ExportTable, disambiguate
from .generators import CBindingGenerator, GeneratedFile
from .parser import Signature, SignatureParser
from .schema import SchemaEntry, SchemaReader
from .types import TypeClassifier

logger = logging.getLogger("atgen.pipeline")


def parse_entries(entries: Iterable[SchemaEntry], parser: SignatureParser) -> list[Signature]:
    """Parse schema entries, keeping the ones that are signatures."""
    signatures = []
    for entry in entries:
        signature = parser.parse(entry.func)
        if signature is not None:
            signatures.append(signature)
    return signatures


def build_exports(signatures: Iterable[Signature], classifier: TypeClassifier) -> ExportTable:
    """Classify signatures and name the representable ones."""
    representable = []
    for signature in signatures:
        params = classifier.classify(signature)
        if params is not None:
            representable.append(ExportedFunction(signature, params))
    return disambiguate(representable)


def generate(config: CodegenConfig) -> list[GeneratedFile]:
    """
    Run the pipeline and render the output files in memory.

    Args:
        config: Codegen configuration

    Returns:
        The declarations and implementations files

    Raises:
        SchemaError: The schema is corrupt
    """
    reader = SchemaReader(function_variant=config.schema.function_variant)
    entries = reader.read(config.schema_abs)

    parser = SignatureParser(rejected_markers=config.schema.rejected_markers)
    signatures = parse_entries(entries, parser)
    logger.info("Generating code for %d functions.", len(signatures))

    classifier = TypeClassifier(value_type=config.library.value_type, types=config.types)
    exports = build_exports(signatures, classifier)
    logger.info("%d functions are representable.", len(exports))

    return CBindingGenerator(config).generate(exports)


def write_file(result: GeneratedFile) -> None:
    """Write a generated file, replacing any previous version in one step."""
    result.path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=result.path.parent, prefix=f".{result.path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(result.content)
        os.replace(tmp, result.path)
    except BaseException:
        os.unlink(tmp)
        raise


def write_all(results: Iterable[GeneratedFile]) -> None:
    for result in results:
        write_file(result)


def stale_files(results: Iterable[GeneratedFile]) -> list[Path]:
    """Return the paths whose contents on disk differ from the rendering."""
    stale = []
    for result in results:
        if not result.path.exists():
            stale.append(result.path)
            continue
        if result.path.read_text(encoding="utf-8") != result.content:
            stale.append(result.path)
    return stale
