"""
Command-line interface for atgen.

Usage:
    atgen [options]
    python -m atgen [options]

With no options the schema and output locations come from atgen.toml,
or from the built-in defaults when there is no config file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import CodegenConfig
from .errors import ConfigError, SchemaError
from .pipeline import generate, stale_files, write_all

logger = logging.getLogger("atgen")


def _setup_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="atgen",
        description="Generate C bindings from the native functions schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Regenerate the bindings with the configured paths
  atgen

  # Use a different schema and output location
  atgen -i build/native_functions.yaml -o out/torch_api_generated

  # Fail if the checked-in bindings are out of date
  atgen --check
""",
    )

    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file (atgen.toml)",
    )
    parser.add_argument(
        "--schema", "-i",
        type=Path,
        help="Schema YAML file",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output path stem, '.h' and '.cpp.h' are appended",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Compare with the files on disk instead of writing",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only report warnings and errors",
    )

    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.quiet)

    if args.config is not None and not args.config.exists():
        logger.error("Config file not found: %s", args.config)
        return 1

    # Load configuration
    try:
        config = CodegenConfig.load(args.config)
    except ConfigError as e:
        logger.error("Config error: %s", e)
        return 1

    # Apply CLI overrides
    if args.schema:
        config.paths.schema = args.schema.resolve()
    if args.output:
        config.paths.output_stem = args.output.resolve()

    try:
        results = generate(config)
    except SchemaError as e:
        logger.error("Schema error: %s", e)
        return 1
    except OSError as e:
        logger.error("Cannot read schema: %s", e)
        return 1

    if args.check:
        stale = stale_files(results)
        for path in stale:
            logger.error("Out of date: %s", path)
        return 1 if stale else 0

    try:
        write_all(results)
    except OSError as e:
        logger.error("Cannot write output: %s", e)
        return 1

    print(f"Generated {results[0].entries} bindings -> {', '.join(str(r.path) for r in results)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
