"""
CLI entry point for atgen package.

Usage:
    python -m atgen [options]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
