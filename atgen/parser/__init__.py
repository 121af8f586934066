"""
Signature parsing module.
"""

from .signature import (
    Argument,
    Signature,
)
from .signature_parser import SignatureParser

__all__ = [
    "Argument",
    "Signature",
    "SignatureParser",
]
