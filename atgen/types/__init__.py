"""
Argument kinds and signature classification.
"""

from .kinds import Kind, ClassifiedArgument
from .classifier import TypeClassifier

__all__ = ["Kind", "ClassifiedArgument", "TypeClassifier"]
