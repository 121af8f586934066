"""
Pytest configuration and shared fixtures for atgen tests.
"""

import sys
import textwrap
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from atgen.config import CodegenConfig


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def config(tmp_path):
    """Default configuration rooted in a temporary directory."""
    return CodegenConfig(project_root=tmp_path)


@pytest.fixture
def write_schema(config):
    """Write a schema document to the configured schema path.

    Text is dedented so tests can use indented triple-quoted strings.
    """
    def _write(text: str) -> Path:
        path = config.schema_abs
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_schema(write_schema):
    """A small schema covering the main filtering cases."""
    return write_schema(
        """
        - func: abs(Tensor self) -> Tensor
          variants: function, method
        - func: add(Tensor self, Tensor other, *, double alpha=1) -> Tensor
          variants: function, method
        - func: add(Tensor self, double other, double alpha=1) -> Tensor
          variants: function, method
        - func: add_(Tensor self, Tensor other) -> Tensor
          variants: method
        - func: sum(Tensor self, IntList[1] dim, bool keepdim=false) -> Tensor
        - func: bincount(Tensor self, Tensor weights, int64_t minlength=0) -> Tensor
        - func: _cast_Byte(Tensor self, bool non_blocking=false) -> Tensor
        - func: size(Tensor self, int64_t dim) -> int64_t
        - func: split(Tensor self, int64_t split_size, int64_t dim=0) -> TensorList
        - func: to(Tensor self, ScalarType dtype) -> Tensor
        - func: conv(Tensor input, std::array<bool,3> mask) -> Tensor
        - func: clamp(Tensor self, Scalar? min=None, Scalar? max=None) -> Tensor
        """
    )
