"""
Tests for argument classification.
"""

import pytest

from atgen.config import TypesConfig
from atgen.parser import SignatureParser
from atgen.types import ClassifiedArgument, Kind, TypeClassifier


@pytest.fixture
def classifier():
    return TypeClassifier()


def _sig(text):
    return SignatureParser().parse(text)


class TestKindOf:
    """Test the type spelling lookup."""

    @pytest.mark.parametrize("spelling, kind", [
        ("bool", Kind.BOOLEAN),
        ("Bool", Kind.BOOLEAN),
        ("int64_t", Kind.INTEGER),
        ("double", Kind.FLOATING_POINT),
        ("Tensor", Kind.HANDLE),
        ("tensor", Kind.HANDLE),
        ("IntList", Kind.INTEGER_LIST),
        ("IntList[2]", Kind.INTEGER_LIST),
        ("intlist[]", Kind.INTEGER_LIST),
    ])
    def test_supported(self, classifier, spelling, kind):
        """Test every supported spelling."""
        assert classifier.kind_of(spelling) is kind

    @pytest.mark.parametrize("spelling", [
        "Scalar", "Tensor?", "TensorList", "ScalarType", "int", "float", "Generator*",
    ])
    def test_unsupported(self, classifier, spelling):
        """Test spellings outside the supported set."""
        assert classifier.kind_of(spelling) is None

    def test_configured_spellings(self):
        """Test classification with another library's names."""
        types = TypesConfig(
            boolean=frozenset({"bool"}),
            integer=frozenset({"int64_t", "long"}),
            floating=frozenset({"double", "float"}),
            int_list_prefix="shape",
        )
        classifier = TypeClassifier(value_type="Array", types=types)
        assert classifier.kind_of("Array") is Kind.HANDLE
        assert classifier.kind_of("Tensor") is None
        assert classifier.kind_of("long") is Kind.INTEGER
        assert classifier.kind_of("float") is Kind.FLOATING_POINT
        assert classifier.kind_of("Shape[3]") is Kind.INTEGER_LIST


class TestClassify:
    """Test the drop-if-defaulted, reject-if-not policy."""

    def test_all_supported(self, classifier):
        """Test that every supported argument becomes a parameter."""
        sig = _sig("f(Tensor self, IntList[1] dim, bool keepdim, double eps) -> Tensor")
        assert classifier.classify(sig) == (
            ClassifiedArgument("self", Kind.HANDLE),
            ClassifiedArgument("dim", Kind.INTEGER_LIST),
            ClassifiedArgument("keepdim", Kind.BOOLEAN),
            ClassifiedArgument("eps", Kind.FLOATING_POINT),
        )

    def test_supported_default_kept(self, classifier):
        """Test that a defaulted supported argument stays a parameter."""
        sig = _sig("foo(Tensor self, int64_t dim=0) -> Tensor")
        assert classifier.classify(sig) == (
            ClassifiedArgument("self", Kind.HANDLE),
            ClassifiedArgument("dim", Kind.INTEGER),
        )

    def test_unsupported_without_default(self, classifier):
        """Test that one undefaulted exotic argument rejects the signature."""
        sig = _sig("foo(SomeExoticType x, int64_t y) -> Tensor")
        assert classifier.classify(sig) is None
        assert not classifier.is_representable(sig)

    def test_unsupported_with_default(self, classifier):
        """Test that a defaulted exotic argument is left out."""
        sig = _sig("foo(SomeExoticType x = 1, int64_t y) -> Tensor")
        assert classifier.classify(sig) == (ClassifiedArgument("y", Kind.INTEGER),)

    def test_no_arguments(self, classifier):
        """Test that a signature with no arguments is representable."""
        sig = _sig("noop(*) -> Tensor")
        assert classifier.classify(sig) == ()
        assert classifier.is_representable(sig)

    def test_result_cached(self, classifier):
        """Test that classification is computed once per signature."""
        sig = _sig("foo(Tensor self) -> Tensor")
        first = classifier.classify(sig)
        classifier.types = TypesConfig(int_list_prefix="x")
        classifier.value_type = "other"
        assert classifier.classify(sig) is first
