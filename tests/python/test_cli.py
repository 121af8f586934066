"""
End-to-end tests for the command-line interface.
"""

import pytest

from atgen.cli import main
from atgen.generators import BANNER


@pytest.fixture
def in_project(config, monkeypatch):
    """Run the CLI from the temporary project root."""
    monkeypatch.chdir(config.project_root)
    return config


def _read(config):
    return (
        config.declarations_path.read_text(),
        config.implementations_path.read_text(),
    )


class TestGenerate:
    """Test a full generation run."""

    def test_no_arguments(self, in_project, sample_schema, capsys):
        """Test a run with the default paths."""
        assert main([]) == 0

        decl, impl = _read(in_project)
        assert decl.startswith(f"\n{BANNER}\n\n")
        assert impl.startswith(f"\n{BANNER}\n\n")
        assert decl.splitlines()[3:] == [
            "tensor atg_abs(tensor self);",
            "tensor atg_add1(tensor self, tensor other, double alpha);",
            "tensor atg_add2(tensor self, double other, double alpha);",
            "tensor atg_clamp(tensor self);",
            "tensor atg_sum(tensor self, int *dim_data, int dim_len, int keepdim);",
        ]
        assert "Generated 5 bindings" in capsys.readouterr().out

    def test_method_only_skipped(self, in_project, sample_schema):
        """Test that method-only variants produce nothing."""
        main([])
        decl, impl = _read(in_project)
        assert "add_" not in decl
        assert "add_" not in impl

    def test_excluded_and_rejected_skipped(self, in_project, sample_schema):
        """Test policy exclusions and unrepresentable signatures."""
        main([])
        decl, _ = _read(in_project)
        for name in ("bincount", "_cast_Byte", "size", "split", "atg_to", "conv"):
            assert name not in decl

    def test_deterministic(self, in_project, sample_schema):
        """Test that two runs produce identical bytes."""
        main([])
        first = _read(in_project)
        main([])
        assert _read(in_project) == first

    def test_overrides(self, in_project, tmp_path):
        """Test --schema and --output."""
        schema = tmp_path / "other.yaml"
        schema.write_text("- func: neg(Tensor self) -> Tensor\n")
        stem = tmp_path / "out" / "api"

        assert main(["-i", str(schema), "-o", str(stem)]) == 0

        assert (tmp_path / "out" / "api.h").read_text().endswith(
            "tensor atg_neg(tensor self);\n"
        )
        assert "torch::neg(*self)" in (tmp_path / "out" / "api.cpp.h").read_text()

    def test_config_file(self, in_project, tmp_path):
        """Test that atgen.toml is discovered and applied."""
        (tmp_path / "atgen.toml").write_text(
            '[paths]\nschema = "fns.yaml"\noutput_stem = "gen/api"\n'
            '[library]\nfunction_prefix = "at_"\nexcluded = ["neg"]\n'
        )
        (tmp_path / "fns.yaml").write_text(
            "- func: neg(Tensor self) -> Tensor\n"
            "- func: abs(Tensor self) -> Tensor\n"
        )

        assert main([]) == 0

        decl = (tmp_path / "gen" / "api.h").read_text()
        assert decl.splitlines()[3:] == ["tensor at_abs(tensor self);"]


class TestErrors:
    """Test fatal conditions."""

    def test_schema_error(self, in_project, write_schema, caplog):
        """Test that corruption exits nonzero without output."""
        write_schema(
            """
            - func: abs(Tensor self) -> Tensor
            - func: broken -> Tensor
            """
        )
        assert main([]) == 1
        assert not in_project.declarations_path.exists()
        assert not in_project.implementations_path.exists()
        assert "Schema error" in caplog.text

    def test_previous_output_untouched(self, in_project, write_schema):
        """Test that a failed run keeps the last good output."""
        write_schema("- func: abs(Tensor self) -> Tensor\n")
        assert main([]) == 0
        before = _read(in_project)

        write_schema("- func: abs(Tensor self) -> Tensor\n  func: neg(Tensor self) -> Tensor\n")
        assert main([]) == 1
        assert _read(in_project) == before

    def test_nameless_signature(self, in_project, write_schema):
        """Test that a signature without a name is fatal, not emitted."""
        write_schema("- func: (Tensor self) -> Tensor\n")
        assert main([]) == 1
        assert not in_project.declarations_path.exists()

    def test_invalid_config(self, in_project, tmp_path, caplog):
        """Test that a malformed config value is reported."""
        (tmp_path / "atgen.toml").write_text('[library]\nexcluded = "neg"\n')
        assert main([]) == 1
        assert "Config error" in caplog.text

    def test_missing_schema(self, in_project):
        """Test that an absent schema file is reported."""
        assert main([]) == 1

    def test_missing_config(self, in_project, tmp_path):
        """Test that an explicit config path must exist."""
        assert main(["--config", str(tmp_path / "nope.toml")]) == 1


class TestCheck:
    """Test --check mode."""

    def test_up_to_date(self, in_project, sample_schema):
        main([])
        assert main(["--check"]) == 0

    def test_missing_outputs(self, in_project, sample_schema):
        assert main(["--check"]) == 1
        assert not in_project.declarations_path.exists()

    def test_stale(self, in_project, sample_schema, caplog):
        """Test that an edited output is reported."""
        main([])
        in_project.implementations_path.write_text("// edited\n")
        assert main(["--check"]) == 1
        assert "Out of date" in caplog.text
        assert in_project.implementations_path.read_text() == "// edited\n"
