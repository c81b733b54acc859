"""Tests for the command line interface."""

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

import arithgraph as ag
from arithgraph._cli.discover import load_circuit_from_module_path, load_circuit_from_script
from arithgraph._cli.main import app

runner = CliRunner()

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"

POLYNOMIAL = """
import arithgraph as ag

builder = ag.Builder()
x = builder.create_input()
x_squared = builder.mul(x, x)
five = builder.create_constant(5)
result = builder.add(builder.add(x_squared, x), five)
"""

DIVISION = """
import arithgraph as ag


def build():
    builder = ag.Builder()
    a = builder.create_input()
    b = builder.add(a, builder.create_constant(1))
    eight = builder.create_constant(8)
    c = builder.hint([b], lambda values: values[b.id] // 8)
    builder.assert_equal(builder.mul(c, eight), b)
    return builder


not_a_builder = 42
"""


def _write_circuit(tmp_path: Path, code: str) -> Path:
    # Scripts are imported by module name, so each test gets its own
    script = tmp_path / f"{tmp_path.name}_circuit.py"
    script.write_text(code)
    return script


class TestDiscover:
    def test_finds_module_level_builder(self, tmp_path: Path) -> None:
        builder = load_circuit_from_script(_write_circuit(tmp_path, POLYNOMIAL))
        assert isinstance(builder, ag.Builder)
        assert len(builder) == 5

    def test_calls_named_factory(self, tmp_path: Path) -> None:
        builder = load_circuit_from_script(_write_circuit(tmp_path, DIVISION), "build")
        assert len(builder) == 6
        assert len(builder.constraints) == 1

    def test_no_builder_in_module(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Could not find a Builder"):
            load_circuit_from_script(_write_circuit(tmp_path, DIVISION))

    def test_unknown_name(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Could not find 'missing'"):
            load_circuit_from_script(_write_circuit(tmp_path, POLYNOMIAL), "missing")

    def test_name_is_not_a_builder(self, tmp_path: Path) -> None:
        with pytest.raises(TypeError, match="is not a Builder"):
            load_circuit_from_script(_write_circuit(tmp_path, DIVISION), "not_a_builder")

    def test_module_path_requires_colon(self) -> None:
        with pytest.raises(ValueError, match="module.path:variable_name"):
            load_circuit_from_module_path("examples.division")


class TestCheckCommand:
    def test_lists_nodes(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["check", str(_write_circuit(tmp_path, POLYNOMIAL))])

        assert result.exit_code == 0, result.output
        assert "Mul(0, 0)" in result.output
        assert "Constant(5)" in result.output
        assert "5 nodes, 1 inputs, 0 constraints" in result.output

    def test_requires_circuit(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check"])

        assert result.exit_code != 0


class TestCalcCommand:
    def test_prints_values(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["calc", str(_write_circuit(tmp_path, POLYNOMIAL)), "-x", "0=3"])

        assert result.exit_code == 0, result.output
        assert "17" in result.output
        assert "All constraints satisfied" in result.output

    def test_factory_and_satisfied_constraint(self, tmp_path: Path) -> None:
        script = _write_circuit(tmp_path, DIVISION)
        result = runner.invoke(app, ["calc", str(script), "--builder", "build", "-x", "0=15", "--verify"])

        assert result.exit_code == 0, result.output
        assert "PASS" in result.output

    def test_verify_fails_on_violated_constraint(self, tmp_path: Path) -> None:
        script = _write_circuit(tmp_path, DIVISION)
        result = runner.invoke(app, ["calc", str(script), "--builder", "build", "-x", "0=16", "--verify"])

        assert result.exit_code == 1
        assert "1 constraint(s) not satisfied" in result.output

    def test_violation_without_verify_exits_zero(self, tmp_path: Path) -> None:
        script = _write_circuit(tmp_path, DIVISION)
        result = runner.invoke(app, ["calc", str(script), "--builder", "build", "-x", "0=16"])

        assert result.exit_code == 0, result.output
        assert "FAIL" in result.output

    def test_missing_input(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["calc", str(_write_circuit(tmp_path, POLYNOMIAL))])

        assert result.exit_code == 1
        assert "Missing value for input node 0" in result.output

    def test_out_of_range_assignment(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["calc", str(_write_circuit(tmp_path, POLYNOMIAL)), "-x", "0=4294967296"])

        assert result.exit_code == 2
        assert "Input error" not in result.output

    def test_assignment_with_leading_zero_is_decimal(self, tmp_path: Path) -> None:
        script = _write_circuit(tmp_path, POLYNOMIAL)
        output_file = tmp_path / "results.toml"

        result = runner.invoke(app, ["calc", str(script), "-x", "0=010", "-o", str(output_file)])

        assert result.exit_code == 0, result.output
        with output_file.open("rb") as f:
            assert tomllib.load(f)["values"]["4"] == 115

    def test_malformed_assignment(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["calc", str(_write_circuit(tmp_path, POLYNOMIAL)), "-x", "3"])

        assert result.exit_code == 2

    def test_input_file_and_export(self, tmp_path: Path) -> None:
        script = _write_circuit(tmp_path, POLYNOMIAL)
        input_file = tmp_path / "inputs.toml"
        input_file.write_text("[inputs]\n0 = 1\n")
        output_file = tmp_path / "results.toml"

        result = runner.invoke(app, ["calc", str(script), "-i", str(input_file), "-o", str(output_file)])

        assert result.exit_code == 0, result.output
        with output_file.open("rb") as f:
            data = tomllib.load(f)
        assert data["constraints_satisfied"] is True
        assert data["values"] == {"0": 1, "1": 1, "2": 5, "3": 2, "4": 7}

    def test_assignment_overrides_input_file(self, tmp_path: Path) -> None:
        script = _write_circuit(tmp_path, POLYNOMIAL)
        input_file = tmp_path / "inputs.toml"
        input_file.write_text("[inputs]\n0 = 1\n")
        output_file = tmp_path / "results.toml"

        result = runner.invoke(
            app,
            ["calc", str(script), "-i", str(input_file), "-x", "0=3", "-o", str(output_file)],
        )

        assert result.exit_code == 0, result.output
        with output_file.open("rb") as f:
            assert tomllib.load(f)["values"]["4"] == 17

    def test_uses_pyproject_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        script = _write_circuit(tmp_path, DIVISION)
        (tmp_path / "inputs.toml").write_text("[inputs]\n0 = 7\n")
        (tmp_path / "pyproject.toml").write_text(
            f"""
[tool.arithgraph]
circuit = {{ script = "{script.name}", name = "build" }}
input = "inputs.toml"
output = "out/results.toml"
""",
        )
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["calc", "--verify"])

        assert result.exit_code == 0, result.output
        with (tmp_path / "out" / "results.toml").open("rb") as f:
            data = tomllib.load(f)
        assert data["values"]["4"] == 1

    def test_invalid_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.arithgraph]\ncircuit = 1\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["calc"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_quotient_sum_example(self, tmp_path: Path) -> None:
        output_file = tmp_path / "results.toml"

        result = runner.invoke(
            app,
            [
                "calc",
                str(EXAMPLES_DIR / "quotient_sum.py"),
                "--builder",
                "build",
                "-i",
                str(EXAMPLES_DIR / "quotient_sum.toml"),
                "-o",
                str(output_file),
                "--verify",
            ],
        )

        assert result.exit_code == 0, result.output
        with output_file.open("rb") as f:
            data = tomllib.load(f)
        assert data["constraints_satisfied"] is True
        assert data["values"]["5"] == 25
