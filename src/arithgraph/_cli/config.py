"""The ``[tool.arithgraph]`` table of pyproject.toml.

    [tool.arithgraph]
    circuit = { script = "examples/quotient_sum.py", name = "build" }
    input = "examples/quotient_sum.toml"
    output = "build/results.toml"

``circuit`` may also be a ``"module.path:variable"`` string. Relative paths
are taken from the directory holding pyproject.toml.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_TABLE = "[tool.arithgraph]"


class ConfigError(Exception):
    """Error in arithgraph configuration."""


@dataclass(slots=True, frozen=True)
class CircuitSource:
    """Location of a circuit: either a script file or a ``module:variable`` reference.

    ``name`` selects the Builder (or factory) inside a script; module
    references carry the name after the colon instead.
    """

    script: Path | None = None
    module: str | None = None
    name: str | None = None

    def __str__(self) -> str:
        if self.module is not None:
            return self.module
        return f"{self.script}:{self.name}" if self.name else str(self.script)


@dataclass(slots=True, frozen=True)
class ArithGraphConfig:
    """Settings read from pyproject.toml; every field is optional."""

    circuit: CircuitSource | None = None
    input: Path | None = None
    output: Path | None = None
    project_root: Path | None = None


def _parse_path(value: object, key: str, project_root: Path) -> Path:
    if not isinstance(value, str):
        msg = f"{_TABLE} {key} must be a path string, got {type(value).__name__}"
        raise ConfigError(msg)
    return project_root / value


def _parse_circuit(value: object, project_root: Path) -> CircuitSource:
    match value:
        case str() if ":" in value:
            return CircuitSource(module=value)
        case str():
            msg = f"{_TABLE} circuit '{value}' must look like 'module.path:variable_name'"
            raise ConfigError(msg)
        case {"script": script, **rest}:
            unknown = set(rest) - {"name"}
            if unknown:
                msg = f"{_TABLE} circuit has unknown keys: {', '.join(sorted(unknown))}"
                raise ConfigError(msg)
            name = rest.get("name")
            if name is not None and not isinstance(name, str):
                msg = f"{_TABLE} circuit.name must be a string"
                raise ConfigError(msg)
            return CircuitSource(script=_parse_path(script, "circuit.script", project_root), name=name)

    msg = f"{_TABLE} circuit must be a 'module:variable' string or a table with a 'script' key"
    raise ConfigError(msg)


def load_config(pyproject_path: Path) -> ArithGraphConfig:
    """Read ``[tool.arithgraph]`` from the given pyproject.toml.

    Raises:
        ConfigError: If the file is not valid TOML or the table is malformed.

    """
    project_root = pyproject_path.parent
    try:
        data: dict[str, Any] = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {pyproject_path}: {e}"
        raise ConfigError(msg) from e

    section = data.get("tool", {}).get("arithgraph", {})
    if not isinstance(section, dict):
        msg = f"{_TABLE} must be a table"
        raise ConfigError(msg)

    paths = {key: _parse_path(section[key], key, project_root) for key in ("input", "output") if key in section}
    circuit = _parse_circuit(section["circuit"], project_root) if "circuit" in section else None
    return ArithGraphConfig(circuit=circuit, project_root=project_root, **paths)


def get_config(start_dir: Path | None = None) -> ArithGraphConfig:
    """Load the config of the nearest pyproject.toml at or above ``start_dir``.

    Defaults to the working directory. Without any pyproject.toml the config
    is empty.
    """
    here = (start_dir or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return load_config(candidate)
    return ArithGraphConfig()
