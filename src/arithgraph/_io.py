"""Loading input values from and exporting results to TOML files."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import TypeAdapter, ValidationError

from ._errors import InputFileError
from ._u32 import U32

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ._eval_engine import EvaluationResult

logger = logging.getLogger(__name__)

INPUTS_TABLE = "inputs"
VALUES_TABLE = "values"

_inputs_adapter: TypeAdapter[dict[int, int]] = TypeAdapter(dict[int, U32])


def parse_inputs(data: Mapping[str, Any]) -> dict[int, int]:
    """Validate an ``{node_id: value}`` table into input values.

    Keys may be strings (as read from TOML) and are converted to ints.

    Raises:
        InputFileError: If a key is not an integer or a value is not a word.

    """
    try:
        return _inputs_adapter.validate_python(data)
    except ValidationError as e:
        msg = f"Invalid input values: {e}"
        raise InputFileError(msg) from e


def load_inputs_from_toml(input_path: Path) -> dict[int, int]:
    """Load input values from the ``[inputs]`` table of a TOML file.

    Example file::

        [inputs]
        0 = 3
        1 = 2

    Args:
        input_path: Path to the TOML file.

    Returns:
        Mapping from input node id to value.

    Raises:
        InputFileError: If the file is not valid TOML or the table is invalid.

    """
    with input_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise InputFileError(msg) from e

    inputs_table = data.get(INPUTS_TABLE, {})
    if not isinstance(inputs_table, dict):
        msg = f"Invalid [{INPUTS_TABLE}] in {input_path}: expected a table"
        raise InputFileError(msg)

    inputs = parse_inputs(inputs_table)
    logger.debug("Loaded %d input values from %s", len(inputs), input_path)
    return inputs


def export_to_toml(result: EvaluationResult, output_path: Path) -> None:
    """Write computed values and the constraint status to a TOML file.

    Only values are written; the graph itself is not serialized.

    Args:
        result: The evaluation result to export.
        output_path: Destination file. Parent directories are created.

    """
    document: dict[str, Any] = {
        "constraints_satisfied": result.constraints_satisfied,
        VALUES_TABLE: {str(node_id): value for node_id, value in sorted(result.values.items())},
    }
    if result.violations:
        document["violations"] = [
            {"left": constraint.left, "right": constraint.right} for constraint in result.violations
        ]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(document, f)
    logger.debug("Exported %d values to %s", len(result.values), output_path)
