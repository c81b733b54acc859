"""Arithmetic computation graphs with hints and equality constraints."""

__all__ = [
    "U32_MAX",
    "ArithGraphError",
    "Builder",
    "Constraint",
    "EvaluationError",
    "EvaluationResult",
    "HintFunction",
    "InputFileError",
    "InvalidValueError",
    "MissingHintDependencyError",
    "MissingInputError",
    "Node",
    "NodeKind",
    "UnresolvedOperandError",
    "check_constraints",
    "evaluate_graph",
    "export_to_toml",
    "fill_nodes",
    "load_inputs_from_toml",
    "unsatisfied_constraints",
]

from ._builder import Builder
from ._errors import (
    ArithGraphError,
    EvaluationError,
    InputFileError,
    InvalidValueError,
    MissingHintDependencyError,
    MissingInputError,
    UnresolvedOperandError,
)
from ._eval_engine import (
    EvaluationResult,
    check_constraints,
    evaluate_graph,
    fill_nodes,
    unsatisfied_constraints,
)
from ._io import export_to_toml, load_inputs_from_toml
from ._ir import Constraint, HintFunction, Node, NodeKind
from ._u32 import U32_MAX
