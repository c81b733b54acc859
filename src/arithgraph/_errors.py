"""Exceptions raised by arithgraph."""

from typing import Literal


class ArithGraphError(Exception):
    """Base class for all arithgraph errors."""


class EvaluationError(ArithGraphError):
    """Evaluation of a graph was aborted at a specific node."""

    def __init__(self, node_id: int, message: str) -> None:
        super().__init__(message)
        self.node_id = node_id


class MissingInputError(EvaluationError):
    """An input node has no value in the supplied input mapping."""

    def __init__(self, node_id: int) -> None:
        super().__init__(node_id, f"Missing value for input node {node_id}")


class UnresolvedOperandError(EvaluationError):
    """An Add/Mul operand has no value when the node is visited.

    This only happens when a node from another builder was used as an operand.
    """

    def __init__(
        self,
        node_id: int,
        op: str,
        side: Literal["left", "right"],
        operand_id: int,
    ) -> None:
        super().__init__(
            node_id,
            f"Missing {side} operand {operand_id} for {op} operation at node {node_id}",
        )
        self.side = side
        self.operand_id = operand_id


class MissingHintDependencyError(EvaluationError):
    """A hint dependency has no value when the hint node is visited."""

    def __init__(self, node_id: int, dependency_id: int) -> None:
        super().__init__(
            node_id,
            f"Missing dependency value {dependency_id} for hint at node {node_id}",
        )
        self.dependency_id = dependency_id


class InvalidValueError(EvaluationError):
    """A supplied input or a hint result is not a 32-bit unsigned integer."""

    def __init__(self, node_id: int, value: object, source: str) -> None:
        super().__init__(
            node_id,
            f"Invalid {source} value {value!r} at node {node_id}: expected an integer in [0, 2**32 - 1]",
        )
        self.value = value


class InputFileError(ArithGraphError):
    """An input file could not be parsed or validated."""
