"""Core evaluation engine for arithmetic graphs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from arithgraph._errors import (
    InvalidValueError,
    MissingHintDependencyError,
    MissingInputError,
    UnresolvedOperandError,
)
from arithgraph._ir import Constraint, Node, NodeKind
from arithgraph._u32 import is_u32, wrapping_add, wrapping_mul

from ._verify import unsatisfied_constraints

if TYPE_CHECKING:
    from collections.abc import Mapping

    from arithgraph._builder import Builder

logger = logging.getLogger(__name__)

_BINARY_OPS = {
    NodeKind.ADD: ("Add", wrapping_add),
    NodeKind.MUL: ("Mul", wrapping_mul),
}


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Result of evaluating a graph and checking its constraints.

    Attributes:
        values: Mapping from node id to computed word, covering every node.
        violations: Constraints that do not hold for ``values``, in
            registration order.

    """

    values: dict[int, int] = field(default_factory=dict)
    violations: list[Constraint] = field(default_factory=list)

    @property
    def constraints_satisfied(self) -> bool:
        """Check if every constraint holds."""
        return len(self.violations) == 0

    def get_value(self, node: Node | int) -> int:
        """Get a computed value by node or node id.

        Raises:
            KeyError: If no value exists for the node.

        """
        node_id = node.id if isinstance(node, Node) else node
        return self.values[node_id]


def _check_inputs(builder: Builder, inputs: Mapping[int, int]) -> None:
    input_nodes = builder.input_nodes()
    for node in input_nodes:
        if node.id not in inputs:
            raise MissingInputError(node.id)
    for node in input_nodes:
        value = inputs[node.id]
        if not is_u32(value):
            raise InvalidValueError(node.id, value, "input")


def _evaluate_binary(node: Node, values: dict[int, int]) -> int:
    op_name, op = _BINARY_OPS[node.kind]
    left_value = values.get(node.left)
    if left_value is None:
        raise UnresolvedOperandError(node.id, op_name, "left", node.left)
    right_value = values.get(node.right)
    if right_value is None:
        raise UnresolvedOperandError(node.id, op_name, "right", node.right)
    return op(left_value, right_value)


def _evaluate_hint(node: Node, values: dict[int, int]) -> int:
    dependency_values: dict[int, int] = {}
    for dep_id in node.operands:
        dep_value = values.get(dep_id)
        if dep_value is None:
            logger.debug("Missing dependency value %d for hint at node %d", dep_id, node.id)
            raise MissingHintDependencyError(node.id, dep_id)
        dependency_values[dep_id] = dep_value

    if node.hint is None:
        msg = f"Hint node {node.id} has no hint function"
        raise ValueError(msg)

    logger.debug("Calling %r with %s", node.hint, dependency_values)
    result = node.hint(dependency_values)
    if not is_u32(result):
        raise InvalidValueError(node.id, result, "hint")
    return result


def fill_nodes(builder: Builder, inputs: Mapping[int, int]) -> dict[int, int]:
    """Compute the value of every node from the values of the input nodes.

    Nodes are visited once, in id order. The builder guarantees that every
    node only references nodes with smaller ids, so each operand is resolved
    before it is needed.

    Args:
        builder: The graph to evaluate.
        inputs: Values for INPUT nodes, keyed by node id. Not modified.

    Returns:
        Mapping from node id to value, covering every node.

    Raises:
        MissingInputError: If an INPUT node has no value in ``inputs``.
        InvalidValueError: If an input value or hint result is not a word.
        UnresolvedOperandError: If an Add/Mul operand has no value.
        MissingHintDependencyError: If a hint dependency has no value.

    Example:
        >>> values = fill_nodes(builder, {x.id: 3})
        >>> values[result.id]
        17

    """
    for node in builder.nodes:
        logger.debug("Node %d: %r", node.id, node)

    _check_inputs(builder, inputs)

    values: dict[int, int] = dict(inputs)

    for node in builder.nodes:
        match node.kind:
            case NodeKind.INPUT:
                continue
            case NodeKind.CONSTANT:
                if node.value is None:
                    msg = f"Constant node {node.id} has no value"
                    raise ValueError(msg)
                value = node.value
            case NodeKind.ADD | NodeKind.MUL:
                value = _evaluate_binary(node, values)
            case NodeKind.HINT:
                value = _evaluate_hint(node, values)
            case _:
                msg = f"Unknown node kind: {node.kind}"
                raise ValueError(msg)

        values[node.id] = value
        logger.debug("  Set %d = %d", node.id, value)

    logger.debug("Evaluated %d nodes", len(builder))
    return values


def evaluate_graph(builder: Builder, inputs: Mapping[int, int]) -> EvaluationResult:
    """Evaluate the graph and collect every violated constraint.

    Args:
        builder: The graph to evaluate.
        inputs: Values for INPUT nodes, keyed by node id.

    Returns:
        EvaluationResult with all node values and the violated constraints.

    Raises:
        EvaluationError: If ``fill_nodes`` fails.

    """
    values = fill_nodes(builder, inputs)
    violations = unsatisfied_constraints(builder, values)
    if violations:
        logger.info("%d of %d constraints violated", len(violations), len(builder.constraints))
    return EvaluationResult(values=values, violations=violations)
