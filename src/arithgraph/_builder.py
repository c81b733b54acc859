"""Incremental construction of arithmetic graphs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._ir import Constraint, HintFunction, Node, NodeKind
from ._u32 import U32_MAX, is_u32

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)


def _require_handle(obj: object, argument: str) -> Node:
    if not isinstance(obj, Node):
        msg = f"{argument} must be a Node returned by a Builder, got {type(obj).__name__}"
        raise TypeError(msg)
    return obj


class Builder:
    """Builds an arithmetic graph one node at a time.

    Every creation method appends a node whose id is its position in the
    node list and returns it. Methods that reference other nodes only accept
    ``Node`` handles, so a node can only depend on nodes created before it
    and the creation order is always a valid evaluation order.

    Example:
        >>> builder = Builder()
        >>> x = builder.create_input()
        >>> y = builder.add(builder.mul(x, x), builder.create_constant(5))
        >>> fill_nodes(builder, {x.id: 3})[y.id]
        14

    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._constraints: list[Constraint] = []
        self._next_id = 0
        self._next_hint_id = 0

    def _append(
        self,
        kind: NodeKind,
        operands: tuple[int, ...] = (),
        value: int | None = None,
        hint: HintFunction | None = None,
    ) -> Node:
        node = Node(id=self._next_id, kind=kind, operands=operands, value=value, hint=hint)
        self._next_id += 1
        self._nodes.append(node)
        logger.debug("Created %r", node)
        return node

    def create_input(self) -> Node:
        """Register a node whose value is supplied at evaluation time."""
        return self._append(NodeKind.INPUT)

    def create_constant(self, value: int) -> Node:
        """Register a node holding a fixed word.

        Raises:
            ValueError: If ``value`` is not an integer in ``[0, 2**32 - 1]``.

        """
        if not is_u32(value):
            msg = f"Constant value must be an integer in [0, {U32_MAX}], got {value!r}"
            raise ValueError(msg)
        return self._append(NodeKind.CONSTANT, value=value)

    def add(self, a: Node, b: Node) -> Node:
        """Register the wrapping sum of two nodes."""
        left = _require_handle(a, "a")
        right = _require_handle(b, "b")
        return self._append(NodeKind.ADD, operands=(left.id, right.id))

    def mul(self, a: Node, b: Node) -> Node:
        """Register the wrapping product of two nodes."""
        left = _require_handle(a, "a")
        right = _require_handle(b, "b")
        return self._append(NodeKind.MUL, operands=(left.id, right.id))

    def assert_equal(self, a: Node, b: Node) -> None:
        """Require the two nodes to evaluate to the same word."""
        constraint = Constraint(left=_require_handle(a, "a").id, right=_require_handle(b, "b").id)
        self._constraints.append(constraint)
        logger.debug("Added constraint %s", constraint)

    def hint(
        self,
        dependencies: Iterable[Node],
        compute: Callable[[Mapping[int, int]], int],
    ) -> Node:
        """Register a node computed by a host-side function.

        Use this for values the Add/Mul vocabulary cannot express, such as
        quotients or square roots, and pin them down with ``assert_equal``.

        Args:
            dependencies: Nodes whose values ``compute`` needs.
            compute: Pure function called with ``{dependency_id: value}`` for
                exactly the declared dependencies. Must return a word.

        Returns:
            The new HINT node.

        Example:
            >>> q = builder.hint([b], lambda values: values[b.id] // 8)
            >>> builder.assert_equal(builder.mul(q, eight), b)

        """
        if not callable(compute):
            msg = f"compute must be callable, got {type(compute).__name__}"
            raise TypeError(msg)
        dependency_ids = tuple(_require_handle(dep, "dependencies").id for dep in dependencies)

        hint_function = HintFunction(id=self._next_hint_id, func=compute)
        self._next_hint_id += 1
        return self._append(NodeKind.HINT, operands=dependency_ids, hint=hint_function)

    @property
    def nodes(self) -> tuple[Node, ...]:
        """All nodes in creation (and evaluation) order."""
        return tuple(self._nodes)

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        """All registered equality constraints."""
        return tuple(self._constraints)

    def get_node(self, node_id: int) -> Node:
        """Get a node by id.

        Raises:
            KeyError: If no node has the given id.

        """
        if not 0 <= node_id < len(self._nodes):
            raise KeyError(node_id)
        return self._nodes[node_id]

    def get_nodes_by_kind(self, kind: NodeKind) -> list[Node]:
        """Get all nodes of a specific kind, in creation order."""
        return [node for node in self._nodes if node.kind == kind]

    def input_nodes(self) -> list[Node]:
        """Get all nodes that need a value at evaluation time."""
        return [node for node in self._nodes if node.is_input()]

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(tuple(self._nodes))

    def __repr__(self) -> str:
        return f"Builder(nodes={len(self._nodes)}, constraints={len(self._constraints)})"
