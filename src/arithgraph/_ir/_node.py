"""Node types for arithmetic graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class NodeKind(StrEnum):
    """The production rule of a node."""

    INPUT = auto()  # Supplied at evaluation time
    CONSTANT = auto()  # Fixed word
    ADD = auto()  # Wrapping sum of two earlier nodes
    MUL = auto()  # Wrapping product of two earlier nodes
    HINT = auto()  # Computed by a host function of earlier nodes


@dataclass(frozen=True, slots=True, eq=False)
class HintFunction:
    """A host function attached to a hint node.

    The wrapper is created once per ``Builder.hint`` call and shared by every
    copy of the node that holds it. Equality and hashing follow object
    identity, and ``id`` is what shows up in diagnostics.

    Attributes:
        id: Identifier unique within the owning builder, starting at 0.
        func: Pure function from ``{dependency_id: value}`` to a word.

    """

    id: int
    func: Callable[[Mapping[int, int]], int] = field(repr=False)

    def __call__(self, values: Mapping[int, int]) -> int:
        """Invoke the wrapped function."""
        return self.func(values)

    def __repr__(self) -> str:
        """Show only the id; the wrapped function has no useful repr."""
        return f"HintFunction({self.id})"

    def __copy__(self) -> HintFunction:
        """Share the wrapper instead of copying it."""
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> HintFunction:
        """Share the wrapper instead of copying it."""
        return self


@dataclass(frozen=True, slots=True)
class Node:
    """A node of the computation graph.

    Nodes are created by ``Builder`` and double as the handles callers pass
    back into it. They are immutable; copies share the attached hint function.

    Attributes:
        id: Creation-order index within the owning builder.
        kind: Production rule of the node.
        operands: Operand ids for ADD/MUL (left, right), dependency ids for
            HINT, empty otherwise.
        value: The fixed word of a CONSTANT node, ``None`` otherwise.
        hint: The attached function of a HINT node, ``None`` otherwise.

    Example:
        >>> builder = Builder()
        >>> x = builder.create_input()
        >>> builder.mul(x, x)
        Node(1, Mul(0, 0))

    """

    id: int
    kind: NodeKind
    operands: tuple[int, ...] = ()
    value: int | None = None
    hint: HintFunction | None = None

    @property
    def left(self) -> int:
        """Left operand id of an ADD/MUL node."""
        self._require_binary()
        return self.operands[0]

    @property
    def right(self) -> int:
        """Right operand id of an ADD/MUL node."""
        self._require_binary()
        return self.operands[1]

    def _require_binary(self) -> None:
        if self.kind not in (NodeKind.ADD, NodeKind.MUL):
            msg = f"{self} is a {self.kind} node and has no left/right operands"
            raise AttributeError(msg)

    def is_input(self) -> bool:
        """Check if this node must be supplied at evaluation time."""
        return self.kind == NodeKind.INPUT

    def describe(self) -> str:
        """Render the production rule, e.g. ``Add(3, 2)``."""
        match self.kind:
            case NodeKind.INPUT:
                return "Input"
            case NodeKind.CONSTANT:
                return f"Constant({self.value})"
            case NodeKind.ADD:
                return f"Add({self.left}, {self.right})"
            case NodeKind.MUL:
                return f"Mul({self.left}, {self.right})"
            case NodeKind.HINT:
                return f"Hint({list(self.operands)}, {self.hint!r})"
        msg = f"Unknown node kind: {self.kind}"
        raise ValueError(msg)

    def __repr__(self) -> str:
        return f"Node({self.id}, {self.describe()})"

    def __str__(self) -> str:
        return f"Node({self.id})"
