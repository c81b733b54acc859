"""Intermediate Representation (IR) module for arithgraph.

Pure data structures describing an arithmetic graph:
- NodeKind: Enum for node production rules (INPUT, CONSTANT, ADD, MUL, HINT)
- Node: Immutable graph node, also used as the caller-side handle
- HintFunction: Shared wrapper around a host-side hint function
- Constraint: Equality assertion between two node ids
"""

from ._constraint import Constraint
from ._node import HintFunction, Node, NodeKind

__all__ = ["Constraint", "HintFunction", "Node", "NodeKind"]
