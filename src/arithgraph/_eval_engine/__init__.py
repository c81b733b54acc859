"""Evaluation engine module for arithgraph.

Pure functions over a built graph:
- fill_nodes: Compute every node value from the input values
- check_constraints: Check computed values against the equality constraints
- unsatisfied_constraints: List the constraints that do not hold
- evaluate_graph: Both of the above, returning an EvaluationResult
"""

from ._engine import EvaluationResult, evaluate_graph, fill_nodes
from ._verify import check_constraints, unsatisfied_constraints

__all__ = [
    "EvaluationResult",
    "check_constraints",
    "evaluate_graph",
    "fill_nodes",
    "unsatisfied_constraints",
]
