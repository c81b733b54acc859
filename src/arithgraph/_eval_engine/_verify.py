"""Constraint verification against computed node values."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from arithgraph._builder import Builder
    from arithgraph._ir import Constraint

logger = logging.getLogger(__name__)


def _holds(constraint: Constraint, values: Mapping[int, int]) -> bool:
    left_value = values.get(constraint.left)
    right_value = values.get(constraint.right)
    if left_value is None or right_value is None:
        # Missing values for constrained nodes
        return False
    return left_value == right_value


def check_constraints(builder: Builder, values: Mapping[int, int]) -> bool:
    """Check that every constraint of the graph holds.

    A constraint on a node that has no value in ``values`` does not hold.
    Stops at the first constraint that fails.

    Args:
        builder: The graph whose constraints are checked.
        values: Node values, typically from ``fill_nodes``.

    Returns:
        True if every constraint holds (including when there are none).

    """
    for constraint in builder.constraints:
        if not _holds(constraint, values):
            logger.debug("Constraint %s does not hold", constraint)
            return False
    return True


def unsatisfied_constraints(builder: Builder, values: Mapping[int, int]) -> list[Constraint]:
    """Get every constraint that does not hold, in registration order."""
    return [constraint for constraint in builder.constraints if not _holds(constraint, values)]
