"""Analytics utilities for microinvest."""

from .metrics import GoalStatus, category_breakdown, goal_progress, projection_frame, total_contributed

__all__ = [
    "GoalStatus",
    "goal_progress",
    "category_breakdown",
    "projection_frame",
    "total_contributed",
]
