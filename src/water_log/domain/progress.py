"""Read model for today's progress."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressSnapshot:
    """Derived values shown by the progress ring."""

    total_intake_ml: float
    goal_ml: float
    progress: float
    percent: int
    remaining_ml: float
    goal_reached: bool


def compute_progress(total_intake_ml: float, goal_ml: float) -> float:
    """Return the share of the goal reached, clamped to 1.0."""
    if goal_ml <= 0:
        return 0.0
    return min(total_intake_ml / goal_ml, 1.0)


def build_snapshot(total_intake_ml: float, goal_ml: float) -> ProgressSnapshot:
    """Bundle totals and progress for presentation."""
    progress = compute_progress(total_intake_ml, goal_ml)
    return ProgressSnapshot(
        total_intake_ml=total_intake_ml,
        goal_ml=goal_ml,
        progress=progress,
        percent=round(progress * 100),
        remaining_ml=max(goal_ml - total_intake_ml, 0.0),
        goal_reached=goal_ml > 0 and total_intake_ml >= goal_ml,
    )
