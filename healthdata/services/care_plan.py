"""Care-plan goal progress aggregation."""

from __future__ import annotations

from collections import defaultdict

from healthdata.api.models import ProgressEntry


def format_progress_data(progress: list[ProgressEntry]) -> dict[str, float]:
    """Map each goal to its most recent value.

    When two entries share the latest date, the one seen first is kept.
    """
    latest: dict[str, ProgressEntry] = {}
    for entry in progress:
        current = latest.get(entry.goal_id)
        if current is None or entry.date > current.date:
            latest[entry.goal_id] = entry
    return {goal_id: entry.value for goal_id, entry in latest.items()}


def average_progress(progress: list[ProgressEntry]) -> dict[str, float]:
    """Mean value per goal across all entries."""
    values: dict[str, list[float]] = defaultdict(list)
    for entry in progress:
        values[entry.goal_id].append(entry.value)
    return {goal_id: sum(vals) / len(vals) for goal_id, vals in values.items()}
