"""Completion percentage arithmetic."""

from __future__ import annotations

import math


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` half-up at ``places`` decimals.

    Unlike :func:`round`, ties always go away from zero for non-negative
    input: ``round_half_up(0.125) == 0.13``.
    """

    scale = 10.0**places
    return math.floor(value * scale + 0.5) / scale


def calculate_progress_percentage(completed: int, total: int) -> float:
    """Percentage of ``completed`` out of ``total`` tasks, two decimals.

    Returns exactly ``0.0`` for a project without tasks.
    """

    if total <= 0:
        return 0.0
    return round_half_up(completed * 100.0 / total)


__all__ = ["calculate_progress_percentage", "round_half_up"]
