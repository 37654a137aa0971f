# =============================================================================
# core/services/scoring.py - Completion Scoring
# =============================================================================
# Points decay exponentially with the time a task took, and each extra
# attempt costs 10%:
#
#   points = round(1000 * e^(-minutes / 30) * 0.9^(attempts - 1)), min 10
#
# Reference points for a first attempt:
#   0 min -> 1000, 1 min -> 967, 30 min -> 368, 60 min -> 135
# =============================================================================

import math

MAX_POINTS = 1000
MIN_POINTS = 10
DECAY_MINUTES = 30
ATTEMPT_PENALTY = 0.9


def round_half_up(value: float) -> int:
    """Round like JavaScript Math.round (halves go up), not banker's rounding."""
    return math.floor(value + 0.5)


def calculate_points(time_spent_seconds: float, attempts: int = 1) -> int:
    """
    Score a completion.

    Args:
        time_spent_seconds: Seconds from task start to completion
        attempts: Attempts used, including the successful one

    Returns:
        Integer points, never below MIN_POINTS
    """
    time_multiplier = math.exp(-(time_spent_seconds / 60) / DECAY_MINUTES)
    attempt_multiplier = ATTEMPT_PENALTY ** (max(attempts, 1) - 1)

    points = round_half_up(MAX_POINTS * time_multiplier * attempt_multiplier)
    return max(points, MIN_POINTS)
