"""
Earned-Value Core - Earned hours, performance factor and status.

PF = earned hours / actual hours. PF >= 1.0 means the crew is earning
hours faster than it burns them. A PF of math.inf marks claimed progress
with no logged time; callers must render it as a sentinel, not a number.
"""
import logging
import math
from enum import Enum

from .policy import PF_AT_RISK, PF_ON_TRACK

logger = logging.getLogger(__name__)


class PerformanceStatus(Enum):
    """Three-tier status derived from the performance factor."""
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    OVER = "over"


def calc_earned_hours(budgeted_hours: float, percent_complete: float) -> float:
    """
    Earned Hours = Budgeted Hours x % Complete.

    Percent complete is capped at 1, so earned hours never exceed the
    budget.
    """
    return budgeted_hours * min(percent_complete, 1.0)


def calc_performance_factor(earned_hours: float, actual_hours: float) -> float:
    """
    Performance Factor = Earned Hours / Actual Hours.

    Returns:
        math.inf when progress is claimed with no hours logged,
        0.0 when there are neither hours nor progress
    """
    if actual_hours == 0:
        if earned_hours > 0:
            logger.debug("Earned %.2f hrs with no actual hours logged", earned_hours)
            return math.inf
        return 0.0
    return earned_hours / actual_hours


def classify_status(
    performance_factor: float,
    actual_hours: float,
    on_track: float = PF_ON_TRACK,
    at_risk: float = PF_AT_RISK,
) -> PerformanceStatus:
    """
    Classify a code by its performance factor.

    Codes with no actual hours are not evaluated and report on_track.
    """
    if actual_hours == 0:
        return PerformanceStatus.ON_TRACK
    if performance_factor >= on_track:
        return PerformanceStatus.ON_TRACK
    if performance_factor >= at_risk:
        return PerformanceStatus.AT_RISK
    return PerformanceStatus.OVER


def format_performance_factor(performance_factor: float, decimals: int = 2) -> str:
    """Display a PF, rendering the infinite sentinel as '∞'."""
    if math.isinf(performance_factor):
        return "∞"
    return f"{performance_factor:.{decimals}f}"
