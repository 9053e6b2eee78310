"""
Outlier detection and national-average comparison for bid rates.
"""

import math
from typing import List, Optional

from freightbid.app.schemas.analytics import NationalComparison

MIN_VALUES_FOR_OUTLIER = 3
OUTLIER_STD_DEVS = 2


def population_std_dev(values: List[float]) -> float:
    """Standard deviation over the whole population (divides by n)."""
    mean = sum(values) / len(values)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


def is_route_outlier(values: List[float]) -> bool:
    """
    Flag a route whose average rate sits more than two standard deviations
    from the mean of its rates.

    Needs at least three values. The route average and the mean are the
    same figure, so this never flags in practice.
    """
    if len(values) < MIN_VALUES_FOR_OUTLIER:
        return False

    average = sum(values) / len(values)
    mean = average
    std_dev = population_std_dev(values)

    return abs(average - mean) > OUTLIER_STD_DEVS * std_dev


def comparison_label(percent: float) -> str:
    if percent > 0:
        return "above"
    if percent < 0:
        return "below"
    return "at"


def compare_to_national(
    weighted_average: Optional[float],
    national_average: Optional[float],
) -> Optional[NationalComparison]:
    """
    Compare a bid's weighted per-mile average against the national figure.

    Returns None when either side is missing (or the national figure is not
    positive), so callers simply omit the comparison.
    """
    if weighted_average is None or national_average is None or national_average <= 0:
        return None

    percent = (weighted_average - national_average) / national_average * 100
    return NationalComparison(comparison_percent=percent, label=comparison_label(percent))
