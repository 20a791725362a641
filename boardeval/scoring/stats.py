"""Statistics primitives for score aggregation.

Population statistics throughout: a board is the whole population of raters
for a cohort, not a sample of it.
"""

import math
from typing import Sequence, Tuple, List

# spread within this fraction of |mean| is float noise: "all raters agree"
RELATIVE_SPREAD_TOLERANCE = 1e-12


def mean(scores: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if not scores:
        return 0.0
    return math.fsum(scores) / len(scores)


def population_std_dev(scores: Sequence[float]) -> float:
    """Standard deviation dividing by N. 0.0 for fewer than two values."""
    n = len(scores)
    if n < 2:
        return 0.0
    m = mean(scores)
    return math.sqrt(math.fsum((x - m) ** 2 for x in scores) / n)


def classify_outliers(scores: Sequence[float], threshold_std_devs: float) -> Tuple[List[float], List[float]]:
    """Split a group into (outliers, inliers), preserving input order.

    A score is an outlier iff |score - mean| > threshold * stddev over the
    whole group. A group with no spread never has outliers.
    """
    values = list(scores)
    s = population_std_dev(values)
    m = mean(values)
    if s == 0 or s <= RELATIVE_SPREAD_TOLERANCE * abs(m):
        return [], values

    limit = threshold_std_devs * s
    outliers = []
    inliers = []
    for v in values:
        if abs(v - m) > limit:
            outliers.append(v)
        else:
            inliers.append(v)
    return outliers, inliers
