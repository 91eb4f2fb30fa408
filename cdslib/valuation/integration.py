"""
Integration schedules built from the union of curve nodes.

Between consecutive points of an integration schedule both the discount
curve and the credit curve are log-linear, so each leg integral has a closed
form on every sub-interval.
"""

from typing import List, Sequence

import numpy as np

# Points closer than half a day are merged
KNOT_TOLERANCE = 1.0 / 730.0


def truncate_set_exclusive(lower: float, upper: float, points: Sequence[float]) -> List[float]:
    """Sorted points strictly between ``lower`` and ``upper``."""
    if lower > upper:
        return []
    arr = np.sort(np.asarray(points, dtype=float))
    return [float(p) for p in arr[(arr > lower) & (arr < upper)]]


def integration_points(
    start: float, end: float, discount_nodes: Sequence[float], credit_nodes: Sequence[float]
) -> List[float]:
    """Integration schedule from ``start`` to ``end`` through the nodes of both curves."""
    inner = sorted(
        truncate_set_exclusive(start, end, discount_nodes)
        + truncate_set_exclusive(start, end, credit_nodes)
    )
    result = [start]
    for point in inner:
        if abs(point - result[-1]) > KNOT_TOLERANCE:
            result.append(point)

    # The end point replaces a kept node that is too close to it
    if abs(end - result[-1]) > KNOT_TOLERANCE:
        result.append(end)
    else:
        result[-1] = end
    return result


def truncate_set_inclusive(lower: float, upper: float, points: Sequence[float]) -> List[float]:
    """Points of ``points`` inside [lower, upper], with both ends included.

    Interior points within the knot tolerance of an end are absorbed into it.
    """
    inner = truncate_set_exclusive(lower, upper, points)
    if not inner:
        return [lower, upper]

    result = []
    if abs(lower - inner[0]) > KNOT_TOLERANCE:
        result.append(lower)
    result.extend(inner)
    if abs(upper - inner[-1]) > KNOT_TOLERANCE:
        result.append(upper)
    result[0] = lower
    result[-1] = upper
    return result
