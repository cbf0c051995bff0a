# bikeflow/viz/scales.py
from __future__ import annotations

import math
from typing import Sequence, Tuple

from bikeflow.config import FLOW_BUCKETS, RADIUS_RANGE_ALL, RADIUS_RANGE_FILTERED
from bikeflow.models import StationTraffic
from bikeflow.traffic.aggregate import max_total_traffic
from bikeflow.traffic.time_filter import NO_FILTER


def _signed_sqrt(x: float) -> float:
    return math.copysign(math.sqrt(abs(x)), x)


class SqrtScale:
    """
    Square-root scale: sqrt(x) mapped linearly from sqrt(domain) onto range.
    Area of a circle with this radius grows linearly with x.
    """

    def __init__(self, domain: Tuple[float, float], range: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))

    def __call__(self, x: float) -> float:
        d0, d1 = (_signed_sqrt(d) for d in self.domain)
        r0, r1 = self.range
        if d1 == d0:
            # nothing to scale against (e.g. no trips at all)
            return r0
        t = (_signed_sqrt(float(x)) - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)


class QuantizeScale:
    """
    Split a continuous domain into len(range) equal-width buckets.
    Values outside the domain land in the first / last bucket.
    """

    def __init__(self, domain: Tuple[float, float], range: Sequence):
        if not range:
            raise ValueError("QuantizeScale needs at least one output value")
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = list(range)

    def __call__(self, x: float):
        d0, d1 = self.domain
        n = len(self.range)
        if d1 == d0:
            return self.range[0]
        i = math.floor(n * (float(x) - d0) / (d1 - d0))
        return self.range[max(0, min(i, n - 1))]


def radius_range(time_filter: int) -> Tuple[float, float]:
    # filtered views have smaller counts, so they get bigger circles
    return RADIUS_RANGE_ALL if time_filter == NO_FILTER else RADIUS_RANGE_FILTERED


def radius_scale(traffic: Sequence[StationTraffic], time_filter: int) -> SqrtScale:
    return SqrtScale((0, max_total_traffic(traffic)), radius_range(time_filter))


def flow_scale() -> QuantizeScale:
    return QuantizeScale((0, 1), FLOW_BUCKETS)
