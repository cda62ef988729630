"""
Closed numeric ranges.

Intervals bound the accepted ray parameter during intersection queries and
clamp color channels before they are quantized to bytes.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """The closed range [min, max]. An interval with min > max is empty."""
    min: float = math.inf
    max: float = -math.inf

    def size(self) -> float:
        return self.max - self.min

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        """Strict containment: the endpoints themselves are outside."""
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def with_max(self, new_max: float) -> Interval:
        """Copy of this interval with the upper bound replaced."""
        return Interval(self.min, new_max)


Interval.EMPTY = Interval(math.inf, -math.inf)
Interval.UNIVERSE = Interval(-math.inf, math.inf)

# Lower bound for secondary-ray hits, suppresses self-intersection ("acne")
HIT_EPSILON = 1e-3

# Color channels are clamped here before scaling by 256
INTENSITY = Interval(0.0, 0.999)
