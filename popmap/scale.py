from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .config import POPULATION_BREAKS, POPULATION_COLORS


class ThresholdScale:
    """
    Step function from a number to one of len(domain) + 1 colors.

    A value equal to a breakpoint falls in the bucket that starts at it:
    with domain [10, 20], 10 -> range[1] and 20 -> range[2].
    """

    def __init__(self, domain: Sequence[float], range: Sequence[str]):
        domain = np.asarray(domain, dtype=float)
        if domain.ndim != 1:
            raise ValueError("Threshold domain must be a flat list of numbers")
        if np.any(np.diff(domain) < 0):
            raise ValueError("Threshold domain must be ascending")
        if len(range) != len(domain) + 1:
            raise ValueError(
                f"Threshold scale needs {len(domain) + 1} colors for "
                f"{len(domain)} breakpoints, got {len(range)}"
            )
        self.domain = domain
        self.range = list(range)

    def bucket(self, value: float) -> int:
        return int(np.searchsorted(self.domain, value, side="right"))

    def __call__(self, value: float) -> str:
        return self.range[self.bucket(value)]

    def buckets(self) -> list[tuple[float | None, float | None, str]]:
        """(lower, upper, color) per bucket; open ends are None."""
        edges = [None] + [float(b) for b in self.domain] + [None]
        return [(edges[i], edges[i + 1], color) for i, color in enumerate(self.range)]


def population_scale() -> ThresholdScale:
    return ThresholdScale(POPULATION_BREAKS, POPULATION_COLORS)
