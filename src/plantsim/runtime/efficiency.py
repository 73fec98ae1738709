from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Mapping

from plantsim.runtime.config import EFFICIENCY_SUM_TOLERANCE
from plantsim.world.resources import ResourceKey


def efficiency(workers: int, max_workers: int, base: float, range_: float) -> float:
    if workers <= 0 or max_workers <= 0:
        return 0.0
    return base + (workers / float(max_workers)) * range_


@dataclass(frozen=True, slots=True)
class EfficiencyModel:
    """Worker-driven output multiplier.

    ``base`` is the floor reached by a single worker's share of ``range``;
    ``base + range`` must equal 1.0 so a fully staffed building runs at 100%.
    """

    base: float
    range: float

    def __post_init__(self) -> None:
        if self.base < 0 or self.range < 0:
            raise ValueError(f"efficiency terms must be non-negative: base={self.base} range={self.range}")
        if abs(self.base + self.range - 1.0) > EFFICIENCY_SUM_TOLERANCE:
            raise ValueError(f"efficiency base + range must equal 1.0, got {self.base + self.range}")

    def for_workers(self, workers: int, max_workers: int) -> float:
        return efficiency(workers, max_workers, self.base, self.range)

    def scale(self, produced: Mapping[ResourceKey, int], factor: float) -> Dict[ResourceKey, int]:
        if factor >= 1.0:
            return {key: int(qty) for key, qty in produced.items() if qty > 0}
        scaled: Dict[ResourceKey, int] = {}
        for key, qty in produced.items():
            amount = math.floor(qty * factor)
            if amount > 0:
                scaled[key] = amount
        return scaled


__all__ = ["EfficiencyModel", "efficiency"]
