from __future__ import annotations

from dataclasses import dataclass, field

from plantsim.runtime.telemetry import DebugConfig, LossLog, ProductionMetrics
from plantsim.world.buildings import BuildingLedger


@dataclass
class WorldState:
    """Host-side container: buildings plus the telemetry they report into."""

    tick: int = 0
    buildings: BuildingLedger = field(default_factory=BuildingLedger)
    metrics: ProductionMetrics = field(default_factory=ProductionMetrics)
    debug_cfg: DebugConfig = field(default_factory=DebugConfig)
    loss_log: LossLog | None = None


__all__ = ["WorldState"]
