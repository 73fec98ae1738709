"""Production counters and the bounded log of output lost to full storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from plantsim.runtime.config import DEFAULT_DEBUG_LEVEL, LOSS_LOG_CAPACITY
from plantsim.runtime.production import TickReport
from plantsim.world.resources import ResourceKey


@dataclass(slots=True)
class ProductionMetrics:
    ticks: int = 0
    idle_ticks: int = 0
    units_committed: int = 0
    units_lost: int = 0
    lost_by_product: dict[ResourceKey, int] = field(default_factory=dict)
    efficiency_by_building: dict[str, float] = field(default_factory=dict)

    def record(self, building_id: str, report: TickReport) -> None:
        self.ticks += 1
        if report.idle:
            self.idle_ticks += 1
            return
        self.units_committed += report.units_committed
        self.units_lost += report.units_lost
        for key, qty in report.lost.items():
            self.lost_by_product[key] = self.lost_by_product.get(key, 0) + qty
        self.efficiency_by_building[building_id] = round(report.efficiency, 3)


@dataclass(frozen=True, slots=True)
class LostOutput:
    tick: int
    building_id: str
    lost: Mapping[ResourceKey, int]


@dataclass(slots=True)
class LossLog:
    capacity: int = LOSS_LOG_CAPACITY
    entries: list[LostOutput] = field(default_factory=list)

    def append(self, entry: LostOutput) -> None:
        self.entries.append(entry)
        limit = max(1, self.capacity)
        if len(self.entries) > limit:
            self.entries = self.entries[-limit:]

    def tail(self, n: int = 10) -> list[LostOutput]:
        return list(self.entries[-max(0, n) :])


@dataclass(slots=True)
class DebugConfig:
    level: str = DEFAULT_DEBUG_LEVEL

    def keeps_loss_log(self) -> bool:
        return self.level in {"standard", "verbose"}


def ensure_production_metrics(world: Any) -> ProductionMetrics:
    metrics = getattr(world, "metrics", None)
    if not isinstance(metrics, ProductionMetrics):
        metrics = ProductionMetrics()
        world.metrics = metrics
    return metrics


def ensure_loss_log(world: Any) -> LossLog | None:
    cfg = getattr(world, "debug_cfg", None)
    if not isinstance(cfg, DebugConfig):
        cfg = DebugConfig()
        world.debug_cfg = cfg
    if not cfg.keeps_loss_log():
        return None
    log = getattr(world, "loss_log", None)
    if not isinstance(log, LossLog):
        log = LossLog()
        world.loss_log = log
    return log


__all__ = [
    "DebugConfig",
    "LossLog",
    "LostOutput",
    "ProductionMetrics",
    "ensure_loss_log",
    "ensure_production_metrics",
]
