"""One production tick over a building's workshop chain.

A tick works on a merged snapshot of material and product stock. Workshops
run in registration order and draw from that shared snapshot, so an earlier
workshop can starve a later one. What a workshop produces is collected on the
side and only reaches storage at commit time, so a chain ``A -> P -> B``
completes one tick later unless ``P`` was already in storage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Sequence

from plantsim.runtime.efficiency import EfficiencyModel
from plantsim.world.ledger import ResourceLedger
from plantsim.world.resources import ResourceKey
from plantsim.world.workshops import Workshop, merge_into

logger = logging.getLogger(__name__)


class ProductionPhase(str, Enum):
    IDLE = "IDLE"
    PRODUCING = "PRODUCING"


def phase_for(workers: int, efficiency: float) -> ProductionPhase:
    if workers <= 0 or efficiency <= 0:
        return ProductionPhase.IDLE
    return ProductionPhase.PRODUCING


@dataclass(slots=True)
class TickReport:
    phase: ProductionPhase
    efficiency: float = 0.0
    runs: list[tuple[str, bool]] = field(default_factory=list)
    consumed: Dict[ResourceKey, int] = field(default_factory=dict)
    produced: Dict[ResourceKey, int] = field(default_factory=dict)
    committed: Dict[ResourceKey, int] = field(default_factory=dict)
    lost: Dict[ResourceKey, int] = field(default_factory=dict)

    @property
    def idle(self) -> bool:
        return self.phase is ProductionPhase.IDLE

    @property
    def units_committed(self) -> int:
        return sum(self.committed.values())

    @property
    def units_lost(self) -> int:
        return sum(self.lost.values())

    def blocked_workshops(self) -> list[str]:
        return [name for name, ok in self.runs if not ok]


class ProductionController:
    def __init__(
        self,
        workshops: Sequence[Workshop],
        efficiency_model: EfficiencyModel,
        *,
        material_keys: Iterable[ResourceKey],
        product_keys: Iterable[ResourceKey],
    ):
        self.workshops = tuple(workshops)
        self.efficiency_model = efficiency_model
        self.material_keys = frozenset(material_keys)
        self.product_keys = frozenset(product_keys)

    def efficiency(self, workers: int, max_workers: int) -> float:
        return self.efficiency_model.for_workers(workers, max_workers)

    def run_tick(
        self,
        materials: ResourceLedger,
        products: ResourceLedger,
        *,
        workers: int,
        max_workers: int,
    ) -> TickReport:
        factor = self.efficiency(workers, max_workers)
        phase = phase_for(workers, factor)
        if phase is ProductionPhase.IDLE:
            return TickReport(phase=phase)

        report = TickReport(phase=phase, efficiency=factor)
        snapshot = self._snapshot(materials, products)
        for workshop in self.workshops:
            run = workshop.try_run(snapshot)
            report.runs.append((workshop.name, run.ok))
            if not run.ok:
                continue
            merge_into(report.consumed, run.consumed)
            merge_into(report.produced, run.produced)

        scaled = self.efficiency_model.scale(report.produced, factor)
        self._commit(materials, products, snapshot, scaled, report)
        logger.debug(
            "tick efficiency=%.3f ran=%d/%d committed=%d lost=%d",
            factor,
            sum(1 for _, ok in report.runs if ok),
            len(report.runs),
            report.units_committed,
            report.units_lost,
        )
        return report

    def _snapshot(self, materials: ResourceLedger, products: ResourceLedger) -> Dict[ResourceKey, int]:
        snapshot = materials.as_dict()
        for key, qty in products.items.items():
            snapshot[key] = snapshot.get(key, 0) + qty
        return snapshot

    def _commit(
        self,
        materials: ResourceLedger,
        products: ResourceLedger,
        snapshot: Dict[ResourceKey, int],
        scaled: Dict[ResourceKey, int],
        report: TickReport,
    ) -> None:
        materials.replace_all({key: qty for key, qty in snapshot.items() if key in self.material_keys})

        # Finished goods fed into a workshop leave the products ledger.
        for key in list(products):
            used = products.get(key) - snapshot.get(key, 0)
            if used > 0:
                products.consume(key, used)

        for key, qty in scaled.items():
            if key not in self.product_keys:
                continue
            committed = products.clamp_add(key, qty)
            if committed > 0:
                report.committed[key] = committed
            if committed < qty:
                report.lost[key] = qty - committed
                logger.info("product storage full: lost %d units of %s", qty - committed, key)


__all__ = [
    "ProductionController",
    "ProductionPhase",
    "TickReport",
    "phase_for",
]
