"""Production buildings and the ledger a host simulation keeps them in."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from hashlib import sha256
from typing import Any, Dict, MutableMapping

from plantsim.runtime.production import ProductionController, ProductionPhase, TickReport, phase_for
from plantsim.world.building_types import BuildingKind, BuildingTypeConfig, get_building_type
from plantsim.world.ledger import ResourceLedger
from plantsim.world.resources import ResourceKey, resource_from_key
from plantsim.world.workshops import Workshop


class Building:
    """A production building driven by one generic engine.

    The building type supplies workshops, capacities, staffing limits and the
    efficiency curve. Starting stock is loaded in declaration order, each
    entry trimmed to whatever space is left.
    """

    def __init__(self, config: BuildingTypeConfig | BuildingKind | str, building_id: str = ""):
        if not isinstance(config, BuildingTypeConfig):
            config = get_building_type(config)
        self.config = config
        self.building_id = building_id or config.kind.value.lower()
        self.max_workers = config.max_workers
        self.workers_count = 0
        self.materials = ResourceLedger(capacity=config.max_material_storage)
        self.products = ResourceLedger(capacity=config.max_product_storage)
        self.controller = ProductionController(
            config.workshops,
            config.efficiency,
            material_keys=config.materials,
            product_keys=config.products,
        )
        self.last_report: TickReport | None = None
        self._load_starting_materials()

    def _load_starting_materials(self) -> None:
        for key, qty in self.config.starting_materials:
            amount = min(qty, self.materials.free_space())
            if amount > 0:
                self.materials.add(key, amount)

    @property
    def kind(self) -> BuildingKind:
        return self.config.kind

    @property
    def workshops(self) -> tuple[Workshop, ...]:
        return self.controller.workshops

    @property
    def max_material_storage(self) -> int:
        return self.materials.capacity

    @property
    def max_product_storage(self) -> int:
        return self.products.capacity

    @property
    def production_efficiency(self) -> float:
        return self.controller.efficiency(self.workers_count, self.max_workers)

    @property
    def phase(self) -> ProductionPhase:
        return phase_for(self.workers_count, self.production_efficiency)

    def set_workers_count(self, count: int) -> None:
        self.workers_count = max(0, min(int(count), self.max_workers))

    def add_material(self, material: object, amount: int) -> bool:
        key = resource_from_key(material)
        if key is None or not self.config.is_material(key):
            return False
        return self.materials.add(key, amount)

    def consume_product(self, product: object, amount: int) -> bool:
        key = resource_from_key(product)
        if key is None or not self.config.is_product(key):
            return False
        return self.products.consume(key, amount)

    def process_workshops(self) -> TickReport:
        report = self.controller.run_tick(
            self.materials,
            self.products,
            workers=self.workers_count,
            max_workers=self.max_workers,
        )
        self.last_report = report
        return report

    def full_production_cycle(self) -> TickReport:
        return self.process_workshops()

    def on_building_placed(self) -> TickReport:
        return self.full_production_cycle()

    def total_material_storage(self) -> int:
        return self.materials.total()

    def total_product_storage(self) -> int:
        return self.products.total()

    def get_material_storage(self) -> Dict[ResourceKey, int]:
        return self.materials.as_dict()

    def get_production_output(self) -> Dict[ResourceKey, int]:
        return self.products.as_dict()

    def production_info(self, month: int | None = None) -> Dict[str, Any]:
        """Status snapshot for UI/economy consumers.

        The type's cosmetic bonus is reported for display only; production
        never applies it.
        """

        if month is None:
            month = date.today().month
        return {
            "display_name": self.config.display_name,
            "workers_count": self.workers_count,
            "max_workers": self.max_workers,
            "production_efficiency": self.production_efficiency,
            "phase": self.phase.value,
            "total_material_storage": self.total_material_storage(),
            "max_material_storage": self.max_material_storage,
            "total_product_storage": self.total_product_storage(),
            "max_product_storage": self.max_product_storage,
            "active_workshops": len(self.workshops),
            self.config.bonus_label: self.config.bonus(month),
        }

    def signature(self) -> str:
        canonical = (
            self.building_id,
            self.kind.value,
            self.workers_count,
            self.materials.signature(),
            self.products.signature(),
        )
        return sha256(str(canonical).encode("utf-8")).hexdigest()


@dataclass(slots=True)
class BuildingLedger:
    buildings: MutableMapping[str, Building] = field(default_factory=dict)

    def add(self, building: Building) -> None:
        existing = self.buildings.get(building.building_id)
        if existing is not None and existing is not building:
            raise ValueError(f"Building id {building.building_id} already registered")
        self.buildings[building.building_id] = building

    def get(self, building_id: str) -> Building | None:
        return self.buildings.get(building_id)

    def list_by_kind(self, kind: BuildingKind) -> list[Building]:
        return [b for b in self.buildings.values() if b.kind == kind]

    def signature(self) -> str:
        canonical = {bid: building.signature() for bid, building in sorted(self.buildings.items())}
        return sha256(str(canonical).encode("utf-8")).hexdigest()


def ensure_building_ledger(world: Any) -> BuildingLedger:
    ledger = getattr(world, "buildings", None)
    if isinstance(ledger, BuildingLedger):
        return ledger
    ledger = BuildingLedger()
    world.buildings = ledger
    return ledger


__all__ = [
    "Building",
    "BuildingLedger",
    "ensure_building_ledger",
]
