"""Static building-type data consumed by the generic production engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Mapping, Sequence

from plantsim.runtime.efficiency import EfficiencyModel
from plantsim.world.resources import ResourceKey, normalize_keys, resource_from_key
from plantsim.world.workshops import Workshop, workshop


class BuildingKind(str, Enum):
    AGRICULTURAL_COMPLEX = "AGRICULTURAL_COMPLEX"
    FISHERY_COMPLEX = "FISHERY_COMPLEX"


def coerce_building_kind(raw: object) -> BuildingKind | None:
    if isinstance(raw, BuildingKind):
        return raw
    if isinstance(raw, str):
        try:
            return BuildingKind[raw.upper()]
        except KeyError:
            for kind in BuildingKind:
                if raw.lower() == kind.value.lower():
                    return kind
    return None


def _no_bonus(month: int) -> float:
    return 1.0


@dataclass(frozen=True, slots=True)
class BuildingTypeConfig:
    kind: BuildingKind
    display_name: str
    materials: tuple[ResourceKey, ...]
    products: tuple[ResourceKey, ...]
    workshops: tuple[Workshop, ...]
    max_material_storage: int
    max_product_storage: int
    max_workers: int
    efficiency: EfficiencyModel
    starting_materials: tuple[tuple[ResourceKey, int], ...] = ()
    bonus_label: str = "bonus"
    bonus: Callable[[int], float] = field(default=_no_bonus)

    def __post_init__(self) -> None:
        overlap = set(self.materials) & set(self.products)
        if overlap:
            raise ValueError(f"{self.kind.value}: keys both material and product: {sorted(overlap)}")
        if min(self.max_material_storage, self.max_product_storage, self.max_workers) < 0:
            raise ValueError(f"{self.kind.value}: capacities must be non-negative")
        known = set(self.materials) | set(self.products)
        for shop in self.workshops:
            unknown_inputs = set(shop.inputs) - known
            if unknown_inputs:
                raise ValueError(f"{shop.name}: unknown inputs {sorted(unknown_inputs)}")
            stray_outputs = set(shop.outputs) - set(self.products)
            if stray_outputs:
                raise ValueError(f"{shop.name}: outputs are not products {sorted(stray_outputs)}")
        for key, _ in self.starting_materials:
            if key not in self.materials:
                raise ValueError(f"{self.kind.value}: starting stock {key!r} is not a material")

    def is_material(self, key: object) -> bool:
        return resource_from_key(key) in self.materials

    def is_product(self, key: object) -> bool:
        return resource_from_key(key) in self.products


def building_type(
    *,
    kind: BuildingKind,
    display_name: str,
    materials: Sequence[object],
    products: Sequence[object],
    workshops: Sequence[Workshop],
    max_material_storage: int,
    max_product_storage: int,
    max_workers: int,
    efficiency_base: float,
    efficiency_range: float,
    starting_materials: Mapping[object, int] | None = None,
    bonus_label: str = "bonus",
    bonus: Callable[[int], float] = _no_bonus,
) -> BuildingTypeConfig:
    start: list[tuple[ResourceKey, int]] = []
    for key, qty in (starting_materials or {}).items():
        resource = resource_from_key(key)
        if resource is not None and qty > 0:
            start.append((resource, int(qty)))
    return BuildingTypeConfig(
        kind=kind,
        display_name=display_name,
        materials=normalize_keys(materials),
        products=normalize_keys(products),
        workshops=tuple(workshops),
        max_material_storage=max_material_storage,
        max_product_storage=max_product_storage,
        max_workers=max_workers,
        efficiency=EfficiencyModel(base=efficiency_base, range=efficiency_range),
        starting_materials=tuple(start),
        bonus_label=bonus_label,
        bonus=bonus,
    )


def seasonal_bonus(month: int) -> float:
    # March through September is the growing season.
    return 1.2 if 3 <= month <= 9 else 0.8


def fleet_efficiency(month: int) -> float:
    if 5 <= month <= 9:
        return 1.0
    if month in (3, 4, 10):
        return 0.85
    return 0.7


AGRICULTURAL_COMPLEX = building_type(
    kind=BuildingKind.AGRICULTURAL_COMPLEX,
    display_name="Agricultural Complex",
    materials=("Seeds", "Fertilizer", "Water", "AnimalFeed"),
    products=("Wheat", "Vegetables", "Fruits", "Milk", "Eggs", "Meat", "ProcessedFood"),
    workshops=(
        workshop(
            name="Crop Workshop",
            cycle_time=6,
            inputs={"Seeds": 10, "Fertilizer": 5, "Water": 8},
            outputs={"Wheat": 15},
        ),
        workshop(
            name="Vegetable Workshop",
            cycle_time=5,
            inputs={"Seeds": 8, "Fertilizer": 4, "Water": 6},
            outputs={"Vegetables": 12},
        ),
        workshop(
            name="Orchard Workshop",
            cycle_time=8,
            inputs={"Seeds": 6, "Fertilizer": 3, "Water": 5},
            outputs={"Fruits": 10},
        ),
        workshop(
            name="Dairy Workshop",
            cycle_time=7,
            inputs={"AnimalFeed": 12, "Water": 4},
            outputs={"Milk": 8, "Eggs": 6},
        ),
        workshop(
            name="Meat Workshop",
            cycle_time=10,
            inputs={"AnimalFeed": 15, "Water": 3},
            outputs={"Meat": 5},
        ),
        workshop(
            name="Food Processing Workshop",
            cycle_time=9,
            inputs={"Wheat": 8, "Milk": 4, "Vegetables": 6},
            outputs={"ProcessedFood": 10},
        ),
    ),
    max_material_storage=2000,
    max_product_storage=1000,
    max_workers=15,
    efficiency_base=0.3,
    efficiency_range=0.7,
    starting_materials={"Seeds": 600, "Fertilizer": 400, "Water": 800, "AnimalFeed": 300},
    bonus_label="seasonal_bonus",
    bonus=seasonal_bonus,
)


FISHERY_COMPLEX = building_type(
    kind=BuildingKind.FISHERY_COMPLEX,
    display_name="Fishery Complex",
    materials=("Fuel", "FishingGear", "Ice", "Salt"),
    products=("FreshFish", "FrozenFish", "CannedFish", "FishFillets", "FishOil", "FishMeal", "Seafood"),
    workshops=(
        workshop(
            name="Fishing Workshop",
            cycle_time=8,
            inputs={"Fuel": 10, "FishingGear": 2},
            outputs={"FreshFish": 20},
        ),
        workshop(
            name="Fish Freezing Workshop",
            cycle_time=6,
            inputs={"FreshFish": 10, "Ice": 8},
            outputs={"FrozenFish": 10},
        ),
        workshop(
            name="Canning Workshop",
            cycle_time=10,
            inputs={"FreshFish": 8, "Salt": 4},
            outputs={"CannedFish": 6},
        ),
        workshop(
            name="Fish Filleting Workshop",
            cycle_time=7,
            inputs={"FreshFish": 6, "Ice": 2},
            outputs={"FishFillets": 4, "Seafood": 2},
        ),
        workshop(
            name="Byproduct Workshop",
            cycle_time=9,
            inputs={"FreshFish": 5, "Fuel": 2},
            outputs={"FishOil": 2, "FishMeal": 4},
        ),
    ),
    max_material_storage=1500,
    max_product_storage=800,
    max_workers=12,
    efficiency_base=0.4,
    efficiency_range=0.6,
    starting_materials={"Fuel": 500, "FishingGear": 300, "Ice": 400, "Salt": 200},
    bonus_label="fleet_efficiency",
    bonus=fleet_efficiency,
)


BUILDING_TYPES: dict[BuildingKind, BuildingTypeConfig] = {
    AGRICULTURAL_COMPLEX.kind: AGRICULTURAL_COMPLEX,
    FISHERY_COMPLEX.kind: FISHERY_COMPLEX,
}


def get_building_type(kind: BuildingKind | str) -> BuildingTypeConfig:
    resolved = coerce_building_kind(kind)
    if resolved is None or resolved not in BUILDING_TYPES:
        raise KeyError(f"unknown building type: {kind!r}")
    return BUILDING_TYPES[resolved]


__all__ = [
    "AGRICULTURAL_COMPLEX",
    "BUILDING_TYPES",
    "BuildingKind",
    "BuildingTypeConfig",
    "FISHERY_COMPLEX",
    "building_type",
    "coerce_building_kind",
    "fleet_efficiency",
    "get_building_type",
    "seasonal_bonus",
]
