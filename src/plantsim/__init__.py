"""plantsim public façade: industrial production buildings for a host simulation."""

from .runtime.efficiency import EfficiencyModel, efficiency
from .runtime.plant_runtime import PlantRuntimeConfig, run_production_for_tick
from .runtime.production import ProductionController, ProductionPhase, TickReport
from .state import WorldState
from .world.building_types import (
    AGRICULTURAL_COMPLEX,
    BUILDING_TYPES,
    FISHERY_COMPLEX,
    BuildingKind,
    BuildingTypeConfig,
    building_type,
    get_building_type,
)
from .world.buildings import Building, BuildingLedger
from .world.ledger import ResourceLedger
from .world.workshops import Workshop, WorkshopRun, workshop

__all__ = [
    "AGRICULTURAL_COMPLEX",
    "BUILDING_TYPES",
    "Building",
    "BuildingKind",
    "BuildingLedger",
    "BuildingTypeConfig",
    "EfficiencyModel",
    "FISHERY_COMPLEX",
    "PlantRuntimeConfig",
    "ProductionController",
    "ProductionPhase",
    "ResourceLedger",
    "TickReport",
    "Workshop",
    "WorkshopRun",
    "WorldState",
    "building_type",
    "efficiency",
    "get_building_type",
    "run_production_for_tick",
    "workshop",
]
