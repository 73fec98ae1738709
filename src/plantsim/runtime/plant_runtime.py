from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from plantsim.runtime.production import TickReport
from plantsim.runtime.telemetry import LostOutput, ensure_loss_log, ensure_production_metrics
from plantsim.world.buildings import ensure_building_ledger


@dataclass(slots=True)
class PlantRuntimeConfig:
    enabled: bool = True
    record_lost_output: bool = True


@dataclass(slots=True)
class PlantRuntimeState:
    last_run_tick: int = -1
    reports: dict[str, TickReport] = field(default_factory=dict)


def run_production_for_tick(world: Any, *, tick: int) -> dict[str, TickReport]:
    """Run one production tick for every building the world holds.

    Buildings share no stock, so order only matters for the loss log; they
    are visited by sorted id to keep that log deterministic. Running the same
    tick twice is a no-op.
    """

    cfg_obj = getattr(world, "plant_cfg", None)
    cfg: PlantRuntimeConfig = cfg_obj if isinstance(cfg_obj, PlantRuntimeConfig) else PlantRuntimeConfig()
    state_obj = getattr(world, "plant_state", None)
    state: PlantRuntimeState = state_obj if isinstance(state_obj, PlantRuntimeState) else PlantRuntimeState()
    world.plant_cfg = cfg
    world.plant_state = state

    if not cfg.enabled or state.last_run_tick == tick:
        return {}
    state.last_run_tick = tick
    world.tick = tick

    buildings = ensure_building_ledger(world)
    metrics = ensure_production_metrics(world)
    loss_log = ensure_loss_log(world) if cfg.record_lost_output else None
    reports: dict[str, TickReport] = {}
    for building_id in sorted(buildings.buildings):
        report = buildings.buildings[building_id].process_workshops()
        reports[building_id] = report
        metrics.record(building_id, report)
        if report.lost and loss_log is not None:
            loss_log.append(LostOutput(tick=tick, building_id=building_id, lost=dict(sorted(report.lost.items()))))

    state.reports = reports
    return reports


__all__ = [
    "PlantRuntimeConfig",
    "PlantRuntimeState",
    "run_production_for_tick",
]
