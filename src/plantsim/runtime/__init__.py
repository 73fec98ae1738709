"""Production engine: efficiency curve, tick controller and telemetry."""

from .efficiency import EfficiencyModel, efficiency
from .production import ProductionController, ProductionPhase, TickReport, phase_for
from .telemetry import (
    DebugConfig,
    LossLog,
    LostOutput,
    ProductionMetrics,
    ensure_loss_log,
    ensure_production_metrics,
)

__all__ = [
    "DebugConfig",
    "EfficiencyModel",
    "LossLog",
    "LostOutput",
    "ProductionController",
    "ProductionMetrics",
    "ProductionPhase",
    "TickReport",
    "efficiency",
    "ensure_loss_log",
    "ensure_production_metrics",
    "phase_for",
]
