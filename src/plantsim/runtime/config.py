"""Runtime configuration constants."""

EFFICIENCY_SUM_TOLERANCE: float = 1e-9
LOSS_LOG_CAPACITY: int = 200  # lost-output entries kept when the debug level enables the log
DEFAULT_DEBUG_LEVEL: str = "minimal"
