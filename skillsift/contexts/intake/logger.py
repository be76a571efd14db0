"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_strategy_counts(counts: dict[str, int], total: int) -> None:
    """Log how many phrases each extraction strategy contributed."""
    breakdown = ", ".join(f"{name}: {count}" for name, count in counts.items())
    _log_debug(f"Extracted {total} unique phrases ({breakdown})")
