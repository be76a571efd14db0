"""
Normalization context logger.

Provides logging interface for normalization context with automatic [normalize] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[normalize]"


def _log_debug(message: str) -> None:
    """Log debug message with [normalize] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_normalization(phrase: str, result) -> None:
    """Log one normalization outcome at DEBUG level."""
    _log_debug(
        f'"{phrase}" -> {result.canonical} '
        f"({result.match_type.value}, {result.confidence:.2f})"
    )
