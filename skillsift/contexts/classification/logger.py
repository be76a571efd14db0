"""
Classification context logger.

Provides logging interface for classification context with automatic [classify] prefix.
"""

from loguru import logger

from skillsift.utils.text_processing import truncate_display

CONTEXT_PREFIX = "[classify]"


def _log_debug(message: str) -> None:
    """Log debug message with [classify] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_classification(phrase: str, result) -> None:
    """Log one classification decision at DEBUG level."""
    _log_debug(
        f'"{truncate_display(phrase, 60)}" -> {result.skill_type.value} '
        f"({result.confidence:.2f}, {result.source_location.value}): {result.evidence}"
    )


def log_batch_summary(batch) -> None:
    """Log bucket sizes for a classified batch."""
    _log_debug(
        f"Classified batch: {len(batch.core_skills)} core skills, {len(batch.tools)} tools, "
        f"{len(batch.candidates)} candidates, {len(batch.rejected)} rejected"
    )
