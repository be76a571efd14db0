"""
Extraction context logger.

Provides logging interface for the pipeline with automatic [extract] prefix.
All extraction modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from skillsift.utils.logger import setup_logger as _setup_logger
from skillsift.utils.timestamp import now

CONTEXT_PREFIX = "[extract]"


def setup_extraction_logger(
    log_dir: Optional[Path] = None, source: str = "cli", console_level: str = "INFO"
) -> Path:
    """
    Setup logger for extraction context.

    Args:
        log_dir: Directory for this extraction session
        source: What triggered the run, recorded in the provenance header
        console_level: Minimum level echoed to stdout

    Returns:
        Path to log file

    Example:
        from skillsift.contexts.extraction.logger import setup_extraction_logger, _log_info

        log_file = setup_extraction_logger(log_dir, source="extract_skills")
        _log_info("Starting extraction...")
    """
    return _setup_logger(
        context_name="extract",
        log_dir=log_dir,
        extra_provenance={"Source": source, "Started": now()},
        console_level=console_level,
    )


def _log_info(message: str) -> None:
    """Log info message with [extract] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [extract] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [extract] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [extract] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_stage(stage: str, count: int) -> None:
    """Log how many phrases survived a pipeline stage."""
    _log_debug(f"  {stage}: {count}")


def log_extraction_result(result) -> None:
    """
    Log the outcome of one pipeline run.

    Args:
        result: ExtractionResult from extract_skills()
    """
    _log_debug(
        f"Extracted {len(result.required)} required, {len(result.desired)} desired "
        f"({len(result.candidates)} candidates, {len(result.rejected)} rejected) "
        f"in {result.execution_time_ms:.1f}ms, confidence {result.confidence:.2f}"
    )
