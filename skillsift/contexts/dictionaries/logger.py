"""
Dictionaries context logger.

Provides logging interface for dictionary loading with automatic [dictionaries] prefix.
All dictionaries modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[dictionaries]"


def _log_info(message: str) -> None:
    """Log info message with [dictionaries] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [dictionaries] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [dictionaries] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_dictionaries_loaded(dictionaries, source: Path) -> None:
    """Log the size of each part of a freshly loaded snapshot."""
    _log_info(f"Loaded dictionaries from {source}")
    _log_debug(
        f"  skills: {len(dictionaries.skills_taxonomy)}, "
        f"tools: {len(dictionaries.tools_dictionary)}, "
        f"forced core skills: {len(dictionaries.forced_core_skills)}, "
        f"aliases: {len(dictionaries.alias_map)}, "
        f"canonical rules: {len(dictionaries.canonical_rules)}, "
        f"synonym groups: {len(dictionaries.synonym_groups)}"
    )
