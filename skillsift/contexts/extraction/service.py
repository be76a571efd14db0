"""
Long-lived skill extraction service.

Wraps extract_skills() for hosts that analyze many job descriptions:
- Holds the current dictionary snapshot and prebuilt fuzzy matchers
- Caches results (LRU, keyed by a SHA-256 of the text), handing out copies
- Hot-reloads dictionaries by building a new snapshot and swapping the
  reference; in-flight analyses keep the snapshot they started with
"""

import hashlib
import threading
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from skillsift.contexts.dictionaries.dictionary_data_structures import (
    ExtractionConfig,
    SkillDictionaries,
)
from skillsift.contexts.dictionaries.exceptions import DictionaryLoadError
from skillsift.contexts.dictionaries.loader import load_dictionaries, load_extraction_config
from skillsift.contexts.extraction.extraction_data_structure import ExtractionResult
from skillsift.contexts.extraction.logger import (
    _log_debug,
    _log_info,
    _log_success,
    _log_warning,
)
from skillsift.contexts.extraction.pipeline import FuzzyMatchers, extract_skills
from skillsift.utils.timestamp import now_exact


@dataclass(frozen=True)
class _Snapshot:
    """Everything one analysis reads; replaced as a whole on reload."""

    dictionaries: SkillDictionaries
    fuzzy_matchers: FuzzyMatchers

    @classmethod
    def build(cls, dictionaries: SkillDictionaries) -> "_Snapshot":
        return cls(dictionaries=dictionaries, fuzzy_matchers=FuzzyMatchers.build(dictionaries))


def text_cache_key(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class SkillExtractionService:
    """
    Cached, reloadable front end to the extraction pipeline.

    Args:
        dictionaries: Initial snapshot (loaded from dictionaries_path when None)
        config: Pipeline thresholds (loaded from extraction.yaml when None)
        dictionaries_path: Directory used by load_dictionaries() and reloads

    Raises:
        DictionaryLoadError: If dictionaries must be loaded and loading fails

    Example:
        >>> service = SkillExtractionService()
        >>> result = service.analyze(job_text)
        >>> service.get_stats()["cache_hits"]
        0
    """

    def __init__(
        self,
        dictionaries: Optional[SkillDictionaries] = None,
        config: Optional[ExtractionConfig] = None,
        dictionaries_path: Optional[Path] = None,
    ):
        self.dictionaries_path = dictionaries_path
        self.config = config or load_extraction_config()

        if dictionaries is None:
            dictionaries = load_dictionaries(dictionaries_path)
        self._snapshot = _Snapshot.build(dictionaries)

        self._cache: OrderedDict[str, ExtractionResult] = OrderedDict()
        self._lock = threading.Lock()
        self._cache_hits = 0
        self._cache_misses = 0
        self._analyses_run = 0
        self._last_reload = now_exact()

        _log_info(
            f"Extraction service ready ({len(dictionaries.skills_taxonomy)} skills, "
            f"{len(dictionaries.tools_dictionary)} tools)"
        )

    @property
    def dictionaries(self) -> SkillDictionaries:
        return self._snapshot.dictionaries

    def analyze(self, text: str) -> ExtractionResult:
        """
        Extract skills from a job description, using the cache when possible.

        Args:
            text: Raw job description text

        Returns:
            ExtractionResult (empty for empty or non-string input). Each call
            gets its own copy, so callers may modify it freely.
        """
        if not text or not isinstance(text, str):
            return extract_skills(text)

        key = text_cache_key(text)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                self._cache_hits += 1
                _log_debug(f"Cache hit {key[:12]}")
                return cached.copy()
            self._cache_misses += 1
            snapshot = self._snapshot

        result = extract_skills(
            text, snapshot.dictionaries, self.config, snapshot.fuzzy_matchers
        )

        with self._lock:
            self._analyses_run += 1
            # A reload during the analysis makes this result stale
            if snapshot is self._snapshot and self.config.cache_max_size > 0:
                self._cache[key] = result.copy()
                while len(self._cache) > self.config.cache_max_size:
                    self._cache.popitem(last=False)

        return result

    def reload_dictionaries(
        self,
        dictionaries: Optional[SkillDictionaries] = None,
        dictionaries_path: Optional[Path] = None,
    ) -> SkillDictionaries:
        """
        Swap in a new dictionary snapshot and clear the cache.

        The new snapshot and its fuzzy matchers are fully built before the
        swap, so concurrent analyze() calls never see a partial state.

        Args:
            dictionaries: Ready-made snapshot (loaded from disk when None)
            dictionaries_path: Directory to load from (defaults to the
                               service's dictionaries_path)

        Returns:
            The snapshot now in use

        Raises:
            DictionaryLoadError: If loading fails; the current snapshot stays active
        """
        if dictionaries is None:
            try:
                dictionaries = load_dictionaries(dictionaries_path or self.dictionaries_path)
            except DictionaryLoadError as e:
                _log_warning(f"Reload failed, keeping current dictionaries: {e}")
                raise
        snapshot = _Snapshot.build(dictionaries)

        with self._lock:
            self._snapshot = snapshot
            self._cache.clear()
            self._last_reload = now_exact()

        _log_success(
            f"Dictionaries reloaded ({len(dictionaries.skills_taxonomy)} skills, "
            f"{len(dictionaries.tools_dictionary)} tools), cache cleared"
        )
        return dictionaries

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
        _log_debug("Cache cleared")

    def get_stats(self) -> dict:
        """Dictionary sizes, cache usage and reload time."""
        with self._lock:
            dictionaries = self._snapshot.dictionaries
            return {
                "skills": len(dictionaries.skills_taxonomy),
                "tools": len(dictionaries.tools_dictionary),
                "cache_size": len(self._cache),
                "cache_max_size": self.config.cache_max_size,
                "cache_hits": self._cache_hits,
                "cache_misses": self._cache_misses,
                "analyses_run": self._analyses_run,
                "last_reload": self._last_reload,
            }
