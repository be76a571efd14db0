"""
Skill normalization: map raw phrases to canonical taxonomy entries.

A phrase equal to an entry name or canonical key resolves to that entry
before any cleaning. Otherwise the passes run in order and the first hit wins:

    pass 0  alias table ("ga4" -> "google analytics 4")    confidence 0.98
    pass 1  exact name / canonical / alias match           confidence 1.0
    pass 2  hand-curated canonical rules ("cro" -> ...)    confidence 0.95
    pass 3  fuzzy match under a length-banded threshold    confidence 1 - score
    pass 4  synonym groups                                 confidence 0.85

Phrases no pass resolves come back "unmatched" with their own pseudo-canonical
key and confidence 0.3.
"""

import re
from dataclasses import replace
from typing import Callable, Iterable, Optional, Sequence

from skillsift.contexts.dictionaries.dictionary_data_structures import (
    ExtractionConfig,
    SkillDictionaries,
    TaxonomyEntry,
)
from skillsift.contexts.intake.phrase_splitter import is_single_char_skill
from skillsift.contexts.normalization.fuzzy_matcher import FuzzyMatcher, get_dynamic_threshold
from skillsift.contexts.normalization.logger import _log_debug, log_normalization
from skillsift.contexts.normalization.normalization_data_structures import (
    MatchType,
    NormalizationResult,
)
from skillsift.utils.text_processing import to_canonical_key

QUALIFIER_PREFIX = re.compile(
    r"^(?:experience\s+(?:in|with)|proficiency\s+(?:in|with)|knowledge\s+of|skilled?\s+(?:in|at|with))\s*",
    re.IGNORECASE,
)
QUALIFIER_SUFFIX = re.compile(
    r"(?:^|\s+)(?:experience|skills?|expertise|knowledge|proficiency)$", re.IGNORECASE
)
SEPARATOR = re.compile(r"\s*[/&]\s*")
PARENTHETICAL = re.compile(r"\s*\([^)]*\)")
WHITESPACE = re.compile(r"\s+")

ALIAS_CONFIDENCE = 0.98
EXACT_CONFIDENCE = 1.0
CANONICAL_RULE_CONFIDENCE = 0.95
SYNONYM_CONFIDENCE = 0.85
UNMATCHED_CONFIDENCE = 0.3

# Unmatched phrases shorter than this are dropped by batch normalization
MIN_UNMATCHED_LENGTH = 5


def _lookup_key(term: str) -> str:
    key = SEPARATOR.sub("/", (term or "").lower().strip())
    return WHITESPACE.sub(" ", key)


def clean_skill_phrase(phrase: str) -> str:
    """
    Clean a phrase before matching.

    Lowercases, strips qualifier prefixes ("experience with") and suffixes
    ("skills"), normalizes "/" and "&" separators, drops parentheticals and
    collapses whitespace.

    Example:
        >>> clean_skill_phrase("Experience with Data Analysis & Reporting (advanced)")
        'data analysis/reporting'
        >>> clean_skill_phrase("SQL skills")
        'sql'
    """
    if not phrase or not isinstance(phrase, str):
        return ""

    cleaned = QUALIFIER_PREFIX.sub("", phrase.lower().strip())
    cleaned = QUALIFIER_SUFFIX.sub("", cleaned)
    cleaned = SEPARATOR.sub("/", cleaned)
    cleaned = WHITESPACE.sub(" ", cleaned)
    cleaned = PARENTHETICAL.sub("", cleaned)
    return cleaned.strip()


def _name_keys(entry: TaxonomyEntry) -> tuple[str, ...]:
    return (entry.name, entry.canonical, entry.canonical.replace("_", " "))


def build_skill_lookup_map(taxonomy: Iterable[TaxonomyEntry]) -> dict[str, TaxonomyEntry]:
    """
    Map every lookup key (name, canonical, spaced canonical, alias) to its entry.

    Names and canonical keys are registered before any alias, so an alias can
    never hide another entry's own name. Within each tier the first entry
    claiming a key keeps it.
    """
    taxonomy = tuple(taxonomy)
    name_terms = [(term, entry) for entry in taxonomy for term in _name_keys(entry)]
    alias_terms = [(alias, entry) for entry in taxonomy for alias in entry.aliases]

    lookup: dict[str, TaxonomyEntry] = {}
    for term, entry in name_terms + alias_terms:
        key = _lookup_key(term)
        if key:
            lookup.setdefault(key, entry)
    return lookup


class SkillNormalizer:
    """
    Multi-pass normalizer bound to one taxonomy.

    The pipeline builds one normalizer per stream: skills against the skills
    taxonomy, tools against the tools dictionary.

    Args:
        taxonomy: Entries phrases are resolved to
        dictionaries: Alias map, canonical rules and synonym groups
        fuzzy_matcher: Optional fuzzy backend; pass 3 is skipped without one
        config: Thresholds (min_confidence, fuzzy_threshold, dynamic_thresholds, use_aliases)
    """

    def __init__(
        self,
        taxonomy: Sequence[TaxonomyEntry],
        dictionaries: Optional[SkillDictionaries] = None,
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
        config: Optional[ExtractionConfig] = None,
    ):
        self.taxonomy = tuple(taxonomy)
        self.dictionaries = dictionaries or SkillDictionaries.empty()
        self.fuzzy_matcher = fuzzy_matcher
        self.config = config or ExtractionConfig()

        self._lookup = build_skill_lookup_map(self.taxonomy)
        self._by_canonical: dict[str, TaxonomyEntry] = {}
        self._by_name: dict[str, TaxonomyEntry] = {}
        for entry in self.taxonomy:
            self._by_canonical.setdefault(entry.canonical, entry)
            for term in _name_keys(entry):
                self._by_name.setdefault(_lookup_key(term), entry)

        # Precedence order; each pass returns None to fall through
        self.passes: tuple[Callable[[str], Optional[NormalizationResult]], ...] = (
            self._alias_pass,
            self._exact_pass,
            self._canonical_rule_pass,
            self._fuzzy_pass,
            self._synonym_pass,
        )

    def find_exact(self, term: str) -> Optional[TaxonomyEntry]:
        """Entry whose name, canonical key or alias equals the term."""
        entry = self._lookup.get(_lookup_key(term))
        if entry is None:
            entry = self._by_canonical.get(to_canonical_key(term))
        return entry

    # =========================================================================
    # PASSES
    # =========================================================================

    def _alias_pass(self, cleaned: str) -> Optional[NormalizationResult]:
        if not self.config.use_aliases:
            return None
        target = self.dictionaries.alias_map.get(cleaned)
        entry = self.find_exact(target) if target else None
        return NormalizationResult.from_entry(entry, ALIAS_CONFIDENCE, MatchType.ALIAS) if entry else None

    def _exact_pass(self, cleaned: str) -> Optional[NormalizationResult]:
        entry = self.find_exact(cleaned)
        return NormalizationResult.from_entry(entry, EXACT_CONFIDENCE, MatchType.EXACT) if entry else None

    def _canonical_rule_pass(self, cleaned: str) -> Optional[NormalizationResult]:
        target = self.dictionaries.canonical_rules.get(cleaned)
        entry = self.find_exact(target) if target else None
        if entry is None:
            return None
        return NormalizationResult.from_entry(entry, CANONICAL_RULE_CONFIDENCE, MatchType.CANONICAL)

    def _fuzzy_pass(self, cleaned: str) -> Optional[NormalizationResult]:
        if self.fuzzy_matcher is None:
            return None

        matches = self.fuzzy_matcher.search(cleaned, limit=1)
        if not matches:
            return None

        threshold = (
            get_dynamic_threshold(cleaned)
            if self.config.dynamic_thresholds
            else self.config.fuzzy_threshold
        )
        best = matches[0]
        if best.score > threshold:
            return None

        confidence = min(1.0, max(self.config.min_confidence, 1 - best.score))
        return NormalizationResult.from_entry(
            best.item, confidence, MatchType.FUZZY, matched_term=best.matched_term
        )

    def _synonym_pass(self, cleaned: str) -> Optional[NormalizationResult]:
        for canonical, synonyms in self.dictionaries.synonym_groups.items():
            if any(synonym.lower() == cleaned for synonym in synonyms):
                entry = self._by_canonical.get(canonical)
                if entry is not None:
                    return NormalizationResult.from_entry(entry, SYNONYM_CONFIDENCE, MatchType.SYNONYM)
        return None

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def normalize(self, phrase: str) -> NormalizationResult:
        """
        Normalize one phrase.

        Returns:
            NormalizationResult from the first pass that matched, an
            "unmatched" result (confidence 0.3) when none did, or a "none"
            result (confidence 0) for blank input. Never raises.
        """
        # Entry names are matched before cleaning can strip "experience" or "skills"
        named = self._by_name.get(_lookup_key(phrase)) if isinstance(phrase, str) else None
        if named is not None:
            result = NormalizationResult.from_entry(named, EXACT_CONFIDENCE, MatchType.EXACT)
            log_normalization(phrase, result)
            return result

        cleaned = clean_skill_phrase(phrase)
        if len(cleaned) < 2 and not is_single_char_skill(cleaned):
            return NormalizationResult.none()

        for strategy in self.passes:
            result = strategy(cleaned)
            if result is not None:
                break
        else:
            result = NormalizationResult(
                normalized=cleaned,
                canonical=to_canonical_key(cleaned),
                matched_entry=None,
                confidence=UNMATCHED_CONFIDENCE,
                match_type=MatchType.UNMATCHED,
            )

        log_normalization(phrase, result)
        return result

    def normalize_and_deduplicate(self, phrases: Iterable[str]) -> list[NormalizationResult]:
        """
        Normalize phrases and collapse them by canonical key.

        Unmatched phrases under 5 characters are dropped. For a repeated key
        the highest-confidence variant wins (a later, strictly higher hit
        replaces an earlier one).

        Returns:
            Unique results sorted by descending confidence, each with
            original set to the phrase that produced it
        """
        by_key: dict[str, NormalizationResult] = {}

        for phrase in phrases:
            if not phrase or not isinstance(phrase, str):
                continue

            result = replace(self.normalize(phrase), original=phrase)
            if result.match_type is MatchType.UNMATCHED and len(phrase) < MIN_UNMATCHED_LENGTH:
                continue

            key = result.canonical or to_canonical_key(phrase)
            if not key:
                continue

            existing = by_key.get(key)
            if existing is None or result.confidence > existing.confidence:
                by_key[key] = result

        results = sorted(by_key.values(), key=lambda r: r.confidence, reverse=True)
        _log_debug(f"Normalized {len(results)} unique concepts")
        return results


# =============================================================================
# FILTERS AND LABELS
# =============================================================================


def _is_denied_tool(phrase: str, deny_list: frozenset[str]) -> bool:
    if phrase in deny_list:
        return True
    return any(phrase.startswith(f"{tool} ") or phrase.endswith(f" {tool}") for tool in deny_list)


def filter_out_tools(phrases: Iterable[str], deny_list: Iterable[str]) -> list[str]:
    """
    Drop phrases naming a tool: exact deny-list hits, or a deny-list term as
    the phrase's first or last word(s) ("hubspot crm", "advanced excel").
    """
    deny = frozenset(term.lower() for term in deny_list)
    return [p for p in phrases if not _is_denied_tool(p.lower().strip(), deny)]


def filter_out_generic(phrases: Iterable[str], deny_list: Iterable[str]) -> list[str]:
    """Drop phrases exactly matching a generic deny-list term."""
    deny = frozenset(term.lower() for term in deny_list)
    return [p for p in phrases if p.lower().strip() not in deny]


def get_confidence_label(confidence: float) -> str:
    """
    Human-readable band for a confidence score.

    Example:
        >>> get_confidence_label(0.98)
        'exact'
        >>> get_confidence_label(0.4)
        'uncertain'
    """
    if confidence >= 0.95:
        return "exact"
    if confidence >= 0.85:
        return "high"
    if confidence >= 0.7:
        return "medium"
    if confidence >= 0.5:
        return "low"
    return "uncertain"
