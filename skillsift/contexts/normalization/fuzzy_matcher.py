"""
Fuzzy matching of phrases against taxonomy terms.

The normalizer only depends on the FuzzyMatcher protocol (a single search()
method where lower scores are closer), so any fuzzy backend can be injected.
SkillFuzzyMatcher is the default backend, built on rapidfuzz:

    pass 1  exact hit in the term index          score 0
    pass 2  normalized Levenshtein distance      score = distance / max length
    pass 3  token overlap for multi-word queries score = 1 - matched / total
"""

import re
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from skillsift.contexts.dictionaries.dictionary_data_structures import TaxonomyEntry
from skillsift.contexts.normalization.logger import _log_debug

SEARCH_NOISE = re.compile(r"[^\w\s/&-]")
COMPARISON_NOISE = re.compile(r"[^\w\s]")
WHITESPACE = re.compile(r"\s+")

# Length bands for dynamic thresholds
SHORT_PHRASE_LENGTH = 5
MEDIUM_PHRASE_LENGTH = 15
SHORT_PHRASE_THRESHOLD = 0.20
MEDIUM_PHRASE_THRESHOLD = 0.35
LONG_PHRASE_THRESHOLD = 0.50

# Tokens shorter than this ("r", "go") overlap only when equal
MIN_CONTAINMENT_TOKEN_LENGTH = 3


def get_dynamic_threshold(phrase: str) -> float:
    """
    Fuzzy acceptance cutoff by phrase length, stricter for short phrases.

    Short acronyms (SQL, CRM) sit one edit away from unrelated terms, so they
    get the tightest cutoff.

    Example:
        >>> get_dynamic_threshold("SQL")
        0.2
        >>> get_dynamic_threshold("lifecycle marketing")
        0.5
    """
    length = len(phrase or "")
    if length < SHORT_PHRASE_LENGTH:
        return SHORT_PHRASE_THRESHOLD
    if length <= MEDIUM_PHRASE_LENGTH:
        return MEDIUM_PHRASE_THRESHOLD
    return LONG_PHRASE_THRESHOLD


def _tokens_overlap(query_token: str, entry_token: str) -> bool:
    if query_token == entry_token:
        return True
    if min(len(query_token), len(entry_token)) < MIN_CONTAINMENT_TOKEN_LENGTH:
        return False
    return entry_token in query_token or query_token in entry_token


@dataclass(frozen=True)
class FuzzyMatch:
    """One search hit. Lower score means closer (0 = exact)."""

    item: TaxonomyEntry
    score: float
    matched_term: Optional[str] = None
    match_type: str = "fuzzy"


class FuzzyMatcher(Protocol):
    """Anything that can fuzzy-search taxonomy entries."""

    def search(self, query: str, limit: int = 10) -> list[FuzzyMatch]: ...


class SkillFuzzyMatcher:
    """
    Fuzzy matcher over taxonomy names, canonical keys and aliases.

    Args:
        entries: Taxonomy or tools entries to index
        threshold: Maximum accepted score (0 = exact only, 1 = anything)
        min_match_char_length: Terms and queries shorter than this are ignored
        dynamic_threshold: Use get_dynamic_threshold(query) instead of threshold

    Example:
        >>> matcher = SkillFuzzyMatcher(taxonomy)
        >>> matcher.search("lifecyle marketing", limit=1)[0].item.canonical
        'lifecycle_marketing'
    """

    def __init__(
        self,
        entries: Sequence[TaxonomyEntry],
        threshold: float = 0.5,
        min_match_char_length: int = 2,
        dynamic_threshold: bool = False,
    ):
        self.entries = tuple(entries)
        self.threshold = threshold
        self.min_match_char_length = min_match_char_length
        self.dynamic_threshold = dynamic_threshold

        self.index = self._build_index(self.entries)
        self._terms = list(self.index)

        _log_debug(
            f"Fuzzy matcher initialized with {len(self.entries)} entries, "
            f"{len(self.index)} indexed terms"
        )

    @staticmethod
    def _normalize(text: str) -> str:
        cleaned = SEARCH_NOISE.sub("", (text or "").lower().strip())
        return WHITESPACE.sub(" ", cleaned).strip()

    def _build_index(self, entries: Sequence[TaxonomyEntry]) -> dict[str, list[int]]:
        """Map each normalized term to the positions of the entries it names."""
        index: dict[str, list[int]] = {}
        for position, entry in enumerate(entries):
            for term in (entry.name, entry.canonical, *entry.aliases):
                normalized = self._normalize(term)
                if len(normalized) < self.min_match_char_length:
                    continue
                positions = index.setdefault(normalized, [])
                if position not in positions:
                    positions.append(position)
        return index

    def _token_matches(
        self, query: str, threshold: float, matched: dict[int, FuzzyMatch]
    ) -> None:
        query_tokens = [t for t in query.split() if len(t) >= 2]
        if len(query_tokens) < 2:
            return

        for position, entry in enumerate(self.entries):
            if position in matched:
                continue

            entry_tokens = set(self._normalize(entry.name).split())
            for alias in entry.aliases:
                entry_tokens.update(self._normalize(alias).split())

            hits = sum(
                1 for qt in query_tokens if any(_tokens_overlap(qt, st) for st in entry_tokens)
            )
            score = 1 - hits / len(query_tokens)
            if score <= threshold:
                matched[position] = FuzzyMatch(item=entry, score=score, match_type="token")

    def search(
        self, query: str, limit: int = 10, threshold: Optional[float] = None
    ) -> list[FuzzyMatch]:
        """
        Search for entries matching a query.

        Args:
            query: Phrase to look up
            limit: Maximum number of results
            threshold: Override the matcher's threshold for this search

        Returns:
            Matches sorted by ascending score (best first)
        """
        normalized = self._normalize(query)
        if len(normalized) < self.min_match_char_length:
            return []

        if threshold is None:
            threshold = get_dynamic_threshold(normalized) if self.dynamic_threshold else self.threshold

        # Pass 1: exact index hit
        if normalized in self.index:
            return [
                FuzzyMatch(item=self.entries[p], score=0.0, matched_term=normalized, match_type="exact")
                for p in self.index[normalized]
            ][:limit]

        # Pass 2: edit distance over every indexed term, best score per entry
        matched: dict[int, FuzzyMatch] = {}
        hits = process.extract(
            normalized,
            self._terms,
            scorer=Levenshtein.normalized_distance,
            score_cutoff=threshold,
            limit=None,
        )
        for term, score, _ in hits:
            for position in self.index[term]:
                current = matched.get(position)
                if current is None or score < current.score:
                    matched[position] = FuzzyMatch(
                        item=self.entries[position], score=score, matched_term=term
                    )

        # Pass 3: token overlap for multi-word queries
        self._token_matches(normalized, threshold, matched)

        return sorted(matched.values(), key=lambda m: m.score)[:limit]

    def get_by_category(self, category: str) -> list[TaxonomyEntry]:
        return [entry for entry in self.entries if entry.category == category]

    def find_by_canonical(self, canonical: str) -> Optional[TaxonomyEntry]:
        return next((entry for entry in self.entries if entry.canonical == canonical), None)

    def get_stats(self) -> dict:
        """Index size, threshold and categories, for diagnostics."""
        return {
            "total_entries": len(self.entries),
            "indexed_terms": len(self.index),
            "threshold": self.threshold,
            "dynamic_threshold": self.dynamic_threshold,
            "categories": sorted({entry.category for entry in self.entries}),
        }


# =============================================================================
# SIMILARITY HELPERS
# =============================================================================


def normalize_for_comparison(text: str) -> str:
    cleaned = COMPARISON_NOISE.sub("", (text or "").lower().strip())
    return WHITESPACE.sub(" ", cleaned).strip()


def calculate_similarity(first: str, second: str) -> float:
    """
    Similarity between two strings (1.0 = identical).

    Weighted 60/40 between edit-distance similarity and token Jaccard overlap.

    Example:
        >>> calculate_similarity("SQL", "sql")
        1.0
    """
    s1 = normalize_for_comparison(first)
    s2 = normalize_for_comparison(second)

    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    edit_similarity = 1 - Levenshtein.normalized_distance(s1, s2)

    tokens1, tokens2 = set(s1.split()), set(s2.split())
    jaccard = len(tokens1 & tokens2) / len(tokens1 | tokens2)

    return edit_similarity * 0.6 + jaccard * 0.4


def is_similar_match(first: str, second: str, threshold: float = 0.7) -> bool:
    return calculate_similarity(first, second) >= threshold
