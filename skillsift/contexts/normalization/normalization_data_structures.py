"""
Normalization data structures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from skillsift.contexts.dictionaries.dictionary_data_structures import TaxonomyEntry


class MatchType(Enum):
    """Which normalization pass resolved a phrase."""

    EXACT = "exact"
    ALIAS = "alias"
    CANONICAL = "canonical"
    FUZZY = "fuzzy"
    SYNONYM = "synonym"
    UNMATCHED = "unmatched"
    NONE = "none"


@dataclass(frozen=True)
class NormalizationResult:
    """
    Outcome of normalizing one phrase.

    Attributes:
        normalized: Display name of the matched entry (the cleaned phrase when
                    unmatched, None for blank input)
        canonical: Canonical key (pseudo-key when unmatched, None for blank input)
        matched_entry: Taxonomy or tools entry, None when unmatched
        confidence: 0.0 - 1.0, banded by match type
        match_type: Pass that produced the result
        matched_term: Index term hit by the fuzzy pass
        original: Raw phrase, set by batch normalization
    """

    normalized: Optional[str]
    canonical: Optional[str]
    matched_entry: Optional[TaxonomyEntry]
    confidence: float
    match_type: MatchType
    matched_term: Optional[str] = None
    original: Optional[str] = None

    @classmethod
    def from_entry(
        cls,
        entry: TaxonomyEntry,
        confidence: float,
        match_type: MatchType,
        matched_term: Optional[str] = None,
    ) -> "NormalizationResult":
        return cls(
            normalized=entry.name,
            canonical=entry.canonical,
            matched_entry=entry,
            confidence=confidence,
            match_type=match_type,
            matched_term=matched_term,
        )

    @classmethod
    def none(cls) -> "NormalizationResult":
        return cls(None, None, None, 0.0, MatchType.NONE)

    @property
    def is_matched(self) -> bool:
        return self.matched_entry is not None

    @property
    def category(self) -> str:
        return self.matched_entry.category if self.matched_entry else "Other"
