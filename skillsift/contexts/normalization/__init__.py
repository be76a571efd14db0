"""
Normalization Context

Responsibilities:
- Cleans skill phrases and resolves them to canonical taxonomy entries
- Scores each resolution with a confidence band per match pass
- Deduplicates phrases by canonical key
- Provides fuzzy matching with length-banded thresholds

Owns: Phrase -> canonical concept resolution
Never: Decides whether a phrase is a skill or a tool
"""

from skillsift.contexts.normalization.fuzzy_matcher import (
    FuzzyMatch,
    FuzzyMatcher,
    SkillFuzzyMatcher,
    calculate_similarity,
    get_dynamic_threshold,
    is_similar_match,
)
from skillsift.contexts.normalization.normalization_data_structures import (
    MatchType,
    NormalizationResult,
)
from skillsift.contexts.normalization.skill_normalizer import (
    SkillNormalizer,
    build_skill_lookup_map,
    clean_skill_phrase,
    filter_out_generic,
    filter_out_tools,
    get_confidence_label,
)

__all__ = [
    # Data structures
    "MatchType",
    "NormalizationResult",
    # Normalizer
    "SkillNormalizer",
    "clean_skill_phrase",
    "build_skill_lookup_map",
    "filter_out_tools",
    "filter_out_generic",
    "get_confidence_label",
    # Fuzzy matching
    "FuzzyMatch",
    "FuzzyMatcher",
    "SkillFuzzyMatcher",
    "get_dynamic_threshold",
    "calculate_similarity",
    "is_similar_match",
]
