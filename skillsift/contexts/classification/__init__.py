"""
Classification Context

Responsibilities:
- Assigns each atomic phrase exactly one type: CORE_SKILL, TOOL, CANDIDATE or REJECTED
- Records which layer decided and why (evidence)
- Buckets batches of phrases by type

Owns: Layered classification rules
Never: Resolves phrases to canonical taxonomy entries (see normalization)
"""

from skillsift.contexts.classification.classification_data_structures import (
    ClassificationLayer,
    ClassificationResult,
    ClassifiedBatch,
    ClassifiedPhrase,
    InferredType,
    SkillType,
)
from skillsift.contexts.classification.classifier import (
    CLASSIFICATION_LAYERS,
    check_context_heuristics,
    check_exact_dictionary_match,
    check_forced_core_skills,
    check_pattern_rules,
    check_soft_skill_rejection,
    classify_batch,
    classify_skill_phrase,
)

__all__ = [
    # Data structures
    "SkillType",
    "InferredType",
    "ClassificationLayer",
    "ClassificationResult",
    "ClassifiedPhrase",
    "ClassifiedBatch",
    # Classification
    "classify_skill_phrase",
    "classify_batch",
    # Layers
    "CLASSIFICATION_LAYERS",
    "check_soft_skill_rejection",
    "check_exact_dictionary_match",
    "check_forced_core_skills",
    "check_pattern_rules",
    "check_context_heuristics",
]
