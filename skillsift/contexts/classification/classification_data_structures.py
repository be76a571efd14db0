"""
Classification data structures.

A phrase gets exactly one SkillType. The layer that decided it is recorded as a
ClassificationLayer so decisions can be traced and tested per layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from skillsift.contexts.dictionaries.dictionary_data_structures import TaxonomyEntry


class SkillType(Enum):
    CORE_SKILL = "CORE_SKILL"
    TOOL = "TOOL"
    CANDIDATE = "CANDIDATE"
    REJECTED = "REJECTED"


class InferredType(Enum):
    """Best-guess type for a CANDIDATE pending review."""

    TOOL = "TOOL"
    UNKNOWN = "UNKNOWN"


class ClassificationLayer(Enum):
    VALIDATION = "validation"
    SOFT_SKILL_REJECTION = "layer_0_soft_skill_rejection"
    EXACT_MATCH = "layer_1_exact_match"
    FORCED_CORE_SKILL = "layer_2_forced_core_skill"
    PATTERN_RULES = "layer_3_pattern_rules"
    CONTEXT_HEURISTICS = "layer_4_context_heuristics"


@dataclass(frozen=True)
class ClassificationResult:
    """
    Classifier decision for one phrase.

    Attributes:
        skill_type: Semantic type
        canonical: Canonical key (None for rejected phrases)
        confidence: 0.0 - 1.0
        evidence: Human-readable reason
        source_location: Layer that produced the decision
        inferred_type: Best guess for CANDIDATE results, None otherwise
        matched_entry: Dictionary entry for layer 1 hits
    """

    skill_type: SkillType
    canonical: Optional[str]
    confidence: float
    evidence: str
    source_location: ClassificationLayer
    inferred_type: Optional[InferredType] = None
    matched_entry: Optional[TaxonomyEntry] = None

    @classmethod
    def rejected(cls, evidence: str, source_location: ClassificationLayer) -> "ClassificationResult":
        return cls(
            skill_type=SkillType.REJECTED,
            canonical=None,
            confidence=0.0,
            evidence=evidence,
            source_location=source_location,
        )


@dataclass(frozen=True)
class ClassifiedPhrase:
    """Bucket item produced by classify_batch()."""

    raw: str
    canonical: Optional[str]
    confidence: float
    evidence: str
    source_location: ClassificationLayer
    inferred_type: Optional[InferredType] = None

    @classmethod
    def from_result(cls, raw: str, result: ClassificationResult) -> "ClassifiedPhrase":
        return cls(
            raw=raw,
            canonical=result.canonical,
            confidence=result.confidence,
            evidence=result.evidence,
            source_location=result.source_location,
            inferred_type=result.inferred_type,
        )

    def to_dict(self) -> dict:
        data = {
            "raw": self.raw,
            "canonical": self.canonical,
            "confidence": self.confidence,
            "evidence": self.evidence,
            "source_location": self.source_location.value,
        }
        if self.inferred_type is not None:
            data["inferred_type"] = self.inferred_type.value
        return data


@dataclass
class ClassifiedBatch:
    """Phrases bucketed by SkillType, in input order."""

    core_skills: list[ClassifiedPhrase] = field(default_factory=list)
    tools: list[ClassifiedPhrase] = field(default_factory=list)
    candidates: list[ClassifiedPhrase] = field(default_factory=list)
    rejected: list[ClassifiedPhrase] = field(default_factory=list)

    def bucket(self, skill_type: SkillType) -> list[ClassifiedPhrase]:
        """Bucket list for a type."""
        return {
            SkillType.CORE_SKILL: self.core_skills,
            SkillType.TOOL: self.tools,
            SkillType.CANDIDATE: self.candidates,
            SkillType.REJECTED: self.rejected,
        }[skill_type]

    def __len__(self) -> int:
        return len(self.core_skills) + len(self.tools) + len(self.candidates) + len(self.rejected)
