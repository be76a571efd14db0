"""
Extraction result data structures.

ExtractionResult is the top-level output of one pipeline run: required and
desired skill records plus the candidates and rejected phrases kept for review
and debugging.
"""

from dataclasses import asdict, dataclass, field, replace

from skillsift.contexts.classification.classification_data_structures import (
    ClassifiedPhrase,
    SkillType,
)
from skillsift.contexts.normalization.normalization_data_structures import (
    MatchType,
    NormalizationResult,
)


@dataclass(frozen=True)
class SkillRecord:
    """
    One extracted skill or tool concept.

    Attributes:
        name: Display name from the taxonomy
        canonical: Canonical key (deduplication identity)
        category: Taxonomy category
        confidence: 0.0 - 1.0
        match_type: Normalization pass that resolved it
        skill_type: CORE_SKILL or TOOL (which stream produced it)
    """

    name: str
    canonical: str
    category: str
    confidence: float
    match_type: MatchType
    skill_type: SkillType = SkillType.CORE_SKILL

    @classmethod
    def from_normalization(
        cls, result: NormalizationResult, skill_type: SkillType
    ) -> "SkillRecord":
        return cls(
            name=result.normalized,
            canonical=result.canonical,
            category=result.category,
            confidence=result.confidence,
            match_type=result.match_type,
            skill_type=skill_type,
        )

    @property
    def is_tool(self) -> bool:
        return self.skill_type is SkillType.TOOL

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "canonical": self.canonical,
            "category": self.category,
            "confidence": round(self.confidence, 3),
            "match_type": self.match_type.value,
            "skill_type": self.skill_type.value,
        }


@dataclass
class ExtractionDebug:
    """Phrase counts surviving each pipeline stage (both sections combined)."""

    total_phrases: int = 0
    after_splitting: int = 0
    core_skills: int = 0
    tools: int = 0
    candidates: int = 0
    rejected: int = 0
    after_tool_filter: int = 0
    after_generic_filter: int = 0
    after_normalization: int = 0
    after_confidence_filter: int = 0
    final: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExtractionResult:
    """
    Output of extract_skills().

    A canonical key never appears in both required and desired.
    """

    required: list[SkillRecord] = field(default_factory=list)
    desired: list[SkillRecord] = field(default_factory=list)
    candidates: list[ClassifiedPhrase] = field(default_factory=list)
    rejected: list[ClassifiedPhrase] = field(default_factory=list)
    confidence: float = 0.0
    execution_time_ms: float = 0.0
    debug: ExtractionDebug = field(default_factory=ExtractionDebug)

    @property
    def required_skills(self) -> list[SkillRecord]:
        return [r for r in self.required if not r.is_tool]

    @property
    def required_tools(self) -> list[SkillRecord]:
        return [r for r in self.required if r.is_tool]

    @property
    def desired_skills(self) -> list[SkillRecord]:
        return [r for r in self.desired if not r.is_tool]

    @property
    def desired_tools(self) -> list[SkillRecord]:
        return [r for r in self.desired if r.is_tool]

    @property
    def is_empty(self) -> bool:
        return not self.required and not self.desired

    def copy(self) -> "ExtractionResult":
        """Copy with fresh lists and debug counters. Records are frozen and shared."""
        return replace(
            self,
            required=list(self.required),
            desired=list(self.desired),
            candidates=list(self.candidates),
            rejected=list(self.rejected),
            debug=replace(self.debug),
        )

    def to_dict(self) -> dict:
        """JSON-ready representation."""
        return {
            "required": [r.to_dict() for r in self.required],
            "desired": [r.to_dict() for r in self.desired],
            "candidates": [c.to_dict() for c in self.candidates],
            "rejected": [r.to_dict() for r in self.rejected],
            "confidence": round(self.confidence, 3),
            "execution_time_ms": round(self.execution_time_ms, 2),
            "debug": self.debug.to_dict(),
        }
