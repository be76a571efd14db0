"""
Extraction Context

Responsibilities:
- Orchestrates intake, classification and normalization into one pipeline run
- Resolves required vs. desired conflicts and applies confidence and count limits
- Serves cached analyses over a hot-reloadable dictionary snapshot

Owns: ExtractionResult and the pipeline order
Never: Loads text from the web or scores candidates against a profile
"""

from skillsift.contexts.extraction.extraction_data_structure import (
    ExtractionDebug,
    ExtractionResult,
    SkillRecord,
)
from skillsift.contexts.extraction.pipeline import FuzzyMatchers, extract_skills
from skillsift.contexts.extraction.service import SkillExtractionService

__all__ = [
    # Data structures
    "SkillRecord",
    "ExtractionDebug",
    "ExtractionResult",
    # Pipeline
    "extract_skills",
    "FuzzyMatchers",
    # Service
    "SkillExtractionService",
]
