"""
Intake Context

Responsibilities:
- Preprocesses raw job description text (unicode cleanup, header flattening)
- Splits text into required and desired sections
- Harvests candidate skill phrases and splits composite phrases

Owns: Turning free text into atomic candidate phrases
Never: Decides whether a phrase is a skill, tool or noise
"""

from skillsift.contexts.intake.normalizer import preprocess_job_text
from skillsift.contexts.intake.phrase_extractor import (
    clean_extracted_phrase,
    extract_bullet_phrases,
    extract_indicator_phrases,
    extract_list_phrases,
    extract_phrases,
    extract_taxonomy_phrases,
)
from skillsift.contexts.intake.phrase_splitter import (
    SINGLE_CHAR_SKILLS,
    is_single_char_skill,
    split_batch,
    split_phrase,
)
from skillsift.contexts.intake.section_parser import ParsedSections, parse_sections

__all__ = [
    # Preprocessing
    "preprocess_job_text",
    # Sections
    "ParsedSections",
    "parse_sections",
    # Extraction
    "extract_phrases",
    "extract_bullet_phrases",
    "extract_indicator_phrases",
    "extract_taxonomy_phrases",
    "extract_list_phrases",
    "clean_extracted_phrase",
    # Splitting
    "split_phrase",
    "split_batch",
    "is_single_char_skill",
    "SINGLE_CHAR_SKILLS",
]
