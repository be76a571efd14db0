"""
SKILLSIFT - Skill extraction and normalization for job descriptions

Turns raw job-description text into a deduplicated, confidence-scored set of
canonical skill and tool concepts, split into required vs. desired.

Architecture:
- Dictionaries Context: Immutable taxonomy, tool and rule snapshots loaded from YAML
- Intake Context: Text preprocessing, section parsing, phrase extraction and splitting
- Classification Context: Layered rule-based typing of phrases
- Normalization Context: Multi-pass canonicalization with fuzzy matching
- Extraction Context: Pipeline orchestration and the cached extraction service
"""

__version__ = "0.1.0"
