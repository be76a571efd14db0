"""
Regex patterns for the pattern-rule and context-heuristic layers.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PatternRules:
    """Layer 3 rules, checked in declaration order."""

    # "ga4", "salesforce360", anything ending in digits
    BRAND_WITH_NUMBER: re.Pattern = re.compile(r"^[a-z]+\d+$|\d+$", re.IGNORECASE)

    # "HubSpot", "LinkedIn": two or more capitalized segments, no spaces
    CAMEL_CASE: re.Pattern = re.compile(r"^[A-Z][a-z]+(?:[A-Z][a-z0-9]*)+$")

    GERUND: re.Pattern = re.compile(r"ing\s|ing$", re.IGNORECASE)

    SKILL_SUFFIX: re.Pattern = re.compile(
        r"(?:strategy|operations|management|analysis|optimization|planning)$", re.IGNORECASE
    )

    MIN_MULTI_WORD: int = 2
    MAX_MULTI_WORD: int = 4


@dataclass(frozen=True)
class ContextHeuristics:
    """Layer 4 heuristics."""

    SHORT_ACRONYM_LENGTH: int = 4

    # Dots, underscores, dashes, slashes or digits suggest a product name
    TOOL_LIKE: re.Pattern = re.compile(r"[._\-/\\]|\d")

    NON_ALPHANUMERIC: re.Pattern = re.compile(r"[^a-z0-9\s]")
