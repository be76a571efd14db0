"""
Regex patterns for harvesting skill phrases from job description text.

Pattern classes follow the frozen-dataclass convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# BULLET PATTERNS
# =============================================================================


@dataclass(frozen=True)
class BulletPatterns:
    """Patterns for bullet-list lines."""

    # Bullet glyph or "1." / "1)" marker, then the item text
    BULLET_LINE: re.Pattern = re.compile(
        r"^[ \t]*(?:[•◦▪●‣⁃∙*+-]|\d{1,2}[.)])[ \t]+(\S.*?)[ \t]*$", re.MULTILINE
    )

    # "Label: description" items keep only a label shorter than this
    MAX_LABEL_LENGTH: int = 50


# =============================================================================
# INDICATOR PATTERNS
# =============================================================================


@dataclass(frozen=True)
class IndicatorPatterns:
    """
    Lexical triggers that usually precede a skill phrase.

    Each trigger is followed by a capture window of letters, spaces and light
    punctuation. The window is trimmed afterwards (see WINDOW_STOP and
    TRAILING_QUALIFIER) and capped at MAX_WINDOW_LENGTH characters.
    """

    TRIGGERS: tuple = (
        r"experience\s+(?:in|with)",
        r"experience\s+(?:scaling|building|owning)",
        r"proficiency\s+(?:in|with)",
        r"proficient\s+(?:in|with)",
        r"expertise\s+(?:in|with)",
        r"knowledge\s+of",
        r"skilled?\s+(?:in|at|with)",
        r"background\s+in",
        r"understanding\s+of",
        r"familiarity\s+with",
        r"strong",
        r"responsible\s+for",
        r"accountable\s+for",
    )

    WINDOW: str = r"([a-z][a-z \t/&,()\-]*)"

    # Clause-ending words cut the window: "... leadership abilities required"
    WINDOW_STOP: re.Pattern = re.compile(
        r"\s+(?:required|preferred|is|are|needed|desired|a plus|would be|will be|to|for|that|which)\b.*$",
        re.IGNORECASE,
    )

    # "strong SQL skills" -> "SQL"
    TRAILING_QUALIFIER: re.Pattern = re.compile(
        r"\s+(?:skills?|abilities|ability|experience|knowledge|expertise)$", re.IGNORECASE
    )

    MIN_WINDOW_LENGTH: int = 2
    MAX_WINDOW_LENGTH: int = 50


def build_indicator_regex(trigger: str) -> re.Pattern:
    """Compile the trigger + capture window regex for one indicator."""
    return re.compile(rf"\b{trigger}\s+{IndicatorPatterns.WINDOW}", re.IGNORECASE)


INDICATOR_REGEXES = tuple(build_indicator_regex(t) for t in IndicatorPatterns.TRIGGERS)


# =============================================================================
# LIST PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ListPatterns:
    """Patterns for inline skill lists ("skills include: a, b and c")."""

    # Only the rest of the same line is captured
    SKILLS_LIST: re.Pattern = re.compile(
        r"\b(?:skills?|technologies|tools|platforms|stack)[ \t]*(?:includes?[ \t]*:?|:)[ \t]*([^.\n;]+)",
        re.IGNORECASE,
    )
    EXAMPLE_LIST: re.Pattern = re.compile(
        r"\b(?:including|such[ \t]+as|e\.g\.?,?)[ \t]*([^.\n;]+)", re.IGNORECASE
    )
    ITEM_SEPARATOR: re.Pattern = re.compile(r"\s*,\s*|\s+and\s+|\s+or\s+", re.IGNORECASE)
    LEADING_CONJUNCTION: re.Pattern = re.compile(r"^(?:and|or)\s+", re.IGNORECASE)

    MIN_ITEM_LENGTH: int = 2
    MAX_ITEM_LENGTH: int = 40


# =============================================================================
# CLEANING PATTERNS
# =============================================================================


@dataclass(frozen=True)
class CleaningPatterns:
    """Patterns shared by phrase cleaning in the extractor and splitter."""

    EDGE_PUNCTUATION: re.Pattern = re.compile(r"^[,.\s\-•◦▪●*:;]+|[,.\s\-•◦▪●*:;]+$")

    YEARS_OF: re.Pattern = re.compile(r"\d+\+?\s*(?:years?|yrs?)\s*(?:of\s+)?", re.IGNORECASE)

    # Parenthetical asides: "(e.g. ...)", "(preferred)", "(or equivalent)"
    ASIDE_PARENTHETICAL: re.Pattern = re.compile(
        r"\s*\([^)]*\b(?:e\.g|i\.e|etc|preferred|required|similar|equivalent|a plus"
        r"|nice to have|optional|bonus|ideally|years?)\b[^)]*\)",
        re.IGNORECASE,
    )

    # Parenthetical followed by more text: "SQL (any dialect) for reporting"
    INNER_PARENTHETICAL: re.Pattern = re.compile(r"\s*\([^)]*\)(?=\s*\S)")
