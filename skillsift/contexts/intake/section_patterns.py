"""
Pattern matching for requirement section identification.

This module provides regex patterns used to split a job description into its
required and desired qualification sections, plus the boundary headers that end
a section (benefits, about us, responsibilities, ...).

Pattern classes follow the frozen-dataclass convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# MARKDOWN HEADER PATTERNS (for preprocessing)
# =============================================================================


@dataclass(frozen=True)
class MarkdownHeaderPatterns:
    """
    Regex patterns for markdown header decoration in job descriptions.

    Supports both bold markdown (**Header**) and ATX headers (# Header).
    """

    # Subsection header: **- SubSection:** or **• SubSection:** or **— SubSection:**
    # The dash/bullet indicates hierarchy under a parent section
    SUBSECTION_MARKER: str = r"\*\*\s*[-•—]\s*([^*:]+):\s*\*\*"

    # Decoration allowed in front of a header keyword: "## ", "**", "### **"
    HEADER_PREFIX: str = r"^[ \t]*(?:#{1,4}[ \t]*)?(?:\*\*|__)?[ \t]*"

    # Up to four trailing header words, then end of line or a colon with inline content
    HEADER_SUFFIX: str = r"(?:[ \t]+[\w'’/&()-]+){0,4}[ \t]*(?:\*\*|__)?[ \t]*(?::[^\n]*)?$"


# =============================================================================
# SECTION HEADER KEYWORDS
# =============================================================================


@dataclass(frozen=True)
class SectionHeaderKeywords:
    """
    Keywords that open a header line for each section kind.

    A header line starts with one of these keywords (after optional markdown
    decoration) and carries at most a few more words. These aren't meant to be
    exhaustive, they cover the header styles seen on common job boards.
    """

    REQUIRED: tuple = (
        r"required",
        r"requirements?",
        r"minimum",
        r"basic",
        r"essential",
        r"must[\s-]?haves?",
        r"you must have",
        r"what you(?:'|’)?(?:ll| will)? need",
        r"what you(?:'|’)?(?:ll)? bring",
        r"what we(?:'|’)?re looking for",
        r"you should have",
        r"who you are",
        r"qualifications?",
    )

    DESIRED: tuple = (
        r"preferred",
        r"desired",
        r"nice[\s-]to[\s-]haves?",
        r"bonus(?: points)?",
        r"additional (?:qualifications?|skills?|experience)",
        r"pluses",
        r"it(?:'|’)?s a plus(?: if)?",
        r"ideally",
        r"extra credit",
        r"ways to stand out",
    )

    BOUNDARY: tuple = (
        r"about (?:us|the company|the team|the role|the position|this role)",
        r"who we are",
        r"benefits",
        r"perks",
        r"compensation",
        r"salary",
        r"pay range",
        r"what we offer",
        r"why (?:join|work)",
        r"responsibilities",
        r"what you(?:'|’)?ll (?:be )?do(?:ing)?",
        r"location",
        r"how to apply",
        r"equal (?:opportunity|employment)",
        r"our (?:mission|culture|values)",
    )


def build_header_regex(keywords: tuple) -> re.Pattern:
    """
    Compile a multiline header-line regex for a keyword group.

    Args:
        keywords: Tuple of keyword regex fragments

    Returns:
        Compiled pattern matching whole header lines

    Example:
        >>> regex = build_header_regex(SectionHeaderKeywords.REQUIRED)
        >>> bool(regex.search("**Required Skills:**"))
        True
        >>> bool(regex.search("- SQL"))
        False
    """
    alternation = "|".join(keywords)
    return re.compile(
        MarkdownHeaderPatterns.HEADER_PREFIX
        + rf"(?:{alternation})\b"
        + MarkdownHeaderPatterns.HEADER_SUFFIX,
        re.IGNORECASE | re.MULTILINE,
    )


REQUIRED_HEADER = build_header_regex(SectionHeaderKeywords.REQUIRED)
DESIRED_HEADER = build_header_regex(SectionHeaderKeywords.DESIRED)
BOUNDARY_HEADER = build_header_regex(SectionHeaderKeywords.BOUNDARY)
