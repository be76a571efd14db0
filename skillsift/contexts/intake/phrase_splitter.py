"""
Composite phrase splitting for the Intake context.

Breaks a phrase that lists several skills into atomic candidates:

    "SQL, Python, and R"        -> ["SQL", "Python", "R"]
    "HubSpot; Salesforce"       -> ["HubSpot", "Salesforce"]
    "GA4 (Google Analytics 4)"  -> ["GA4", "Google Analytics 4"]

Only one delimiter tier is applied per phrase, in precedence order
semicolon > comma > " and " > " or ". A semicolon-split chunk keeps its inner
commas ("SQL, Python; R" -> ["SQL, Python", "R"]).
"""

import re
from typing import Callable, Iterable, Optional, Sequence

from skillsift.contexts.dictionaries.dictionary_data_structures import TaxonomyEntry
from skillsift.contexts.intake.extraction_patterns import CleaningPatterns

# Programming languages with one-letter names
SINGLE_CHAR_SKILLS = frozenset({"r", "c"})

PROFICIENCY_QUALIFIER = re.compile(
    r"\s*\((?:advanced|intermediate|basic|beginner|expert)\)", re.IGNORECASE
)
AND_OR = re.compile(r"\s+and/or\s+", re.IGNORECASE)
LEADING_PREFIX = re.compile(
    r"^(?:experience\s+(?:with|in)|proficiency\s+(?:in|with)|knowledge\s+of)\s+", re.IGNORECASE
)
PARENTHETICAL_VARIANT = re.compile(r"^([^(]+)\s*\(([^)]+)\)$")
LEADING_CONJUNCTION = re.compile(r"^(?:and|or)\s+", re.IGNORECASE)
FRAGMENT_LEADING_WORD = re.compile(r"^(?:and|or|with|using)\s+", re.IGNORECASE)
FRAGMENT_TRAILING_WORD = re.compile(r"\s+(?:and|or|with|using)$", re.IGNORECASE)
AND_DELIMITER = re.compile(r" and ", re.IGNORECASE)
OR_DELIMITER = re.compile(r" or ", re.IGNORECASE)


def is_single_char_skill(skill: str) -> bool:
    return len(skill) == 1 and skill.lower() in SINGLE_CHAR_SKILLS


# =============================================================================
# CLEANING
# =============================================================================


def handle_edge_cases(phrase: str) -> str:
    """
    Normalize list quirks before splitting.

    Example:
        >>> handle_edge_cases("3+ years of SQL and/or Python")
        'SQL, Python'
        >>> handle_edge_cases("Excel (advanced)")
        'Excel'
    """
    if not phrase:
        return ""

    cleaned = CleaningPatterns.YEARS_OF.sub("", phrase)
    cleaned = PROFICIENCY_QUALIFIER.sub("", cleaned)
    cleaned = AND_OR.sub(", ", cleaned)
    cleaned = LEADING_PREFIX.sub("", cleaned.strip())
    return cleaned if len(cleaned.strip()) >= 2 or is_single_char_skill(cleaned.strip()) else ""


def clean_phrase(phrase: str) -> str:
    """Strip edge punctuation and collapse whitespace."""
    if not phrase:
        return ""
    cleaned = CleaningPatterns.EDGE_PUNCTUATION.sub("", phrase.strip())
    return " ".join(cleaned.split())


def clean_skill_fragment(fragment: str) -> str:
    """Strip dangling conjunctions and punctuation from a split fragment."""
    if not fragment:
        return ""
    cleaned = FRAGMENT_LEADING_WORD.sub("", fragment.strip())
    cleaned = FRAGMENT_TRAILING_WORD.sub("", cleaned)
    return clean_phrase(cleaned)


def deduplicate_skills(skills: Iterable[str]) -> list[str]:
    """Case-insensitive dedup keeping the first-seen casing."""
    seen: dict[str, str] = {}
    for skill in skills:
        seen.setdefault(skill.lower().strip(), skill)
    return list(seen.values())


# =============================================================================
# DELIMITER TIERS
# =============================================================================


def find_known_skill(text: str, taxonomy: Sequence[TaxonomyEntry]) -> Optional[TaxonomyEntry]:
    """Return the entry whose name, canonical key or alias equals the text."""
    normalized = text.lower().strip()
    canonical = re.sub(r"\s+", "_", normalized)
    for entry in taxonomy:
        if entry.name.lower() == normalized or entry.canonical == canonical:
            return entry
        if any(alias.lower() == normalized for alias in entry.aliases):
            return entry
    return None


def split_by_semicolon(text: str, taxonomy: Sequence[TaxonomyEntry] = ()) -> list[str]:
    return [part.strip() for part in text.split(";") if part.strip()]


def split_by_comma(text: str, taxonomy: Sequence[TaxonomyEntry] = ()) -> list[str]:
    parts = (LEADING_CONJUNCTION.sub("", part.strip()) for part in text.split(","))
    return [part for part in parts if part]


def _split_unless_known(
    text: str, delimiter: re.Pattern, taxonomy: Sequence[TaxonomyEntry]
) -> list[str]:
    # "Research and Development" style taxonomy names stay whole
    if find_known_skill(text, taxonomy):
        return [text]
    return [part.strip() for part in delimiter.split(text) if part.strip()]


def split_by_and(text: str, taxonomy: Sequence[TaxonomyEntry] = ()) -> list[str]:
    return _split_unless_known(text, AND_DELIMITER, taxonomy)


def split_by_or(text: str, taxonomy: Sequence[TaxonomyEntry] = ()) -> list[str]:
    return _split_unless_known(text, OR_DELIMITER, taxonomy)


# (applies?, splitter) in precedence order; the first applicable tier wins
DELIMITER_TIERS: tuple[tuple[Callable[[str], bool], Callable[..., list[str]]], ...] = (
    (lambda text: ";" in text, split_by_semicolon),
    (lambda text: "," in text, split_by_comma),
    (lambda text: AND_DELIMITER.search(text) is not None, split_by_and),
    (lambda text: OR_DELIMITER.search(text) is not None, split_by_or),
)


def extract_parenthetical_variants(text: str) -> list[str]:
    """
    "X (Y)" yields both X and Y; anything else is returned unchanged.

    Example:
        >>> extract_parenthetical_variants("GA4 (Google Analytics 4)")
        ['GA4', 'Google Analytics 4']
    """
    match = PARENTHETICAL_VARIANT.match(text)
    if not match:
        return [text]
    return [part.strip() for part in match.groups() if part.strip()]


def _split_variant(variant: str, taxonomy: Sequence[TaxonomyEntry]) -> list[str]:
    for applies, splitter in DELIMITER_TIERS:
        if applies(variant):
            return splitter(variant, taxonomy)
    return [variant]


# =============================================================================
# ENTRY POINTS
# =============================================================================


def split_phrase(phrase: str, taxonomy: Sequence[TaxonomyEntry] = ()) -> list[str]:
    """
    Split a possibly composite phrase into atomic skill candidates.

    Args:
        phrase: Extracted phrase
        taxonomy: Known entries; a phrase equal to one is never split on and/or

    Returns:
        Deduplicated fragments (the phrase itself when nothing applies).
        Empty or non-string input returns an empty list.

    Example:
        >>> split_phrase("SQL, Python; R and JavaScript")
        ['SQL, Python', 'R and JavaScript']
    """
    if not phrase or not isinstance(phrase, str):
        return []

    cleaned = clean_phrase(handle_edge_cases(phrase))
    if not cleaned:
        return []

    fragments = []
    for variant in extract_parenthetical_variants(cleaned):
        fragments.extend(_split_variant(variant, taxonomy))

    skills = (clean_skill_fragment(fragment) for fragment in fragments)
    return deduplicate_skills(s for s in skills if len(s) >= 2 or is_single_char_skill(s))


def split_batch(phrases: Iterable[str], taxonomy: Sequence[TaxonomyEntry] = ()) -> list[str]:
    """Split every phrase and deduplicate across the whole batch."""
    skills = []
    for phrase in phrases:
        skills.extend(split_phrase(phrase, taxonomy))
    return deduplicate_skills(skills)
