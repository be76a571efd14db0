"""
Candidate phrase extraction for the Intake context.

Four independent strategies harvest short phrases from a block of job
description text:

    bullets      lines starting with a bullet glyph or number
    indicators   windows after "experience with", "knowledge of", "strong", ...
    taxonomy     known skill/tool names and aliases found verbatim in the text
    lists        inline lists after "skills include:", "such as", "e.g."

Outputs are unioned, cleaned, length-filtered and deduplicated. No strategy
can abort another; malformed input simply yields fewer phrases.
"""

from typing import Optional

from skillsift.contexts.dictionaries.dictionary_data_structures import (
    ExtractionConfig,
    SkillDictionaries,
    TaxonomyEntry,
)
from skillsift.contexts.intake.extraction_patterns import (
    INDICATOR_REGEXES,
    BulletPatterns,
    CleaningPatterns,
    IndicatorPatterns,
    ListPatterns,
)
from skillsift.contexts.intake.logger import log_strategy_counts
from skillsift.utils.text_processing import collapse_whitespace, term_regex

# Short terms ("SF", "Go") count only as written and never inside a hyphenated word
SHORT_TERM_LENGTH = 3


def clean_extracted_phrase(phrase: str) -> str:
    """
    Clean a harvested phrase.

    Removes parenthetical asides, "N years of" fragments, leading/trailing
    punctuation and bullet glyphs, and unbalanced brackets, then collapses
    whitespace. Abbreviation pairs like "GA4 (Google Analytics 4)" are kept
    intact for the splitter.

    Example:
        >>> clean_extracted_phrase("- 5+ years of SQL (preferred).")
        'SQL'
    """
    if not phrase or not isinstance(phrase, str):
        return ""

    cleaned = CleaningPatterns.ASIDE_PARENTHETICAL.sub("", phrase)
    cleaned = CleaningPatterns.INNER_PARENTHETICAL.sub("", cleaned)
    cleaned = CleaningPatterns.YEARS_OF.sub("", cleaned)
    cleaned = CleaningPatterns.EDGE_PUNCTUATION.sub("", cleaned)

    if cleaned.count("(") != cleaned.count(")"):
        cleaned = CleaningPatterns.EDGE_PUNCTUATION.sub("", cleaned.strip("()"))

    return collapse_whitespace(cleaned)


def _passes_filters(phrase: str, config: ExtractionConfig) -> bool:
    if len(phrase) < config.min_phrase_length or len(phrase) > config.max_phrase_chars:
        return False
    return len(phrase.split()) <= config.max_phrase_words


# =============================================================================
# STRATEGIES
# =============================================================================


def extract_bullet_phrases(text: str) -> list[str]:
    """
    Extract bullet list items.

    An item of the form "Label: description" with exactly one colon and a
    short label yields only the label.
    """
    items = []
    for match in BulletPatterns.BULLET_LINE.finditer(text):
        item = match.group(1).strip()
        if len(item) < 2:
            continue

        parts = item.split(":")
        if len(parts) == 2 and len(parts[0]) < BulletPatterns.MAX_LABEL_LENGTH:
            items.append(parts[0].strip())
        else:
            items.append(item)
    return items


def _trim_indicator_window(window: str) -> str:
    window = IndicatorPatterns.WINDOW_STOP.sub("", window.strip())
    window = IndicatorPatterns.TRAILING_QUALIFIER.sub("", window.strip(" ,/&-("))

    if len(window) > IndicatorPatterns.MAX_WINDOW_LENGTH:
        truncated = window[: IndicatorPatterns.MAX_WINDOW_LENGTH]
        # Keep whole words only
        if not window[IndicatorPatterns.MAX_WINDOW_LENGTH].isspace() and " " in truncated:
            truncated = truncated.rsplit(" ", 1)[0]
        window = truncated

    return window.strip(" ,/&-(")


def extract_indicator_phrases(text: str) -> list[str]:
    """
    Extract the phrase following each skill indicator.

    Example:
        >>> extract_indicator_phrases("Strong communication skills and leadership abilities required")
        ['communication skills and leadership']
    """
    phrases = []
    for regex in INDICATOR_REGEXES:
        for match in regex.finditer(text):
            phrase = _trim_indicator_window(match.group(1))
            if len(phrase) >= IndicatorPatterns.MIN_WINDOW_LENGTH:
                phrases.append(phrase)
    return phrases


def _term_in_text(term: str, text: str) -> bool:
    if len(term) < 2:
        return False
    short = len(term) <= SHORT_TERM_LENGTH
    case_sensitive = short and term != term.lower()
    return term_regex(term, case_sensitive, standalone=short).search(text) is not None


def _entry_matches(entry: TaxonomyEntry, text: str) -> list[str]:
    found = []
    if _term_in_text(entry.name, text):
        found.append(entry.name)

    alias = next((a for a in entry.aliases if _term_in_text(a, text)), None)
    if alias is not None:
        found.append(alias)
    return found


def extract_taxonomy_phrases(text: str, dictionaries: Optional[SkillDictionaries]) -> list[str]:
    """
    Scan the text for every known skill and tool term.

    Each entry contributes its name when present and the first alias present,
    verbatim as written in the dictionary.
    """
    if dictionaries is None:
        return []

    phrases = []
    for entry in dictionaries.all_entries:
        phrases.extend(_entry_matches(entry, text))
    return phrases


def extract_list_phrases(text: str) -> list[str]:
    """Split inline lists introduced by "skills include:", "such as", "e.g."."""
    items = []
    for regex in (ListPatterns.SKILLS_LIST, ListPatterns.EXAMPLE_LIST):
        for match in regex.finditer(text):
            for item in ListPatterns.ITEM_SEPARATOR.split(match.group(1)):
                item = ListPatterns.LEADING_CONJUNCTION.sub("", item.strip())
                if ListPatterns.MIN_ITEM_LENGTH <= len(item) <= ListPatterns.MAX_ITEM_LENGTH:
                    items.append(item)
    return items


# =============================================================================
# ENTRY POINT
# =============================================================================


def extract_phrases(
    text: str,
    dictionaries: Optional[SkillDictionaries] = None,
    config: Optional[ExtractionConfig] = None,
) -> list[str]:
    """
    Extract candidate skill phrases from text.

    Args:
        text: Section or full job description text
        dictionaries: Reference data for the taxonomy scan (skipped when None)
        config: Phrase length limits (defaults to ExtractionConfig())

    Returns:
        Deduplicated phrases in first-seen order. Empty or non-string input
        returns an empty list.
    """
    if not text or not isinstance(text, str):
        return []

    config = config or ExtractionConfig()
    harvested = {
        "bullets": extract_bullet_phrases(text),
        "indicators": extract_indicator_phrases(text),
        "taxonomy": extract_taxonomy_phrases(text, dictionaries),
        "lists": extract_list_phrases(text),
    }

    phrases: dict[str, None] = {}
    for strategy_phrases in harvested.values():
        for phrase in strategy_phrases:
            cleaned = clean_extracted_phrase(phrase)
            if cleaned and _passes_filters(cleaned, config):
                phrases.setdefault(cleaned)

    log_strategy_counts({name: len(found) for name, found in harvested.items()}, len(phrases))
    return list(phrases)
