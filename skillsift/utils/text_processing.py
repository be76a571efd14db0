"""
Text processing utilities shared by the extraction contexts.

Canonical keys are the lookup and deduplication identity for every skill and tool
concept, so every context builds them through to_canonical_key().
"""

import re
from functools import lru_cache

WHITESPACE = re.compile(r"\s+")
NON_WORD = re.compile(r"[^\w\s]")
NON_KEY_CHARS = re.compile(r"[^a-z0-9_]")


def collapse_whitespace(text: str) -> str:
    """
    Collapse runs of whitespace to single spaces and strip the ends.

    Example:
        >>> collapse_whitespace("  SQL \\n  and   Python ")
        'SQL and Python'
    """
    return WHITESPACE.sub(" ", text).strip()


def to_canonical_key(phrase: str) -> str:
    """
    Convert a phrase to canonical key format (lowercase, underscores).

    Punctuation is dropped before whitespace becomes underscores, so variants like
    "A/B Testing" and "ab testing" share a key.

    Args:
        phrase: Display name or raw phrase

    Returns:
        Canonical key, or "" for empty input

    Example:
        >>> to_canonical_key("Google Analytics 4")
        'google_analytics_4'
        >>> to_canonical_key("A/B Testing")
        'ab_testing'
    """
    if not phrase or not isinstance(phrase, str):
        return ""
    key = NON_WORD.sub("", phrase.lower().strip())
    return WHITESPACE.sub("_", key.strip())


def to_identifier_key(name: str) -> str:
    """
    Build a strict [a-z0-9_] key from a free-form name.

    Used for synthesized dictionary entries, where keys must never contain
    unicode word characters.

    Example:
        >>> to_identifier_key("Close.io")
        'closeio'
    """
    key = WHITESPACE.sub("_", (name or "").lower().strip())
    return NON_KEY_CHARS.sub("", key)


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


@lru_cache(maxsize=4096)
def term_regex(term: str, case_sensitive: bool = False, standalone: bool = False) -> re.Pattern:
    """
    Compile a whole-word regex for a dictionary term.

    Word edges use lookarounds so terms with symbols ("c++", "html/css") work.
    A standalone term must also not touch a hyphen, so "go" stays out of
    "go-to-market".

    Example:
        >>> bool(term_regex("sql").search("Strong SQL skills"))
        True
        >>> bool(term_regex("sql").search("NoSQL databases"))
        False
        >>> bool(term_regex("go", standalone=True).search("go-to-market plans"))
        False
    """
    flags = 0 if case_sensitive else re.IGNORECASE
    edge = r"[\w-]" if standalone else r"\w"
    return re.compile(rf"(?<!{edge}){re.escape(term)}(?!{edge})", flags)
