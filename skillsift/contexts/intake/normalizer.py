"""
Job posting text normalizer for the Intake context.

Postings arrive as copied page text, markdown or raw HTML from a job board.
Everything is reduced to one plain-text shape before section parsing:

    html        tags become line breaks, <li> items become "- " bullets,
                entities are unescaped
    unicode     NFKC plus a replacement table (spaces, quotes, dashes, "C♯")
    separators  inline "·", "•" and " | " lists become commas for the splitter
    headers     nested bold sub-headers (**- Required Skills:**) are flattened
    layout      trailing spaces and runs of blank lines are collapsed

Each step is a plain function so tests can exercise them one at a time.
"""

import html
import re
import unicodedata

from skillsift.contexts.intake.section_patterns import MarkdownHeaderPatterns

UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    "\u2007": " ",  # figure space
    # Zero-width characters -> remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM
    # Quotes
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    # Dashes and minus signs
    "\u2013": "-",
    "\u2014": "-",
    "\u2212": "-",
    # Skill-name symbols pasted from rich text
    "\u266f": "#",  # music sharp, as in "C♯"
    # Misc
    "\u2026": "...",
    "\r\n": "\n",
    "\r": "\n",
}

# Markup only counts as HTML when a structural tag is present
HTML_STRUCTURE = re.compile(r"</?(?:li|ul|ol|p|br|div|h[1-6]|strong|b|em|span)\b[^>]*>", re.IGNORECASE)
HTML_LIST_ITEM = re.compile(r"<li\b[^>]*>", re.IGNORECASE)
HTML_BLOCK_BREAK = re.compile(r"</?(?:br|p|div|ul|ol|li|h[1-6]|tr)\b[^>]*>", re.IGNORECASE)
HTML_TAG = re.compile(r"<[^>]+>")

# A separator glyph with text on both sides of it on the same line
INLINE_SEPARATOR = re.compile(r"(?<=\S)[ \t]+(?:[·•|])[ \t]+(?=\S)")

TRAILING_SPACE = re.compile(r"[ \t]+$", re.MULTILINE)
BLANK_LINE_RUN = re.compile(r"\n{3,}")


def strip_html_markup(text: str) -> str:
    """
    Turn an HTML posting into plain lines.

    List items become "- " bullets so the bullet extractor sees them; block
    tags become line breaks; remaining tags are dropped and entities are
    unescaped. Text without structural tags is returned unchanged.

    Example:
        >>> strip_html_markup("<h3>Requirements</h3><ul><li>SQL &amp; Python</li></ul>")
        '\\nRequirements\\n\\n\\n- SQL & Python\\n\\n'
    """
    if not HTML_STRUCTURE.search(text):
        return text

    text = HTML_LIST_ITEM.sub("\n- ", text)
    text = HTML_BLOCK_BREAK.sub("\n", text)
    text = HTML_TAG.sub("", text)
    return html.unescape(text)


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause parsing issues.

    Applies NFKC normalization and replaces common problematic characters
    with ASCII equivalents. Bullet glyphs (•, ◦, ▪, ●) are left in place
    because the bullet extractor keys on them.
    """
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def normalize_inline_separators(text: str) -> str:
    """
    Rewrite glyph-separated inline lists as comma lists.

    A glyph at the start of a line is a bullet and stays.

    Example:
        >>> normalize_inline_separators("Stack: SQL · Python | Tableau")
        'Stack: SQL, Python, Tableau'
    """
    return INLINE_SEPARATOR.sub(", ", text)


def flatten_subsection_headers(text: str) -> str:
    """
    Convert nested subsection headers to flat section headers.

    Transforms **- Child:** or **• Child:** to **Child:**
    """

    def replace_subsection(match: re.Match) -> str:
        return f"**{match.group(1).strip()}:**"

    return re.sub(MarkdownHeaderPatterns.SUBSECTION_MARKER, replace_subsection, text)


def collapse_layout(text: str) -> str:
    text = TRAILING_SPACE.sub("", text)
    return BLANK_LINE_RUN.sub("\n\n", text).strip()


def preprocess_job_text(text: str) -> str:
    """
    Preprocess job posting text before section parsing.

    Args:
        text: Raw job description (plain text, markdown or HTML)

    Returns:
        Normalized text, or "" for empty / non-string input
    """
    if not text or not isinstance(text, str):
        return ""

    text = strip_html_markup(text)
    text = normalize_unicode(text)
    text = flatten_subsection_headers(text)
    text = normalize_inline_separators(text)
    return collapse_layout(text)
