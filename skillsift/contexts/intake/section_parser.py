"""
Required / desired section parsing for the Intake context.

Splits a job description into the text under its required-qualification header
and the text under its desired-qualification header. Parsing is best-effort:
headers that don't match simply fall through to the full-text fallback.
"""

from dataclasses import dataclass
from typing import Optional

from skillsift.contexts.intake.logger import _log_debug
from skillsift.contexts.intake.section_patterns import (
    BOUNDARY_HEADER,
    DESIRED_HEADER,
    REQUIRED_HEADER,
)

REQUIRED = "required"
DESIRED = "desired"
BOUNDARY = "boundary"


@dataclass
class ParsedSections:
    """
    Result of section parsing.

    Attributes:
        required_section: Text treated as required qualifications
                          (the whole text when no header is recognized)
        desired_section: Text under the desired header, or None when absent
        full_text: The text that was parsed
    """

    required_section: str
    desired_section: Optional[str]
    full_text: str

    @property
    def has_desired(self) -> bool:
        return bool(self.desired_section)


def find_section_headers(text: str) -> list[tuple[int, str]]:
    """
    Locate every recognized header line.

    A line matching more than one header kind is assigned in the order
    desired, required, boundary ("Preferred Qualifications" is desired even
    though "qualifications" alone opens a required section).

    Args:
        text: Job description text

    Returns:
        Sorted list of (line start offset, kind) tuples
    """
    headers: dict[int, str] = {}
    for kind, regex in ((DESIRED, DESIRED_HEADER), (REQUIRED, REQUIRED_HEADER), (BOUNDARY, BOUNDARY_HEADER)):
        for match in regex.finditer(text):
            headers.setdefault(match.start(), kind)
    return sorted(headers.items())


def _section_span(
    headers: list[tuple[int, str]], kind: str, text_length: int
) -> Optional[tuple[int, int]]:
    """
    Span from the first header of a kind to the next header of another kind.

    Consecutive headers of the same kind (e.g., "Requirements" followed by
    "Must have") stay inside one section.
    """
    start = next((pos for pos, header_kind in headers if header_kind == kind), None)
    if start is None:
        return None

    end = next(
        (pos for pos, header_kind in headers if pos > start and header_kind != kind),
        text_length,
    )
    return start, end


def parse_sections(text: str) -> ParsedSections:
    """
    Split text into required and desired sections.

    Args:
        text: Job description text (preprocessed)

    Returns:
        ParsedSections. When neither a required nor a desired header is found,
        the entire text is the required section. When only a desired header is
        found, the required section is the text outside the desired section.

    Example:
        >>> sections = parse_sections("Required Skills:\\n- SQL\\n\\nPreferred Skills:\\n- Tableau")
        >>> sections.required_section
        'Required Skills:\\n- SQL'
        >>> sections.desired_section
        'Preferred Skills:\\n- Tableau'
    """
    if not text or not isinstance(text, str):
        return ParsedSections(required_section="", desired_section=None, full_text="")

    headers = find_section_headers(text)
    required_span = _section_span(headers, REQUIRED, len(text))
    desired_span = _section_span(headers, DESIRED, len(text))

    if required_span is None and desired_span is None:
        _log_debug("No section headers found, treating full text as required")
        return ParsedSections(required_section=text.strip(), desired_section=None, full_text=text)

    desired_section = None
    if desired_span is not None:
        desired_section = text[desired_span[0] : desired_span[1]].strip() or None

    if required_span is not None:
        required_section = text[required_span[0] : required_span[1]].strip()
    else:
        required_section = (text[: desired_span[0]] + "\n" + text[desired_span[1] :]).strip()

    _log_debug(
        f"Parsed sections: required {len(required_section)} chars, "
        f"desired {len(desired_section or '')} chars"
    )
    return ParsedSections(
        required_section=required_section, desired_section=desired_section, full_text=text
    )
