"""
Shared utilities for SKILLSIFT.

Common functionality used across contexts:
- Text processing (canonical keys, whitespace handling)
- Logger setup
- Timestamps
"""

from skillsift.utils.text_processing import collapse_whitespace, to_canonical_key
from skillsift.utils.timestamp import now, now_exact

__all__ = ["collapse_whitespace", "to_canonical_key", "now", "now_exact"]
