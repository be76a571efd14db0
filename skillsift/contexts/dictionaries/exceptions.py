"""Custom exceptions for the dictionaries context with file references."""

from pathlib import Path
from typing import Optional


class DictionaryLoadError(Exception):
    """
    Exception raised when a dictionary resource cannot be loaded or validated.

    Attributes:
        message: Error description
        source_path: Path to the YAML file that failed
        entry: The offending entry, when a single entry is malformed
    """

    def __init__(
        self,
        message: str,
        source_path: Optional[Path] = None,
        entry: Optional[object] = None,
    ):
        self.message = message
        self.source_path = source_path
        self.entry = entry

        parts = [message]

        if source_path:
            parts.append(f"\nSource: {source_path}")

        if entry is not None:
            snippet = repr(entry)
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"Entry: {snippet}")

        super().__init__("\n".join(parts))
