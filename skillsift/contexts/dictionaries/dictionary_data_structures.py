"""
Reference data structures for skill extraction.

Everything here is immutable: a SkillDictionaries snapshot is built once by the
loader (or by hand in tests) and passed explicitly to every pipeline call.
Hot reloads build a new snapshot instead of mutating the current one.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from skillsift.utils.text_processing import to_canonical_key


@dataclass(frozen=True)
class TaxonomyEntry:
    """
    Canonical skill or tool definition.

    Tools use the same shape but live in SkillDictionaries.tools_dictionary.
    """

    name: str
    canonical: str
    category: str = "Uncategorized"
    aliases: tuple[str, ...] = ()

    @classmethod
    def from_name(
        cls, name: str, category: str = "Uncategorized", aliases: tuple[str, ...] = ()
    ) -> "TaxonomyEntry":
        """Create an entry whose canonical key is derived from its display name."""
        return cls(name=name, canonical=to_canonical_key(name), category=category, aliases=aliases)

    @property
    def terms(self) -> tuple[str, ...]:
        """Name, canonical key (spaced) and aliases, in lookup order."""
        return (self.name, self.canonical.replace("_", " "), *self.aliases)


@dataclass(frozen=True)
class IgnorePattern:
    """Compiled rejection pattern with a human-readable description."""

    pattern: re.Pattern
    description: str

    @classmethod
    def compile(cls, pattern: str, description: Optional[str] = None) -> "IgnorePattern":
        return cls(re.compile(pattern, re.IGNORECASE), description or pattern)


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Exact matches (lowercase) and patterns for one rejection category."""

    exact_matches: frozenset[str] = frozenset()
    patterns: tuple[IgnorePattern, ...] = ()

    def match(self, phrase: str) -> Optional[str]:
        """
        Check a lowercased phrase against this rule set.

        Returns:
            "exact" for an exact hit, the pattern description for a pattern hit,
            None when nothing matches
        """
        if phrase in self.exact_matches:
            return "exact"
        for ignore_pattern in self.patterns:
            if ignore_pattern.pattern.search(phrase):
                return ignore_pattern.description
        return None


@dataclass(frozen=True)
class IgnoreRules:
    """Layer 0 rejection rules, checked in field order."""

    soft_skills: IgnoreRuleSet = IgnoreRuleSet()
    junk_phrases: IgnoreRuleSet = IgnoreRuleSet()
    degree_and_education: IgnoreRuleSet = IgnoreRuleSet()
    too_generic: IgnoreRuleSet = IgnoreRuleSet()


def _frozen_mapping(values: Optional[Mapping] = None) -> Mapping:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class SkillDictionaries:
    """
    Immutable snapshot of all reference data consumed by the pipeline.

    Attributes:
        skills_taxonomy: Core skill concepts (e.g., Lifecycle Marketing)
        tools_dictionary: Tools and platforms (e.g., HubSpot)
        ignore_rules: Soft skill, junk, degree and too-generic rejection rules
        forced_core_skills: Lowercase terms always classified as CORE_SKILL
        soft_skill_patterns: Compiled patterns that veto a phrase as a soft skill
        canonical_rules: Lowercase phrase -> taxonomy skill name
        synonym_groups: Canonical key -> synonym strings
        alias_map: Lowercase abbreviation -> canonical display name
        tools_deny_list: Lowercase tool names removed from the skill stream
        generic_deny_list: Lowercase noise phrases removed from every stream
    """

    skills_taxonomy: tuple[TaxonomyEntry, ...] = ()
    tools_dictionary: tuple[TaxonomyEntry, ...] = ()
    ignore_rules: IgnoreRules = IgnoreRules()
    forced_core_skills: frozenset[str] = frozenset()
    soft_skill_patterns: tuple[re.Pattern, ...] = ()
    canonical_rules: Mapping[str, str] = field(default_factory=_frozen_mapping)
    synonym_groups: Mapping[str, tuple[str, ...]] = field(default_factory=_frozen_mapping)
    alias_map: Mapping[str, str] = field(default_factory=_frozen_mapping)
    tools_deny_list: frozenset[str] = frozenset()
    generic_deny_list: frozenset[str] = frozenset()

    def __post_init__(self):
        # Accept plain dicts and lists from callers while keeping the snapshot read-only
        object.__setattr__(self, "skills_taxonomy", tuple(self.skills_taxonomy))
        object.__setattr__(self, "tools_dictionary", tuple(self.tools_dictionary))
        object.__setattr__(self, "soft_skill_patterns", tuple(self.soft_skill_patterns))
        object.__setattr__(
            self, "forced_core_skills", frozenset(s.lower() for s in self.forced_core_skills)
        )
        object.__setattr__(
            self, "tools_deny_list", frozenset(s.lower() for s in self.tools_deny_list)
        )
        object.__setattr__(
            self, "generic_deny_list", frozenset(s.lower() for s in self.generic_deny_list)
        )
        object.__setattr__(
            self,
            "canonical_rules",
            _frozen_mapping({k.lower(): v for k, v in self.canonical_rules.items()}),
        )
        object.__setattr__(
            self,
            "alias_map",
            _frozen_mapping({k.lower(): v for k, v in self.alias_map.items()}),
        )
        object.__setattr__(
            self,
            "synonym_groups",
            _frozen_mapping({k: tuple(v) for k, v in self.synonym_groups.items()}),
        )

    @classmethod
    def empty(cls) -> "SkillDictionaries":
        """Snapshot with no reference data; the pipeline still runs on pattern rules."""
        return cls()

    @property
    def all_entries(self) -> tuple[TaxonomyEntry, ...]:
        """Skills followed by tools, for scans that cover both dictionaries."""
        return self.skills_taxonomy + self.tools_dictionary


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Tunable thresholds for one pipeline configuration.

    Attributes:
        min_phrase_length: Minimum characters for an extracted phrase
        max_phrase_words: Maximum words for an extracted phrase
        max_phrase_chars: Maximum characters for an extracted phrase
        min_confidence: Records below this confidence are dropped
        fuzzy_threshold: Static fuzzy cutoff used when dynamic_thresholds is off
        dynamic_thresholds: Use length-banded fuzzy cutoffs
        use_aliases: Enable the alias-table normalization pass
        max_skills_per_job: Cap on total records across streams (0 = unlimited)
        cache_max_size: LRU size for SkillExtractionService
    """

    min_phrase_length: int = 2
    max_phrase_words: int = 5
    max_phrase_chars: int = 50
    min_confidence: float = 0.5
    fuzzy_threshold: float = 0.35
    dynamic_thresholds: bool = True
    use_aliases: bool = True
    max_skills_per_job: int = 0
    cache_max_size: int = 50
