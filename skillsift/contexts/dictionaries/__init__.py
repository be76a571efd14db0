"""
Dictionaries Context

Responsibilities:
- Loads skill taxonomy, tools dictionary, ignore rules, alias and canonical
  mappings, synonym groups and deny-lists from YAML resources
- Freezes them into an immutable SkillDictionaries snapshot
- Loads pipeline thresholds (ExtractionConfig)

Owns: Reference data shape and loading
Never: Classifies or normalizes phrases
"""

from skillsift.contexts.dictionaries.dictionary_data_structures import (
    ExtractionConfig,
    IgnorePattern,
    IgnoreRules,
    IgnoreRuleSet,
    SkillDictionaries,
    TaxonomyEntry,
)
from skillsift.contexts.dictionaries.exceptions import DictionaryLoadError
from skillsift.contexts.dictionaries.loader import (
    load_dictionaries,
    load_extraction_config,
    tools_from_deny_list,
)

__all__ = [
    # Data structures
    "TaxonomyEntry",
    "IgnorePattern",
    "IgnoreRuleSet",
    "IgnoreRules",
    "SkillDictionaries",
    "ExtractionConfig",
    # Loading
    "load_dictionaries",
    "load_extraction_config",
    "tools_from_deny_list",
    "DictionaryLoadError",
]
