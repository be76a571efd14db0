"""
Dictionary loading for skill extraction.

Reads the YAML resources under a dictionaries directory into an immutable
SkillDictionaries snapshot:

    skills_taxonomy.yaml   core skill concepts
    tools.yaml             tools and platforms
    ignore_rules.yaml      layer 0 rejection rules
    skill_rules.yaml       forced core skills, soft skill patterns, alias map,
                           canonical rules, synonym groups
    deny_lists.yaml        tools and generic deny-lists

The directory defaults to SKILLSIFT_DICTIONARIES_PATH (from .env), falling back
to the dictionaries bundled with the package.
"""

import os
import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from skillsift.contexts.dictionaries.dictionary_data_structures import (
    ExtractionConfig,
    IgnorePattern,
    IgnoreRules,
    IgnoreRuleSet,
    SkillDictionaries,
    TaxonomyEntry,
)
from skillsift.contexts.dictionaries.exceptions import DictionaryLoadError
from skillsift.contexts.dictionaries.logger import (
    _log_debug,
    _log_warning,
    log_dictionaries_loaded,
)
from skillsift.utils.text_processing import to_canonical_key, to_identifier_key

load_dotenv()

BUNDLED_DATA_PATH = Path(__file__).parent / "data"
DICTIONARIES_PATH = Path(os.getenv("SKILLSIFT_DICTIONARIES_PATH", BUNDLED_DATA_PATH))
EXTRACTION_CONFIG_PATH = Path(
    os.getenv("SKILLSIFT_EXTRACTION_CONFIG", BUNDLED_DATA_PATH / "extraction.yaml")
)

SKILLS_FILE = "skills_taxonomy.yaml"
TOOLS_FILE = "tools.yaml"
IGNORE_RULES_FILE = "ignore_rules.yaml"
SKILL_RULES_FILE = "skill_rules.yaml"
DENY_LISTS_FILE = "deny_lists.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load one YAML file into plain containers, wrapping every failure."""
    if not path.exists():
        raise DictionaryLoadError("Dictionary file not found", source_path=path)

    try:
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    except (yaml.YAMLError, OmegaConfBaseException, OSError) as e:
        raise DictionaryLoadError(f"Could not parse YAML: {e}", source_path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DictionaryLoadError("Top level must be a mapping", source_path=path)
    return data


def _compile_pattern(pattern: str, source: Path) -> re.Pattern:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise DictionaryLoadError(f"Invalid regex: {e}", source_path=source, entry=pattern) from e


def _parse_entries(raw_entries: Optional[list], source: Path) -> tuple[TaxonomyEntry, ...]:
    """
    Convert raw YAML entries into TaxonomyEntry objects.

    Entries without a canonical key get one derived from the name.
    Entries without a name are rejected.
    """
    entries = []
    for raw in raw_entries or []:
        if not isinstance(raw, dict) or not raw.get("name"):
            raise DictionaryLoadError("Entry is missing a name", source_path=source, entry=raw)

        name = str(raw["name"]).strip()
        canonical = raw.get("canonical") or to_canonical_key(name)
        aliases = tuple(str(alias) for alias in raw.get("aliases") or [] if alias)
        entries.append(
            TaxonomyEntry(
                name=name,
                canonical=str(canonical),
                category=str(raw.get("category") or "Uncategorized"),
                aliases=aliases,
            )
        )
    return tuple(entries)


def _parse_rule_set(raw: Optional[dict], source: Path) -> IgnoreRuleSet:
    if not raw:
        return IgnoreRuleSet()

    exact_matches = frozenset(str(term).lower().strip() for term in raw.get("exact_matches") or [])

    patterns = []
    for item in raw.get("patterns") or []:
        if isinstance(item, str):
            pattern, description = item, None
        elif isinstance(item, dict) and item.get("pattern"):
            pattern, description = item["pattern"], item.get("description")
        else:
            raise DictionaryLoadError("Malformed ignore pattern", source_path=source, entry=item)
        _compile_pattern(pattern, source)
        patterns.append(IgnorePattern.compile(pattern, description))

    return IgnoreRuleSet(exact_matches=exact_matches, patterns=tuple(patterns))


def parse_ignore_rules(raw: dict, source: Path) -> IgnoreRules:
    """Build IgnoreRules from the ignore_rules.yaml mapping."""
    return IgnoreRules(
        soft_skills=_parse_rule_set(raw.get("soft_skills"), source),
        junk_phrases=_parse_rule_set(raw.get("junk_phrases"), source),
        degree_and_education=_parse_rule_set(raw.get("degree_and_education"), source),
        too_generic=_parse_rule_set(raw.get("too_generic"), source),
    )


def tools_from_deny_list(deny_list) -> tuple[TaxonomyEntry, ...]:
    """
    Synthesize a tools dictionary from the tools deny-list.

    Used when tools.yaml has no entries. Each deny-list term becomes an entry
    with the term as its name and no aliases.

    Example:
        >>> tools_from_deny_list({"close.io"})
        (TaxonomyEntry(name='close.io', canonical='closeio', category='Tool', aliases=()),)
    """
    tools = []
    for term in sorted(deny_list):
        name = str(term).strip()
        if not name:
            continue
        tools.append(TaxonomyEntry(name=name, canonical=to_identifier_key(name), category="Tool"))
    return tuple(tools)


def load_dictionaries(config_dir: Optional[Path] = None) -> SkillDictionaries:
    """
    Load every dictionary resource into an immutable snapshot.

    Args:
        config_dir: Directory containing the YAML resources
                    (defaults to SKILLSIFT_DICTIONARIES_PATH or the bundled data)

    Returns:
        SkillDictionaries snapshot

    Raises:
        DictionaryLoadError: If a file is missing, unparsable, or malformed

    Example:
        >>> dictionaries = load_dictionaries()
        >>> any(t.canonical == "hubspot" for t in dictionaries.tools_dictionary)
        True
    """
    config_dir = Path(config_dir) if config_dir is not None else DICTIONARIES_PATH

    skills_path = config_dir / SKILLS_FILE
    tools_path = config_dir / TOOLS_FILE
    ignore_path = config_dir / IGNORE_RULES_FILE
    rules_path = config_dir / SKILL_RULES_FILE
    deny_path = config_dir / DENY_LISTS_FILE

    skills_taxonomy = _parse_entries(_load_yaml(skills_path).get("skills"), skills_path)
    tools_dictionary = _parse_entries(_load_yaml(tools_path).get("tools"), tools_path)
    ignore_rules = parse_ignore_rules(_load_yaml(ignore_path), ignore_path)

    rules = _load_yaml(rules_path)
    deny_lists = _load_yaml(deny_path)

    tools_deny_list = frozenset(str(t).lower() for t in deny_lists.get("tools") or [])
    generic_deny_list = frozenset(str(t).lower() for t in deny_lists.get("generic") or [])

    if not tools_dictionary:
        _log_warning(f"{tools_path.name} has no entries, falling back to the tools deny-list")
        tools_dictionary = tools_from_deny_list(tools_deny_list)

    dictionaries = SkillDictionaries(
        skills_taxonomy=skills_taxonomy,
        tools_dictionary=tools_dictionary,
        ignore_rules=ignore_rules,
        forced_core_skills=frozenset(str(s) for s in rules.get("forced_core_skills") or []),
        soft_skill_patterns=tuple(
            _compile_pattern(p, rules_path) for p in rules.get("soft_skill_patterns") or []
        ),
        canonical_rules=rules.get("canonical_rules") or {},
        synonym_groups=rules.get("synonym_groups") or {},
        alias_map=rules.get("alias_map") or {},
        tools_deny_list=tools_deny_list,
        generic_deny_list=generic_deny_list,
    )

    log_dictionaries_loaded(dictionaries, config_dir)
    return dictionaries


def load_extraction_config(config_path: Optional[Path] = None) -> ExtractionConfig:
    """
    Load pipeline thresholds from extraction.yaml.

    Missing keys keep their ExtractionConfig defaults.

    Args:
        config_path: Path to the YAML file (defaults to SKILLSIFT_EXTRACTION_CONFIG
                     or the bundled extraction.yaml)

    Returns:
        ExtractionConfig

    Raises:
        DictionaryLoadError: If the file is missing, unparsable, or has unknown keys
    """
    config_path = Path(config_path) if config_path is not None else EXTRACTION_CONFIG_PATH
    values = _load_yaml(config_path)

    known = {f.name for f in fields(ExtractionConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise DictionaryLoadError(
            f"Unknown extraction config keys: {', '.join(unknown)}", source_path=config_path
        )

    _log_debug(f"Loaded extraction config from {config_path}")
    return ExtractionConfig(**values)
