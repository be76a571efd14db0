"""Shared fixtures: a small, hand-built dictionary snapshot."""

import re

import pytest

from skillsift.contexts.dictionaries import (
    ExtractionConfig,
    IgnorePattern,
    IgnoreRules,
    IgnoreRuleSet,
    SkillDictionaries,
    TaxonomyEntry,
)


@pytest.fixture
def skills_taxonomy():
    return (
        TaxonomyEntry.from_name("SQL", "Data", aliases=("structured query language",)),
        TaxonomyEntry.from_name("Python", "Programming"),
        TaxonomyEntry.from_name("Data Analysis", "Analytics"),
        TaxonomyEntry.from_name("Lifecycle Marketing", "Marketing"),
        TaxonomyEntry.from_name("Research and Development", "Strategy"),
    )


@pytest.fixture
def tools_dictionary():
    return (
        TaxonomyEntry.from_name("HubSpot", "CRM"),
        TaxonomyEntry.from_name("Salesforce", "CRM", aliases=("SFDC",)),
        TaxonomyEntry.from_name("Tableau", "BI"),
        TaxonomyEntry.from_name("Google Analytics 4", "Analytics", aliases=("GA4",)),
    )


@pytest.fixture
def ignore_rules():
    return IgnoreRules(
        soft_skills=IgnoreRuleSet(exact_matches=frozenset({"communication", "leadership"})),
        junk_phrases=IgnoreRuleSet(
            exact_matches=frozenset({"team player"}),
            patterns=(IgnorePattern.compile(r"^years? of$", "Dangling years fragment"),),
        ),
        degree_and_education=IgnoreRuleSet(
            patterns=(IgnorePattern.compile(r"\b(?:bachelor'?s?|master'?s?|degree)\b"),)
        ),
        too_generic=IgnoreRuleSet(exact_matches=frozenset({"marketing", "tools"})),
    )


@pytest.fixture
def dictionaries(skills_taxonomy, tools_dictionary, ignore_rules):
    return SkillDictionaries(
        skills_taxonomy=skills_taxonomy,
        tools_dictionary=tools_dictionary,
        ignore_rules=ignore_rules,
        forced_core_skills={"sql", "python", "data analysis"},
        soft_skill_patterns=(
            re.compile(r"\b(communication|leadership)\b", re.IGNORECASE),
            re.compile(r"\b\w+\s+skills?$", re.IGNORECASE),
        ),
        canonical_rules={"email marketing": "Lifecycle Marketing"},
        synonym_groups={"data_analysis": ["data analytics", "analytics"]},
        alias_map={"ga4": "google analytics 4", "sfdc": "salesforce"},
        tools_deny_list={"hubspot", "salesforce", "tableau", "excel"},
        generic_deny_list={"experience", "tools"},
    )


@pytest.fixture
def config():
    return ExtractionConfig()
