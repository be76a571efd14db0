"""Unit tests for multi-pass skill normalization and stream filters."""

import pytest

from skillsift.contexts.dictionaries import ExtractionConfig, TaxonomyEntry
from skillsift.contexts.normalization import (
    MatchType,
    SkillFuzzyMatcher,
    SkillNormalizer,
    build_skill_lookup_map,
    clean_skill_phrase,
    filter_out_generic,
    filter_out_tools,
    get_confidence_label,
)


@pytest.fixture
def skill_normalizer(skills_taxonomy, dictionaries):
    return SkillNormalizer(skills_taxonomy, dictionaries)


@pytest.fixture
def tool_normalizer(tools_dictionary, dictionaries):
    return SkillNormalizer(tools_dictionary, dictionaries, SkillFuzzyMatcher(tools_dictionary))


# =============================================================================
# CLEANING
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "phrase, expected",
    [
        ("Experience with Data Analysis & Reporting (advanced)", "data analysis/reporting"),
        ("SQL skills", "sql"),
        ("  Knowledge of   Python ", "python"),
        ("Tableau / Looker", "tableau/looker"),
        ("", ""),
        (None, ""),
    ],
)
def test_clean_skill_phrase(phrase, expected):
    assert clean_skill_phrase(phrase) == expected


# =============================================================================
# PASSES
# =============================================================================


@pytest.mark.unit
def test_alias_pass(tool_normalizer):
    result = tool_normalizer.normalize("GA4")

    assert result.match_type is MatchType.ALIAS
    assert result.canonical == "google_analytics_4"
    assert result.confidence == 0.98


@pytest.mark.unit
def test_alias_pass_disabled(tools_dictionary, dictionaries):
    """Test that with aliases off the dictionary alias still matches exactly."""
    normalizer = SkillNormalizer(
        tools_dictionary, dictionaries, config=ExtractionConfig(use_aliases=False)
    )
    result = normalizer.normalize("GA4")

    assert result.match_type is MatchType.EXACT
    assert result.canonical == "google_analytics_4"


@pytest.mark.unit
def test_exact_pass(skill_normalizer):
    result = skill_normalizer.normalize("Lifecycle Marketing")

    assert result.match_type is MatchType.EXACT
    assert result.normalized == "Lifecycle Marketing"
    assert result.canonical == "lifecycle_marketing"
    assert result.confidence == 1.0
    assert result.category == "Marketing"


@pytest.mark.unit
def test_exact_pass_by_taxonomy_alias(skill_normalizer):
    result = skill_normalizer.normalize("Structured Query Language")

    assert result.match_type is MatchType.EXACT
    assert result.canonical == "sql"


@pytest.mark.unit
def test_canonical_rule_pass(skill_normalizer):
    result = skill_normalizer.normalize("email marketing")

    assert result.match_type is MatchType.CANONICAL
    assert result.canonical == "lifecycle_marketing"
    assert result.confidence == 0.95


@pytest.mark.unit
def test_fuzzy_pass(skills_taxonomy, dictionaries):
    normalizer = SkillNormalizer(skills_taxonomy, dictionaries, SkillFuzzyMatcher(skills_taxonomy))
    result = normalizer.normalize("lifecyle marketing")

    assert result.match_type is MatchType.FUZZY
    assert result.canonical == "lifecycle_marketing"
    assert 0.9 < result.confidence < 1.0


@pytest.mark.unit
def test_fuzzy_pass_rejects_distant_short_phrase(tool_normalizer):
    """Test that short phrases use the strict cutoff."""
    result = tool_normalizer.normalize("Talend")
    assert result.match_type is MatchType.UNMATCHED


@pytest.mark.unit
def test_synonym_pass(skill_normalizer):
    result = skill_normalizer.normalize("data analytics")

    assert result.match_type is MatchType.SYNONYM
    assert result.canonical == "data_analysis"
    assert result.confidence == 0.85


@pytest.mark.unit
def test_unmatched(skill_normalizer):
    result = skill_normalizer.normalize("underwater basket weaving")

    assert result.match_type is MatchType.UNMATCHED
    assert result.canonical == "underwater_basket_weaving"
    assert result.confidence == 0.3
    assert not result.is_matched
    assert result.category == "Other"


@pytest.mark.unit
@pytest.mark.parametrize("bad_input", ["", None, "x", "   "])
def test_blank_input(skill_normalizer, bad_input):
    result = skill_normalizer.normalize(bad_input)

    assert result.match_type is MatchType.NONE
    assert result.confidence == 0.0
    assert result.canonical is None


@pytest.mark.unit
def test_single_char_skill_normalized(skill_normalizer):
    result = skill_normalizer.normalize("R")

    assert result.match_type is MatchType.UNMATCHED
    assert result.canonical == "r"


@pytest.mark.unit
@pytest.mark.parametrize("phrase", ["SQL", "Lifecycle Marketing", "data analytics", "email marketing"])
def test_normalization_idempotent(skill_normalizer, phrase):
    """Test that normalizing a normalized name returns the same canonical key."""
    first = skill_normalizer.normalize(phrase)
    second = skill_normalizer.normalize(first.normalized)

    assert second.canonical == first.canonical


@pytest.mark.unit
def test_entry_name_matched_before_cleaning(dictionaries):
    """Test that a name ending in a qualifier word still resolves to its own entry."""
    taxonomy = [
        TaxonomyEntry.from_name("Customer", "Sales"),
        TaxonomyEntry.from_name("Customer Experience", "Lifecycle"),
    ]
    result = SkillNormalizer(taxonomy, dictionaries).normalize("Customer Experience")

    assert result.canonical == "customer_experience"
    assert result.match_type is MatchType.EXACT
    assert result.confidence == 1.0


@pytest.mark.unit
def test_alias_never_shadows_another_name(dictionaries):
    """Test that an earlier entry's alias cannot claim a later entry's name."""
    affiliate = TaxonomyEntry.from_name("Affiliate Marketing", "Marketing", aliases=("partner marketing",))
    partner = TaxonomyEntry.from_name("Partner Marketing", "Marketing")
    normalizer = SkillNormalizer([affiliate, partner], dictionaries)

    assert build_skill_lookup_map([affiliate, partner])["partner marketing"] is partner
    assert normalizer.normalize("Partner Marketing").canonical == "partner_marketing"
    assert normalizer.normalize("affiliate marketing").canonical == "affiliate_marketing"


# =============================================================================
# BATCH
# =============================================================================


@pytest.mark.unit
def test_normalize_and_deduplicate(skill_normalizer):
    results = skill_normalizer.normalize_and_deduplicate(["SQL", "sql skills", "xyz", "Python"])

    assert [r.canonical for r in results] == ["sql", "python"]
    assert results[0].original == "SQL"


@pytest.mark.unit
def test_deduplicate_keeps_highest_confidence(skill_normalizer):
    results = skill_normalizer.normalize_and_deduplicate(["data analytics", "Data Analysis"])

    assert len(results) == 1
    assert results[0].confidence == 1.0
    assert results[0].original == "Data Analysis"


@pytest.mark.unit
def test_deduplicate_keeps_long_unmatched(skill_normalizer):
    results = skill_normalizer.normalize_and_deduplicate(["cohort retention modeling", None, ""])

    assert [r.canonical for r in results] == ["cohort_retention_modeling"]
    assert results[0].match_type is MatchType.UNMATCHED


# =============================================================================
# FILTERS AND LABELS
# =============================================================================


@pytest.mark.unit
def test_filter_out_tools():
    phrases = ["hubspot crm", "lifecycle marketing", "Advanced Excel", "HubSpot", "excellence"]
    assert filter_out_tools(phrases, {"hubspot", "excel"}) == ["lifecycle marketing", "excellence"]


@pytest.mark.unit
def test_filter_out_generic():
    assert filter_out_generic(["Experience", "SQL", "tools"], {"experience", "tools"}) == ["SQL"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "confidence, label",
    [(1.0, "exact"), (0.95, "exact"), (0.9, "high"), (0.75, "medium"), (0.5, "low"), (0.3, "uncertain")],
)
def test_confidence_labels(confidence, label):
    assert get_confidence_label(confidence) == label
