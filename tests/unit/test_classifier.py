"""Unit tests for the layered skill classifier."""

import pytest

from skillsift.contexts.classification import (
    ClassificationLayer,
    ClassificationResult,
    InferredType,
    SkillType,
    classify_batch,
    classify_skill_phrase,
)
from skillsift.contexts.dictionaries import SkillDictionaries, TaxonomyEntry


# =============================================================================
# VALIDATION AND LAYER 0
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("bad_input", ["", "   ", "x", None, 42])
def test_invalid_phrases_rejected(bad_input, dictionaries):
    result = classify_skill_phrase(bad_input, dictionaries)

    assert result.skill_type is SkillType.REJECTED
    assert result.source_location is ClassificationLayer.VALIDATION
    assert result.confidence == 0.0
    assert result.canonical is None


@pytest.mark.unit
def test_soft_skill_exact_match(dictionaries):
    result = classify_skill_phrase("Communication", dictionaries)

    assert result.skill_type is SkillType.REJECTED
    assert result.source_location is ClassificationLayer.SOFT_SKILL_REJECTION
    assert result.evidence == 'Soft skill exact match: "communication"'


@pytest.mark.unit
def test_soft_skill_pattern(dictionaries):
    result = classify_skill_phrase("written communication", dictionaries)

    assert result.skill_type is SkillType.REJECTED
    assert result.evidence.startswith("Soft skill pattern match")


@pytest.mark.unit
def test_soft_skill_veto_beats_dictionary(tools_dictionary, ignore_rules):
    """Test that a soft skill listed in the taxonomy is still rejected."""
    dictionaries = SkillDictionaries(
        skills_taxonomy=(TaxonomyEntry.from_name("Leadership"),),
        tools_dictionary=tools_dictionary,
        ignore_rules=ignore_rules,
    )
    result = classify_skill_phrase("leadership", dictionaries)

    assert result.skill_type is SkillType.REJECTED
    assert result.source_location is ClassificationLayer.SOFT_SKILL_REJECTION


@pytest.mark.unit
@pytest.mark.parametrize(
    "phrase, evidence",
    [
        ("team player", 'Junk phrase: "team player"'),
        ("years of", "Junk pattern: Dangling years fragment"),
        ("Bachelor's degree in Marketing", "Education/degree phrase"),
        ("marketing", "Too generic"),
    ],
)
def test_junk_degree_and_generic_rejected(phrase, evidence, dictionaries):
    result = classify_skill_phrase(phrase, dictionaries)

    assert result.skill_type is SkillType.REJECTED
    assert result.evidence == evidence


# =============================================================================
# LAYERS 1 AND 2
# =============================================================================


@pytest.mark.unit
def test_exact_tool_match(dictionaries):
    result = classify_skill_phrase("HubSpot", dictionaries)

    assert result.skill_type is SkillType.TOOL
    assert result.confidence == 1.0
    assert result.source_location is ClassificationLayer.EXACT_MATCH
    assert result.canonical == "hubspot"
    assert result.matched_entry.name == "HubSpot"


@pytest.mark.unit
def test_tool_alias_match(dictionaries):
    result = classify_skill_phrase("GA4", dictionaries)

    assert result.skill_type is SkillType.TOOL
    assert result.canonical == "google_analytics_4"


@pytest.mark.unit
def test_tool_substring_match(dictionaries):
    result = classify_skill_phrase("HubSpot CRM", dictionaries)

    assert result.skill_type is SkillType.TOOL
    assert result.evidence == "Tool name substring match"


@pytest.mark.unit
def test_exact_skill_match(dictionaries):
    result = classify_skill_phrase("lifecycle marketing", dictionaries)

    assert result.skill_type is SkillType.CORE_SKILL
    assert result.canonical == "lifecycle_marketing"
    assert result.evidence == "Exact match in skills dictionary"


@pytest.mark.unit
def test_tool_wins_over_skill(skills_taxonomy, tools_dictionary):
    """Test that an entry present in both dictionaries is a TOOL."""
    dictionaries = SkillDictionaries(
        skills_taxonomy=skills_taxonomy + (TaxonomyEntry.from_name("Tableau"),),
        tools_dictionary=tools_dictionary,
    )
    assert classify_skill_phrase("Tableau", dictionaries).skill_type is SkillType.TOOL


@pytest.mark.unit
def test_forced_core_skill(dictionaries):
    result = classify_skill_phrase("advanced SQL querying", dictionaries)

    assert result.skill_type is SkillType.CORE_SKILL
    assert result.source_location is ClassificationLayer.FORCED_CORE_SKILL
    assert result.canonical == "sql"
    assert result.confidence == 1.0


@pytest.mark.unit
def test_forced_longest_term_wins(dictionaries):
    result = classify_skill_phrase("python data analysis pipelines", dictionaries)
    assert result.canonical == "data_analysis"


@pytest.mark.unit
@pytest.mark.parametrize("phrase, canonical", [("SQL", "sql"), ("Python", "python"), ("dbt", "dbt")])
def test_forced_core_skill_with_empty_taxonomy(phrase, canonical):
    """Test that configured forced terms need no taxonomy entry."""
    dictionaries = SkillDictionaries(forced_core_skills=frozenset({"sql", "python", "dbt"}))
    result = classify_skill_phrase(phrase, dictionaries)

    assert dictionaries.skills_taxonomy == ()
    assert result.skill_type is SkillType.CORE_SKILL
    assert result.source_location is ClassificationLayer.FORCED_CORE_SKILL
    assert result.canonical == canonical
    assert result.confidence == 1.0


@pytest.mark.unit
def test_forced_term_not_matched_inside_hyphenated_word():
    """Test that "go" is forced in "Go microservices" but not in "go-to-market"."""
    dictionaries = SkillDictionaries(forced_core_skills=frozenset({"go", "sql"}))

    assert classify_skill_phrase("Go microservices", dictionaries).canonical == "go"
    result = classify_skill_phrase("go-to-market planning", dictionaries)
    assert result.source_location is not ClassificationLayer.FORCED_CORE_SKILL
    assert result.canonical != "go"


# =============================================================================
# LAYERS 3 AND 4
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "phrase, skill_type, confidence",
    [
        ("Salesforce360", SkillType.TOOL, 0.85),
        ("LinkedIn", SkillType.TOOL, 0.75),
        ("content marketing", SkillType.CORE_SKILL, 0.70),
        ("growth strategy", SkillType.CORE_SKILL, 0.80),
        ("customer segmentation", SkillType.CORE_SKILL, 0.65),
    ],
)
def test_pattern_rules(phrase, skill_type, confidence, dictionaries):
    result = classify_skill_phrase(phrase, dictionaries)

    assert result.skill_type is skill_type
    assert result.confidence == confidence
    assert result.source_location is ClassificationLayer.PATTERN_RULES


@pytest.mark.unit
def test_short_acronym_candidate(dictionaries):
    result = classify_skill_phrase("dbt", dictionaries)

    assert result.skill_type is SkillType.CANDIDATE
    assert result.confidence == 0.40
    assert result.inferred_type is InferredType.UNKNOWN


@pytest.mark.unit
def test_tool_like_candidate(dictionaries):
    result = classify_skill_phrase("node.js", dictionaries)

    assert result.skill_type is SkillType.CANDIDATE
    assert result.inferred_type is InferredType.TOOL
    assert result.canonical == "nodejs"
    assert result.confidence == 0.50


@pytest.mark.unit
def test_unclassified_candidate(dictionaries):
    result = classify_skill_phrase("looker", dictionaries)

    assert result.skill_type is SkillType.CANDIDATE
    assert result.confidence == 0.35
    assert result.source_location is ClassificationLayer.CONTEXT_HEURISTICS


@pytest.mark.unit
def test_single_char_skill_not_rejected(dictionaries):
    result = classify_skill_phrase("R", dictionaries)
    assert result.skill_type is not SkillType.REJECTED


# =============================================================================
# PROPERTIES AND BATCHES
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "phrase",
    ["", None, "!!!", "a" * 500, "HubSpot", "communication", "c++", "SQL; DROP TABLE", 0, ["SQL"]],
)
def test_classification_is_total(phrase, dictionaries):
    """Test that every input gets exactly one type with bounded confidence."""
    result = classify_skill_phrase(phrase, dictionaries)

    assert isinstance(result, ClassificationResult)
    assert result.skill_type in SkillType
    assert 0.0 <= result.confidence <= 1.0
    assert result.evidence


@pytest.mark.unit
def test_classification_without_dictionaries():
    """Test that an empty snapshot still classifies via pattern rules."""
    assert classify_skill_phrase("HubSpot").skill_type is SkillType.TOOL
    assert classify_skill_phrase("HubSpot").source_location is ClassificationLayer.PATTERN_RULES


@pytest.mark.unit
def test_classify_batch_buckets(dictionaries):
    batch = classify_batch(["SQL", "HubSpot", "dbt", "communication", "Tableau"], dictionaries)

    assert [p.raw for p in batch.core_skills] == ["SQL"]
    assert [p.raw for p in batch.tools] == ["HubSpot", "Tableau"]
    assert [p.raw for p in batch.candidates] == ["dbt"]
    assert [p.raw for p in batch.rejected] == ["communication"]
    assert len(batch) == 5


@pytest.mark.unit
def test_classified_phrase_to_dict(dictionaries):
    batch = classify_batch(["node.js"], dictionaries)
    data = batch.candidates[0].to_dict()

    assert data["raw"] == "node.js"
    assert data["inferred_type"] == "TOOL"
    assert data["source_location"] == "layer_4_context_heuristics"
