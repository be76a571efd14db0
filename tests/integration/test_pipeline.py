"""
Integration tests for the extraction pipeline.
Tests: raw job text -> sections -> phrases -> classification -> normalization -> records.
"""

import json

import pytest

from skillsift.contexts.classification import SkillType
from skillsift.contexts.dictionaries import ExtractionConfig
from skillsift.contexts.extraction import ExtractionResult, FuzzyMatchers, extract_skills

REQUIRED_AND_PREFERRED = "Required:\n- SQL\n- Python\n\nPreferred:\n- Tableau"


@pytest.fixture
def fuzzy_matchers(dictionaries):
    return FuzzyMatchers.build(dictionaries)


@pytest.mark.integration
def test_required_and_preferred(dictionaries, fuzzy_matchers):
    result = extract_skills(REQUIRED_AND_PREFERRED, dictionaries, fuzzy_matchers=fuzzy_matchers)

    assert [r.name for r in result.required] == ["SQL", "Python"]
    assert [r.name for r in result.desired] == ["Tableau"]
    assert result.desired[0].skill_type is SkillType.TOOL
    assert result.required_tools == []
    assert result.desired_skills == []
    assert result.confidence == 1.0


@pytest.mark.integration
def test_required_and_preferred_skills_headers(dictionaries, fuzzy_matchers):
    text = "Required Skills:\n- SQL\n- Python\n\nPreferred Skills:\n- Tableau"
    result = extract_skills(text, dictionaries, fuzzy_matchers=fuzzy_matchers)

    assert [r.name for r in result.required] == ["SQL", "Python"]
    assert [r.name for r in result.desired] == ["Tableau"]


@pytest.mark.integration
def test_soft_skills_only(dictionaries):
    """Test that soft-skill text yields nothing but rejections."""
    text = "Strong communication skills and leadership abilities required"
    result = extract_skills(text, dictionaries)

    assert result.required == []
    assert result.desired == []
    assert result.candidates == []
    assert [p.raw for p in result.rejected] == ["communication skills", "leadership"]
    assert result.is_empty
    assert result.confidence == 0.0


@pytest.mark.integration
def test_abbreviation_pair_resolves_to_one_tool(dictionaries, fuzzy_matchers):
    text = "Requirements:\n- GA4 (Google Analytics 4)"
    result = extract_skills(text, dictionaries, fuzzy_matchers=fuzzy_matchers)

    assert [r.canonical for r in result.required] == ["google_analytics_4"]
    assert result.required[0].is_tool
    assert result.required[0].confidence == 1.0


@pytest.mark.integration
def test_required_wins_over_desired(dictionaries):
    text = "Requirements:\n- SQL\n- Tableau\n\nNice to have:\n- SQL\n- Python"
    result = extract_skills(text, dictionaries)

    required_keys = {r.canonical for r in result.required}
    desired_keys = {r.canonical for r in result.desired}

    assert required_keys == {"sql", "tableau"}
    assert desired_keys == {"python"}
    assert not required_keys & desired_keys


@pytest.mark.integration
def test_no_duplicate_canonicals(dictionaries):
    text = "Requirements:\n- SQL\n- sql\n- Structured Query Language\n- SQL skills (advanced)"
    result = extract_skills(text, dictionaries)

    canonicals = [r.canonical for r in result.required]
    assert canonicals == ["sql"]


@pytest.mark.integration
def test_low_confidence_records_dropped(dictionaries):
    """Test that pattern-only skills that normalize unmatched fall below min_confidence."""
    result = extract_skills("Requirements:\n- Customer segmentation\n- SQL", dictionaries)

    assert [r.canonical for r in result.required] == ["sql"]
    assert result.debug.core_skills == 2
    assert result.debug.after_normalization == 2
    assert result.debug.after_confidence_filter == 1


@pytest.mark.integration
def test_tool_names_filtered_from_skill_stream(dictionaries):
    result = extract_skills("Requirements:\n- Advanced Excel\n- SQL", dictionaries)

    assert [r.canonical for r in result.required] == ["sql"]
    assert result.debug.core_skills == 2
    assert result.debug.after_tool_filter == 1


@pytest.mark.integration
def test_candidates_kept_for_review(dictionaries):
    result = extract_skills("Requirements:\n- dbt\n- SQL", dictionaries)

    assert [p.raw for p in result.candidates] == ["dbt"]
    assert [r.canonical for r in result.required] == ["sql"]


@pytest.mark.integration
def test_max_skills_per_job(dictionaries):
    config = ExtractionConfig(max_skills_per_job=2)
    text = "Requirements:\n- SQL\n- Python\n\nPreferred:\n- Tableau\n- GA4"
    result = extract_skills(text, dictionaries, config)

    assert len(result.required) + len(result.desired) == 2
    assert result.debug.final == 2


@pytest.mark.integration
def test_min_confidence_raised(dictionaries, fuzzy_matchers):
    """Test that alias matches (0.98) drop when the bar is exact-only."""
    config = ExtractionConfig(min_confidence=0.99)
    result = extract_skills("Requirements:\n- GA4", dictionaries, config, fuzzy_matchers)

    assert result.required == []


@pytest.mark.integration
def test_no_headers_treated_as_required(dictionaries):
    text = "We are looking for someone with experience in Python and HubSpot."
    result = extract_skills(text, dictionaries)

    assert {r.canonical for r in result.required} == {"python", "hubspot"}
    assert result.desired == []


@pytest.mark.integration
@pytest.mark.parametrize("bad_input", ["", None, 12, "   \n\n  "])
def test_bad_input_returns_empty_result(bad_input, dictionaries):
    result = extract_skills(bad_input, dictionaries)

    assert isinstance(result, ExtractionResult)
    assert result.is_empty
    assert result.confidence == 0.0


@pytest.mark.integration
def test_runs_without_dictionaries():
    """Test that an empty snapshot still runs on pattern rules alone."""
    result = extract_skills(REQUIRED_AND_PREFERRED)

    assert isinstance(result, ExtractionResult)
    assert result.required == []


@pytest.mark.integration
def test_deterministic(dictionaries, fuzzy_matchers):
    first = extract_skills(REQUIRED_AND_PREFERRED, dictionaries, fuzzy_matchers=fuzzy_matchers)
    second = extract_skills(REQUIRED_AND_PREFERRED, dictionaries, fuzzy_matchers=fuzzy_matchers)

    assert first.required == second.required
    assert first.desired == second.desired
    assert first.rejected == second.rejected


@pytest.mark.integration
def test_result_to_dict_is_json_ready(dictionaries):
    result = extract_skills(REQUIRED_AND_PREFERRED, dictionaries)
    data = json.loads(json.dumps(result.to_dict()))

    assert [r["canonical"] for r in data["required"]] == ["sql", "python"]
    assert data["desired"][0]["skill_type"] == "TOOL"
    assert data["debug"]["final"] == 3
