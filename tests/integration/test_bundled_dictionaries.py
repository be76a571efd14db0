"""
Integration tests against the dictionaries bundled with the package.
Tests: bundled YAML loads, and the pipeline behaves as documented on real reference data.
"""

import pytest

from skillsift.contexts.classification import ClassificationLayer, SkillType, classify_skill_phrase
from skillsift.contexts.dictionaries import load_dictionaries, load_extraction_config
from skillsift.contexts.dictionaries.loader import BUNDLED_DATA_PATH
from skillsift.contexts.extraction import FuzzyMatchers, SkillExtractionService, extract_skills
from skillsift.contexts.intake import split_phrase
from skillsift.contexts.normalization import MatchType, SkillNormalizer


@pytest.fixture(scope="module")
def bundled():
    return load_dictionaries(BUNDLED_DATA_PATH)


@pytest.fixture(scope="module")
def bundled_matchers(bundled):
    return FuzzyMatchers.build(bundled)


@pytest.mark.integration
def test_bundled_dictionaries_load(bundled):
    assert len(bundled.skills_taxonomy) > 100
    assert len(bundled.tools_dictionary) > 50
    assert "sql" in bundled.forced_core_skills
    assert bundled.soft_skill_patterns


@pytest.mark.integration
def test_canonical_keys_unique(bundled):
    for entries in (bundled.skills_taxonomy, bundled.tools_dictionary):
        canonicals = [e.canonical for e in entries]
        assert len(canonicals) == len(set(canonicals))


@pytest.mark.integration
def test_hubspot_is_exact_tool(bundled):
    result = classify_skill_phrase("HubSpot", bundled)

    assert result.skill_type is SkillType.TOOL
    assert result.confidence == 1.0
    assert result.source_location is ClassificationLayer.EXACT_MATCH


@pytest.mark.integration
def test_soft_skill_in_taxonomy_still_rejected(bundled):
    """Test that 'leadership' is rejected even though Team Leadership lists it as an alias."""
    result = classify_skill_phrase("leadership", bundled)
    assert result.skill_type is SkillType.REJECTED


@pytest.mark.integration
def test_ga4_forms_share_canonical(bundled, bundled_matchers):
    normalizer = SkillNormalizer(bundled.tools_dictionary, bundled, bundled_matchers.tools)
    variants = split_phrase("GA4 (Google Analytics 4)", bundled.all_entries)

    assert variants == ["GA4", "Google Analytics 4"]
    results = [normalizer.normalize(v) for v in variants]
    assert {r.canonical for r in results} == {"google_analytics_4"}
    assert results[0].match_type is MatchType.ALIAS


@pytest.mark.integration
def test_required_and_preferred(bundled, bundled_matchers):
    text = "Required:\n- SQL\n- Python\n\nPreferred:\n- Tableau"
    result = extract_skills(text, bundled, load_extraction_config(), bundled_matchers)

    assert [r.name for r in result.required] == ["SQL", "Python"]
    assert [r.name for r in result.desired] == ["Tableau"]


@pytest.mark.integration
def test_soft_skills_only(bundled, bundled_matchers):
    text = "Strong communication skills and leadership abilities required"
    result = extract_skills(text, bundled, load_extraction_config(), bundled_matchers)

    assert result.is_empty
    assert result.candidates == []
    assert {p.raw for p in result.rejected} >= {"communication skills", "leadership"}


@pytest.mark.integration
def test_realistic_posting(bundled, bundled_matchers):
    text = (
        "## About Us\n"
        "We build analytics software for growing teams.\n"
        "\n"
        "## What You'll Need\n"
        "- 3+ years of experience in lifecycle marketing\n"
        "- Proficiency in SQL and Python\n"
        "- Hands-on experience with HubSpot or Salesforce\n"
        "- Excellent communication skills\n"
        "\n"
        "## Nice to Have\n"
        "- Familiarity with Tableau\n"
        "- GA4 (Google Analytics 4)\n"
        "\n"
        "## Benefits\n"
        "- Health insurance\n"
    )
    result = extract_skills(text, bundled, load_extraction_config(), bundled_matchers)

    required = {r.canonical for r in result.required}
    desired = {r.canonical for r in result.desired}

    assert {"sql", "python", "hubspot", "salesforce", "lifecycle_marketing"} <= required
    assert {"tableau", "google_analytics_4"} <= desired
    assert not required & desired
    assert all(r.confidence >= 0.5 for r in result.required + result.desired)


@pytest.mark.integration
def test_service_with_bundled_resources():
    service = SkillExtractionService()
    result = service.analyze("Requirements:\n- SQL\n- Tableau")

    assert {r.canonical for r in result.required} == {"sql", "tableau"}
    assert service.get_stats()["tools"] > 50


# =============================================================================
# ROUND TRIPS OVER EVERY ENTRY
# =============================================================================


def _stream_normalizer(stream, bundled, bundled_matchers):
    entries = bundled.skills_taxonomy if stream == "skills" else bundled.tools_dictionary
    return entries, SkillNormalizer(entries, bundled, getattr(bundled_matchers, stream))


@pytest.mark.integration
@pytest.mark.parametrize("stream", ["skills", "tools"])
def test_every_entry_name_resolves_to_its_entry(stream, bundled, bundled_matchers):
    entries, normalizer = _stream_normalizer(stream, bundled, bundled_matchers)

    mismatches = {}
    for entry in entries:
        result = normalizer.normalize(entry.name)
        if result.canonical != entry.canonical:
            mismatches[entry.name] = result.canonical

    assert mismatches == {}


@pytest.mark.integration
@pytest.mark.parametrize("stream", ["skills", "tools"])
def test_normalization_idempotent(stream, bundled, bundled_matchers):
    entries, normalizer = _stream_normalizer(stream, bundled, bundled_matchers)

    for entry in entries:
        first = normalizer.normalize(entry.name)
        for again in (normalizer.normalize(first.canonical), normalizer.normalize(first.normalized)):
            assert again.canonical == first.canonical, entry.name
            assert again.confidence == 1.0, entry.name
            assert again.match_type is MatchType.EXACT, entry.name


# =============================================================================
# FORCED TERMS AND SHORT NAMES
# =============================================================================


@pytest.mark.integration
def test_every_forced_term_resolves(bundled, bundled_matchers):
    normalizer = SkillNormalizer(bundled.skills_taxonomy, bundled, bundled_matchers.skills)

    unresolved = [
        term
        for term in sorted(bundled.forced_core_skills)
        if normalizer.normalize(term).matched_entry is None or normalizer.normalize(term).confidence < 0.5
    ]
    assert unresolved == []


@pytest.mark.integration
@pytest.mark.parametrize(
    "term, canonical",
    [("C++", "cpp"), ("C#", "csharp"), ("Go", "golang"), ("Java", "java"), ("NLP", "natural_language_processing")],
)
def test_language_names_resolve(term, canonical, bundled, bundled_matchers):
    normalizer = SkillNormalizer(bundled.skills_taxonomy, bundled, bundled_matchers.skills)
    assert normalizer.normalize(term).canonical == canonical


@pytest.mark.integration
def test_programming_languages_extracted(bundled, bundled_matchers):
    text = "Requirements:\n- Java, C++ and C#"
    result = extract_skills(text, bundled, load_extraction_config(), bundled_matchers)

    assert {"java", "cpp", "csharp"} <= {r.canonical for r in result.required}


@pytest.mark.integration
def test_duty_lines_do_not_become_r(bundled, bundled_matchers):
    text = (
        "Requirements:\n"
        "- Partner with other teams\n"
        "- Ownership of reporting workflows\n"
        "- Work directly with customers\n"
        "- SQL"
    )
    result = extract_skills(text, bundled, load_extraction_config(), bundled_matchers)
    canonicals = {r.canonical for r in result.required + result.desired}

    assert "sql" in canonicals
    assert "r_programming" not in canonicals


@pytest.mark.integration
def test_words_containing_r_do_not_normalize_to_r(bundled, bundled_matchers):
    normalizer = SkillNormalizer(bundled.skills_taxonomy, bundled, bundled_matchers.skills)
    assert normalizer.normalize("data entry work here").canonical != "r_programming"


@pytest.mark.integration
def test_go_to_market_is_not_golang(bundled, bundled_matchers):
    text = "Requirements:\n- Go-to-market planning for new regions\n- SQL"
    result = extract_skills(text, bundled, load_extraction_config(), bundled_matchers)
    canonicals = {r.canonical for r in result.required + result.desired}

    assert "sql" in canonicals
    assert "golang" not in canonicals


@pytest.mark.integration
def test_required_and_preferred_skills_headers(bundled, bundled_matchers):
    text = "Required Skills:\n- SQL\n- Python\n\nPreferred Skills:\n- Tableau"
    result = extract_skills(text, bundled, load_extraction_config(), bundled_matchers)

    assert [r.name for r in result.required] == ["SQL", "Python"]
    assert [r.name for r in result.desired] == ["Tableau"]
