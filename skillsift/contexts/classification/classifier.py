"""
Rule-based skill classification.

Each phrase is run through ordered layers; the first layer that returns a
decision wins:

    validation  blank or one-character phrases are rejected
    layer 0     soft skills, junk, degrees and too-generic phrases are rejected
    layer 1     exact tools dictionary hit, tool substring hit, exact skills hit
    layer 2     forced core skills (SQL, Python, ...)
    layer 3     pattern rules (brand+number, CamelCase, gerund, suffix, multi-word)
    layer 4     context heuristics, always decides (CANDIDATE)

Layer 0 is an absolute veto: a soft skill is rejected even when it also
appears in a dictionary.
"""

import re
from typing import Callable, Iterable, Optional

from skillsift.contexts.classification.classification_data_structures import (
    ClassificationLayer,
    ClassificationResult,
    ClassifiedBatch,
    ClassifiedPhrase,
    InferredType,
    SkillType,
)
from skillsift.contexts.classification.classification_patterns import (
    ContextHeuristics,
    PatternRules,
)
from skillsift.contexts.classification.logger import log_batch_summary, log_classification
from skillsift.contexts.dictionaries.dictionary_data_structures import (
    SkillDictionaries,
    TaxonomyEntry,
)
from skillsift.contexts.intake.phrase_splitter import is_single_char_skill
from skillsift.utils.text_processing import term_regex

# Tool names shorter than this never match as substrings ("sf" inside "sftp")
MIN_SUBSTRING_TERM_LENGTH = 4

WHITESPACE = re.compile(r"\s+")


def _underscored(phrase: str) -> str:
    return WHITESPACE.sub("_", phrase)


# =============================================================================
# LAYER 0: SOFT SKILL AND JUNK REJECTION
# =============================================================================


def check_soft_skill_rejection(
    cleaned: str, original: str, dictionaries: SkillDictionaries
) -> Optional[ClassificationResult]:
    """Reject soft skills, junk, degree requirements and too-generic phrases."""
    rules = dictionaries.ignore_rules
    reason = None

    if cleaned in rules.soft_skills.exact_matches:
        reason = f'Soft skill exact match: "{cleaned}"'
    else:
        for pattern in dictionaries.soft_skill_patterns:
            if pattern.search(cleaned):
                reason = f"Soft skill pattern match: {pattern.pattern}"
                break

    if reason is None:
        soft_hit = rules.soft_skills.match(cleaned)
        junk_hit = rules.junk_phrases.match(cleaned)
        if soft_hit:
            reason = f"Soft skill pattern match: {soft_hit}"
        elif junk_hit == "exact":
            reason = f'Junk phrase: "{cleaned}"'
        elif junk_hit:
            reason = f"Junk pattern: {junk_hit}"
        elif rules.degree_and_education.match(cleaned):
            reason = "Education/degree phrase"
        elif rules.too_generic.match(cleaned):
            reason = "Too generic"

    if reason is None:
        return None
    return ClassificationResult.rejected(reason, ClassificationLayer.SOFT_SKILL_REJECTION)


# =============================================================================
# LAYER 1: EXACT DICTIONARY MATCH
# =============================================================================


def _exact_terms(entry: TaxonomyEntry) -> set[str]:
    terms = {entry.canonical.lower(), entry.canonical.lower().replace("_", " ")}
    terms.add(entry.name.lower().strip())
    terms.update(alias.lower().strip() for alias in entry.aliases)
    return terms


def _substring_match(phrase: str, term: str) -> bool:
    term = term.lower().strip()
    if len(term) < MIN_SUBSTRING_TERM_LENGTH:
        return False
    if " " in term:
        return term in phrase
    return term_regex(term).search(phrase) is not None


def find_exact_entry(cleaned: str, entries: Iterable[TaxonomyEntry]) -> Optional[TaxonomyEntry]:
    """First entry whose canonical key, name or alias equals the phrase."""
    return next((entry for entry in entries if cleaned in _exact_terms(entry)), None)


def find_substring_entry(cleaned: str, entries: Iterable[TaxonomyEntry]) -> Optional[TaxonomyEntry]:
    """First entry with a name, canonical or alias (4+ chars) embedded in the phrase."""
    for entry in entries:
        terms = (entry.name, entry.canonical.replace("_", " "), *entry.aliases)
        if any(_substring_match(cleaned, term) for term in terms):
            return entry
    return None


def check_exact_dictionary_match(
    cleaned: str, original: str, dictionaries: SkillDictionaries
) -> Optional[ClassificationResult]:
    """Tools before skills: a phrase in both dictionaries is a TOOL."""
    checks = (
        (find_exact_entry, dictionaries.tools_dictionary, SkillType.TOOL, "Exact match in tools dictionary"),
        (find_substring_entry, dictionaries.tools_dictionary, SkillType.TOOL, "Tool name substring match"),
        (find_exact_entry, dictionaries.skills_taxonomy, SkillType.CORE_SKILL, "Exact match in skills dictionary"),
    )
    for finder, entries, skill_type, evidence in checks:
        entry = finder(cleaned, entries)
        if entry is not None:
            return ClassificationResult(
                skill_type=skill_type,
                canonical=entry.canonical,
                confidence=1.0,
                evidence=evidence,
                source_location=ClassificationLayer.EXACT_MATCH,
                matched_entry=entry,
            )
    return None


# =============================================================================
# LAYER 2: FORCED CORE SKILLS
# =============================================================================


def check_forced_core_skills(
    cleaned: str, original: str, dictionaries: SkillDictionaries
) -> Optional[ClassificationResult]:
    """Phrases equal to or containing a forced term are always CORE_SKILL."""
    forced = dictionaries.forced_core_skills
    match = cleaned if cleaned in forced else None

    if match is None:
        # Longest term first so "data analysis" wins over "sql" in "sql data analysis"
        for term in sorted(forced, key=lambda t: (-len(t), t)):
            if term_regex(term, standalone=True).search(cleaned):
                match = term
                break

    if match is None:
        return None
    return ClassificationResult(
        skill_type=SkillType.CORE_SKILL,
        canonical=_underscored(match),
        confidence=1.0,
        evidence="Forced core skill (SQL/Python/etc.)",
        source_location=ClassificationLayer.FORCED_CORE_SKILL,
    )


# =============================================================================
# LAYER 3: PATTERN RULES
# =============================================================================


def _pattern_result(
    skill_type: SkillType, canonical: str, confidence: float, evidence: str
) -> ClassificationResult:
    return ClassificationResult(
        skill_type=skill_type,
        canonical=canonical,
        confidence=confidence,
        evidence=evidence,
        source_location=ClassificationLayer.PATTERN_RULES,
    )


def check_pattern_rules(
    cleaned: str, original: str, dictionaries: SkillDictionaries
) -> Optional[ClassificationResult]:
    """
    Brand+number and CamelCase suggest tools; gerunds, skill suffixes and
    short multi-word phrases suggest core skills.

    CamelCase is checked on the original casing since the cleaned phrase is
    lowercase.
    """
    if PatternRules.BRAND_WITH_NUMBER.search(cleaned):
        return _pattern_result(
            SkillType.TOOL,
            _underscored(cleaned),
            0.85,
            "Brand name with number pattern (e.g., GA4, Salesforce360)",
        )

    if PatternRules.CAMEL_CASE.match(original):
        return _pattern_result(SkillType.TOOL, cleaned, 0.75, "CamelCase brand name pattern")

    if PatternRules.GERUND.search(cleaned):
        return _pattern_result(
            SkillType.CORE_SKILL, _underscored(cleaned), 0.70, "Gerund form indicates skill/action"
        )

    if PatternRules.SKILL_SUFFIX.search(cleaned):
        return _pattern_result(
            SkillType.CORE_SKILL,
            _underscored(cleaned),
            0.80,
            "Strategy/operations/management suffix indicates core skill",
        )

    word_count = len(cleaned.split())
    if PatternRules.MIN_MULTI_WORD <= word_count <= PatternRules.MAX_MULTI_WORD:
        return _pattern_result(
            SkillType.CORE_SKILL,
            _underscored(cleaned),
            0.65,
            "Multi-word phrase without brand indicators",
        )

    return None


# =============================================================================
# LAYER 4: CONTEXT HEURISTICS
# =============================================================================


def check_context_heuristics(
    cleaned: str, original: str, dictionaries: SkillDictionaries
) -> ClassificationResult:
    """Final layer: every phrase reaching it becomes a CANDIDATE."""
    if len(cleaned) < ContextHeuristics.SHORT_ACRONYM_LENGTH:
        canonical, confidence, inferred = _underscored(cleaned), 0.40, InferredType.UNKNOWN
        evidence = "Short acronym - needs verification"
    elif ContextHeuristics.TOOL_LIKE.search(cleaned):
        stripped = ContextHeuristics.NON_ALPHANUMERIC.sub("", cleaned)
        canonical, confidence, inferred = _underscored(stripped.strip()), 0.50, InferredType.TOOL
        evidence = "Contains special chars/numbers - likely tool"
    else:
        canonical, confidence, inferred = _underscored(cleaned), 0.35, InferredType.UNKNOWN
        evidence = "No clear classification - human review needed"

    return ClassificationResult(
        skill_type=SkillType.CANDIDATE,
        canonical=canonical,
        confidence=confidence,
        evidence=evidence,
        source_location=ClassificationLayer.CONTEXT_HEURISTICS,
        inferred_type=inferred,
    )


# Precedence order; layer 4 always returns a result
CLASSIFICATION_LAYERS: tuple[
    Callable[[str, str, SkillDictionaries], Optional[ClassificationResult]], ...
] = (
    check_soft_skill_rejection,
    check_exact_dictionary_match,
    check_forced_core_skills,
    check_pattern_rules,
    check_context_heuristics,
)


# =============================================================================
# ENTRY POINTS
# =============================================================================


def _validate(phrase) -> Optional[ClassificationResult]:
    if not isinstance(phrase, str) or not phrase.strip():
        return ClassificationResult.rejected("Phrase too short or invalid", ClassificationLayer.VALIDATION)

    stripped = phrase.strip()
    if len(stripped) < 2 and not is_single_char_skill(stripped):
        return ClassificationResult.rejected("Phrase too short or invalid", ClassificationLayer.VALIDATION)
    return None


def classify_skill_phrase(
    phrase: str, dictionaries: Optional[SkillDictionaries] = None
) -> ClassificationResult:
    """
    Classify one phrase as CORE_SKILL, TOOL, CANDIDATE or REJECTED.

    Args:
        phrase: Atomic phrase from the splitter
        dictionaries: Reference data (an empty snapshot when None; layers 0 and
                      1 then never fire)

    Returns:
        ClassificationResult from the first layer that decided. Never raises.

    Example:
        >>> classify_skill_phrase("HubSpot", dictionaries).skill_type
        <SkillType.TOOL: 'TOOL'>
    """
    dictionaries = dictionaries or SkillDictionaries.empty()

    result = _validate(phrase)
    if result is None:
        original = phrase.strip()
        cleaned = original.lower()
        for layer in CLASSIFICATION_LAYERS:
            result = layer(cleaned, original, dictionaries)
            if result is not None:
                break

    log_classification(phrase if isinstance(phrase, str) else repr(phrase), result)
    return result


def classify_batch(
    phrases: Iterable[str], dictionaries: Optional[SkillDictionaries] = None
) -> ClassifiedBatch:
    """
    Classify phrases and bucket them by type.

    Returns:
        ClassifiedBatch with core_skills, tools, candidates and rejected lists
        in input order
    """
    dictionaries = dictionaries or SkillDictionaries.empty()
    batch = ClassifiedBatch()

    for phrase in phrases:
        result = classify_skill_phrase(phrase, dictionaries)
        raw = phrase if isinstance(phrase, str) else ""
        batch.bucket(result.skill_type).append(ClassifiedPhrase.from_result(raw, result))

    log_batch_summary(batch)
    return batch
