"""
Skill extraction pipeline.

Composes the contexts into one pure function, extract_skills():

    1. preprocess text and parse required / desired sections
    2. extract phrases from each section
    3. split composite phrases and classify every atomic phrase
       (REJECTED -> rejected, CANDIDATE -> candidates,
        TOOL -> tool stream, CORE_SKILL -> skill stream)
    4. drop tool names from the skill stream, generic phrases from both streams
    5. normalize + deduplicate (skills against the taxonomy, tools against the
       tools dictionary)
    6. keep records at or above min_confidence
    7. required wins over desired for the same canonical key
    8. optional cap on the total number of records
    9. aggregate confidence, timing and per-stage counters

Each call is independent: dictionaries are an immutable snapshot passed in,
so concurrent calls share nothing mutable.
"""

import time
from dataclasses import dataclass
from typing import Optional

from skillsift.contexts.classification.classification_data_structures import (
    ClassifiedBatch,
    ClassifiedPhrase,
    SkillType,
)
from skillsift.contexts.classification.classifier import classify_batch
from skillsift.contexts.dictionaries.dictionary_data_structures import (
    ExtractionConfig,
    SkillDictionaries,
)
from skillsift.contexts.extraction.extraction_data_structure import (
    ExtractionDebug,
    ExtractionResult,
    SkillRecord,
)
from skillsift.contexts.extraction.logger import log_extraction_result, log_stage
from skillsift.contexts.intake.normalizer import preprocess_job_text
from skillsift.contexts.intake.phrase_extractor import extract_phrases
from skillsift.contexts.intake.phrase_splitter import split_batch
from skillsift.contexts.intake.section_parser import parse_sections
from skillsift.contexts.normalization.fuzzy_matcher import FuzzyMatcher, SkillFuzzyMatcher
from skillsift.contexts.normalization.skill_normalizer import (
    SkillNormalizer,
    filter_out_generic,
    filter_out_tools,
)


@dataclass(frozen=True)
class FuzzyMatchers:
    """Fuzzy backends for the skill and tool streams (either may be None)."""

    skills: Optional[FuzzyMatcher] = None
    tools: Optional[FuzzyMatcher] = None

    @classmethod
    def build(cls, dictionaries: SkillDictionaries) -> "FuzzyMatchers":
        """Build rapidfuzz-backed matchers over both dictionaries."""
        return cls(
            skills=SkillFuzzyMatcher(dictionaries.skills_taxonomy) if dictionaries.skills_taxonomy else None,
            tools=SkillFuzzyMatcher(dictionaries.tools_dictionary) if dictionaries.tools_dictionary else None,
        )


@dataclass
class _SectionOutput:
    """Intermediate state for one section (required or desired)."""

    records: list[SkillRecord]
    batch: ClassifiedBatch


def _merge_records(records: list[SkillRecord]) -> list[SkillRecord]:
    """Collapse records by canonical key (highest confidence wins), best first."""
    by_key: dict[str, SkillRecord] = {}
    for record in records:
        existing = by_key.get(record.canonical)
        if existing is None or record.confidence > existing.confidence:
            by_key[record.canonical] = record
    return sorted(by_key.values(), key=lambda r: r.confidence, reverse=True)


def _process_section(
    text: Optional[str],
    dictionaries: SkillDictionaries,
    config: ExtractionConfig,
    skill_normalizer: SkillNormalizer,
    tool_normalizer: SkillNormalizer,
    debug: ExtractionDebug,
) -> _SectionOutput:
    phrases = extract_phrases(text, dictionaries, config) if text else []
    split = split_batch(phrases, dictionaries.all_entries)
    batch = classify_batch(split, dictionaries)

    skill_phrases = [item.raw for item in batch.core_skills]
    tool_phrases = [item.raw for item in batch.tools]

    skill_phrases = filter_out_tools(skill_phrases, dictionaries.tools_deny_list)
    after_tool_filter = len(skill_phrases)

    skill_phrases = filter_out_generic(skill_phrases, dictionaries.generic_deny_list)
    tool_phrases = filter_out_generic(tool_phrases, dictionaries.generic_deny_list)

    normalized_skills = skill_normalizer.normalize_and_deduplicate(skill_phrases)
    normalized_tools = tool_normalizer.normalize_and_deduplicate(tool_phrases)

    records = [SkillRecord.from_normalization(r, SkillType.CORE_SKILL) for r in normalized_skills]
    records += [SkillRecord.from_normalization(r, SkillType.TOOL) for r in normalized_tools]
    confident = [r for r in records if r.confidence >= config.min_confidence]

    debug.total_phrases += len(phrases)
    debug.after_splitting += len(split)
    debug.core_skills += len(batch.core_skills)
    debug.tools += len(batch.tools)
    debug.candidates += len(batch.candidates)
    debug.rejected += len(batch.rejected)
    debug.after_tool_filter += after_tool_filter
    debug.after_generic_filter += len(skill_phrases) + len(tool_phrases)
    debug.after_normalization += len(records)
    debug.after_confidence_filter += len(confident)

    return _SectionOutput(records=_merge_records(confident), batch=batch)


def _unique_phrases(*groups: list[ClassifiedPhrase]) -> list[ClassifiedPhrase]:
    """Concatenate phrase buckets, dropping repeats of the same raw phrase."""
    seen: dict[str, ClassifiedPhrase] = {}
    for group in groups:
        for item in group:
            seen.setdefault(item.raw.lower(), item)
    return list(seen.values())


def _apply_max_count(
    required: list[SkillRecord], desired: list[SkillRecord], max_count: int
) -> tuple[list[SkillRecord], list[SkillRecord]]:
    """Keep the globally most confident records, preserving each stream's order."""
    if max_count <= 0 or len(required) + len(desired) <= max_count:
        return required, desired

    ranked = sorted(required + desired, key=lambda r: r.confidence, reverse=True)
    keep = {r.canonical for r in ranked[:max_count]}
    return (
        [r for r in required if r.canonical in keep],
        [r for r in desired if r.canonical in keep],
    )


def extract_skills(
    text: str,
    dictionaries: Optional[SkillDictionaries] = None,
    config: Optional[ExtractionConfig] = None,
    fuzzy_matchers: Optional[FuzzyMatchers] = None,
) -> ExtractionResult:
    """
    Extract required and desired skills from a job description.

    Args:
        text: Raw job description text
        dictionaries: Reference data snapshot (an empty snapshot when None)
        config: Pipeline thresholds (defaults to ExtractionConfig())
        fuzzy_matchers: Fuzzy backends; normalization skips the fuzzy pass
                        for a stream without one

    Returns:
        ExtractionResult. Empty or non-string input yields an empty result;
        this function never raises on bad input.

    Example:
        >>> result = extract_skills(job_text, load_dictionaries())
        >>> [r.name for r in result.required]
        ['SQL', 'Python']
    """
    start = time.perf_counter()
    debug = ExtractionDebug()

    if not text or not isinstance(text, str):
        return ExtractionResult(execution_time_ms=(time.perf_counter() - start) * 1000, debug=debug)

    dictionaries = dictionaries or SkillDictionaries.empty()
    config = config or ExtractionConfig()
    fuzzy_matchers = fuzzy_matchers or FuzzyMatchers()

    skill_normalizer = SkillNormalizer(
        dictionaries.skills_taxonomy, dictionaries, fuzzy_matchers.skills, config
    )
    tool_normalizer = SkillNormalizer(
        dictionaries.tools_dictionary, dictionaries, fuzzy_matchers.tools, config
    )

    sections = parse_sections(preprocess_job_text(text))
    required_output = _process_section(
        sections.required_section, dictionaries, config, skill_normalizer, tool_normalizer, debug
    )
    desired_output = _process_section(
        sections.desired_section, dictionaries, config, skill_normalizer, tool_normalizer, debug
    )

    required = required_output.records
    required_keys = {r.canonical for r in required}
    desired = [r for r in desired_output.records if r.canonical not in required_keys]

    required, desired = _apply_max_count(required, desired, config.max_skills_per_job)

    surviving = required + desired
    confidence = sum(r.confidence for r in surviving) / len(surviving) if surviving else 0.0
    debug.final = len(surviving)

    result = ExtractionResult(
        required=required,
        desired=desired,
        candidates=_unique_phrases(required_output.batch.candidates, desired_output.batch.candidates),
        rejected=_unique_phrases(required_output.batch.rejected, desired_output.batch.rejected),
        confidence=confidence,
        execution_time_ms=(time.perf_counter() - start) * 1000,
        debug=debug,
    )

    for stage, count in debug.to_dict().items():
        log_stage(stage, count)
    log_extraction_result(result)
    return result
