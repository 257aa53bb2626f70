"""Orchestrator: wires generation, validation, sanitization, admission, ranking.

Per-request flow:
  1. Requesting  - one call to the generation service, parsed as JSON
  2. Validating  - payload must hold a list under the variant's key
  3. Sanitizing  - each record independently; fatal fields discard one record
  4. Admitting   - score threshold (jobs) and in-run deduplication
  5. Ranking     - stable descending sort, capped to the variant's size

Transport failures, shape failures, empty lists and fully-discarded batches
all end in an empty result; the outcome is logged and kept on the result
object but never raised. There are no retries.
"""

import asyncio
import json
import logging
from typing import Any

from careerrec.core.config import Settings
from careerrec.core.schemas import (
    CandidateProfile,
    CourseRecommendations,
    JobRecommendations,
    Outcome,
    RecommendedCourse,
    RecommendedJob,
)
from careerrec.llm.base import LLMProvider, parse_json_payload
from careerrec.pipeline.admitter import DeduplicationFilter, admit, log_discard
from careerrec.pipeline.prompts import (
    COURSE_SYSTEM_PROMPT,
    JOB_SYSTEM_PROMPT,
    build_course_prompt,
    build_job_prompt,
)
from careerrec.pipeline.ranker import rank, rescore_by_skills
from careerrec.pipeline.rules import VariantRules, course_rules, job_rules
from careerrec.pipeline.sanitizer import RecordDiscarded, clean_text, sanitize_record
from careerrec.pipeline.validator import ShapeValidationError, validate_payload

logger = logging.getLogger(__name__)


class PipelineRun:
    """Summary of a single recommendation pipeline execution."""

    def __init__(
        self,
        variant: str,
        outcome: Outcome,
        records: list[dict[str, Any]] | None = None,
        payload: Any = None,
        raw_count: int = 0,
        admitted_count: int = 0,
    ) -> None:
        self.variant = variant
        self.outcome = outcome
        self.records = records or []
        self.payload = payload
        self.raw_count = raw_count
        self.admitted_count = admitted_count


async def run_pipeline(
    prompt: str,
    system: str,
    rules: VariantRules,
    provider: LLMProvider,
    *,
    model: str | None = None,
    rescore_skills: list[str] | None = None,
) -> PipelineRun:
    """Turn one generation call into a ranked list of sanitized records.

    Args:
        prompt: User prompt for the generation service.
        system: System prompt for the generation service.
        rules: Field rules and admission policy of the variant.
        provider: Generation service; called exactly once.
        model: Optional model override passed to the provider.
        rescore_skills: When given, replace each record's score with the
            skill-overlap score before admission.

    Returns:
        PipelineRun whose records are sanitized dicts in final order.
    """
    variant = rules.name

    # Step 1: Requesting
    try:
        raw_text = await asyncio.to_thread(provider.complete, prompt, model=model, system=system)
        payload = parse_json_payload(raw_text)
    except Exception:
        logger.warning(
            "Generation failed for %s recommendations - returning empty result",
            variant,
            exc_info=True,
            extra={"variant": variant, "outcome": Outcome.TRANSPORT_FAILURE.value},
        )
        return PipelineRun(variant, Outcome.TRANSPORT_FAILURE)

    # Step 2: Validating
    try:
        validation = validate_payload(payload, rules.payload_key, rules.shape)
    except ShapeValidationError as e:
        logger.error(
            "Unusable %s payload - returning empty result: %s",
            variant,
            e,
            extra={"variant": variant, "outcome": Outcome.SHAPE_FAILURE.value},
        )
        return PipelineRun(variant, Outcome.SHAPE_FAILURE, payload=payload)

    raw_count = len(validation.records)
    if raw_count == 0:
        logger.info(
            "Generation service returned an empty '%s' list",
            rules.payload_key,
            extra={"variant": variant, "outcome": Outcome.EMPTY.value},
        )
        return PipelineRun(variant, Outcome.EMPTY, payload=payload)

    # Step 3-4: Sanitizing and admitting, one record at a time
    admitted: list[dict[str, Any]] = []
    for raw in validation.records:
        try:
            record = sanitize_record(raw, rules)
        except RecordDiscarded as e:
            log_discard(rules, e.reason, _raw_title(raw))
            continue
        if rescore_skills is not None:
            record = rescore_by_skills(record, rescore_skills)
        if admit(record, rules):
            admitted.append(record)

    admitted = DeduplicationFilter(rules)(admitted)

    # Step 5: Ranking
    ranked = rank(admitted, rules.score_field, rules.max_items)
    outcome = Outcome.OK if ranked else Outcome.ALL_DISCARDED

    logger.info(
        "%s recommendations: %d raw (%s), %d admitted, %d returned",
        variant.capitalize(),
        raw_count,
        validation.status.value,
        len(admitted),
        len(ranked),
        extra={"variant": variant, "outcome": outcome.value},
    )

    return PipelineRun(
        variant,
        outcome,
        records=ranked,
        payload=payload,
        raw_count=raw_count,
        admitted_count=len(admitted),
    )


async def recommend_jobs(
    profile: CandidateProfile,
    provider: LLMProvider,
    settings: Settings | None = None,
) -> JobRecommendations:
    """Recommend up to ``jobs.max_items`` jobs for a candidate. Never raises."""
    settings = settings or Settings()
    rescore = list(profile.skills) if settings.jobs.score_source == "skills" else None

    run = await run_pipeline(
        build_job_prompt(profile),
        JOB_SYSTEM_PROMPT,
        job_rules(settings.jobs),
        provider,
        model=settings.llm.model,
        rescore_skills=rescore,
    )
    return JobRecommendations(
        items=[RecommendedJob.model_validate(r) for r in run.records],
        outcome=run.outcome,
    )


async def recommend_courses(
    profile: CandidateProfile,
    provider: LLMProvider,
    settings: Settings | None = None,
) -> CourseRecommendations:
    """Recommend up to ``courses.max_items`` courses for a candidate. Never raises."""
    settings = settings or Settings()

    run = await run_pipeline(
        build_course_prompt(profile),
        COURSE_SYSTEM_PROMPT,
        course_rules(settings.courses),
        provider,
        model=settings.llm.model,
    )
    advice = None
    if isinstance(run.payload, dict):
        advice = clean_text(run.payload.get("generalAdvice"))

    return CourseRecommendations(
        items=[RecommendedCourse.model_validate(r) for r in run.records],
        general_advice=advice,
        outcome=run.outcome,
    )


async def recommend_jobs_batch(
    profiles: list[CandidateProfile],
    provider: LLMProvider,
    settings: Settings | None = None,
) -> list[JobRecommendations]:
    """Run independent job pipelines concurrently, one per profile.

    Results are returned in the same order as ``profiles``.
    """
    results = await asyncio.gather(
        *(recommend_jobs(profile, provider, settings) for profile in profiles),
    )
    return list(results)


def export_results_json(result: JobRecommendations | CourseRecommendations) -> str:
    """Export a result in its API shape as a JSON string."""
    data = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, indent=2)


def _raw_title(raw: Any) -> str | None:
    if isinstance(raw, dict):
        return clean_text(raw.get("title"))
    return None
