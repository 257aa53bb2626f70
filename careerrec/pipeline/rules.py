"""Per-variant field policy table.

The job and course variants disagree on which fields are fatal (location is
fatal only for jobs) and on scoring. Keep those differences here as data
rather than as branches in the pipeline.
"""

from pydantic import BaseModel, ConfigDict, Field

from careerrec.core.config import CoursesConfig, JobsConfig
from careerrec.pipeline.validator import CourseRecord, JobRecord

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_PLATFORM = "Unknown Platform"
NO_DESCRIPTION = "No description provided."
SKILL_NOT_SPECIFIED = "Skill not specified"


class VariantRules(BaseModel):
    """Field rules and admission policy for one recommendation variant."""

    model_config = ConfigDict(frozen=True)

    name: str
    payload_key: str
    shape: type[BaseModel]
    # Checked in order; the first missing one decides the discard reason.
    fatal_fields: tuple[str, ...]
    text_defaults: dict[str, str] = Field(default_factory=dict)
    optional_text_fields: tuple[str, ...] = ()
    list_defaults: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    url_field: str
    fallback_query_fields: tuple[str, ...]
    score_field: str
    score_min: float
    score_max: float
    min_score: float | None = None
    max_items: int = Field(ge=1)
    dedup_fields: tuple[str, ...]


def job_rules(config: JobsConfig | None = None) -> VariantRules:
    """Rules for the job variant: title and location are fatal."""
    config = config or JobsConfig()
    return VariantRules(
        name="job",
        payload_key="jobs",
        shape=JobRecord,
        fatal_fields=("title", "location"),
        text_defaults={
            "company": UNKNOWN_COMPANY,
            "description": NO_DESCRIPTION,
            "platform": UNKNOWN_PLATFORM,
        },
        list_defaults={"keyRequiredSkills": (SKILL_NOT_SPECIFIED,)},
        url_field="applicationLink",
        fallback_query_fields=("title", "company", "location"),
        score_field="matchScore",
        score_min=0.0,
        score_max=100.0,
        min_score=config.min_match_score,
        max_items=config.max_items,
        dedup_fields=("title", "company", "location"),
    )


def course_rules(config: CoursesConfig | None = None) -> VariantRules:
    """Rules for the course variant: only the title is fatal, no score gate."""
    config = config or CoursesConfig()
    return VariantRules(
        name="course",
        payload_key="recommendations",
        shape=CourseRecord,
        fatal_fields=("title",),
        text_defaults={
            "platform": UNKNOWN_PLATFORM,
            "description": NO_DESCRIPTION,
        },
        optional_text_fields=("focusArea",),
        url_field="url",
        fallback_query_fields=("title", "platform"),
        score_field="relevanceScore",
        score_min=0.0,
        score_max=1.0,
        max_items=config.max_items,
        dedup_fields=("title", "platform"),
    )
