"""Core data models for the recommendation engine."""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Outcome(str, Enum):
    """How a recommendation request ended.

    Only visible in-process and in logs; the serialized result is always
    ``{"items": [...]}``.
    """

    OK = "ok"
    EMPTY = "empty"
    TRANSPORT_FAILURE = "transport_failure"
    SHAPE_FAILURE = "shape_failure"
    ALL_DISCARDED = "all_discarded"


class DiscardReason(str, Enum):
    """Why a single generated record was dropped."""

    MISSING_TITLE = "missing_title"
    MISSING_LOCATION = "missing_location"
    BELOW_THRESHOLD = "below_threshold"
    DUPLICATE = "duplicate"


class CandidateProfile(BaseModel):
    """Resume-derived facts sent to the generation service.

    Frozen for the duration of a request.
    """

    model_config = ConfigDict(frozen=True)

    skills: list[str] = Field(default_factory=list)
    experience_summary: str = ""
    projects: list[str] = Field(default_factory=list)
    target_role: str | None = None
    skill_gaps: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CandidateProfile":
        """Load a candidate profile from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Profile file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)


_ITEM_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class RecommendedJob(BaseModel):
    """A trusted job recommendation. Serializes with camelCase keys."""

    model_config = _ITEM_CONFIG

    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    key_required_skills: list[str] = Field(min_length=1)
    description: str = Field(min_length=1)
    application_link: str = Field(min_length=1)
    match_score: float = Field(ge=0.0, le=100.0)
    platform: str = Field(min_length=1)


class RecommendedCourse(BaseModel):
    """A trusted course recommendation. Serializes with camelCase keys."""

    model_config = _ITEM_CONFIG

    title: str = Field(min_length=1)
    platform: str = Field(min_length=1)
    description: str = Field(min_length=1)
    url: str = Field(min_length=1)
    focus_area: str | None = None
    relevance_score: float = Field(default=0.0, ge=0.0, le=1.0)


class JobRecommendations(BaseModel):
    """Ranked, size-capped job recommendations for one request."""

    model_config = ConfigDict(frozen=True)

    items: list[RecommendedJob] = Field(default_factory=list)
    outcome: Outcome = Field(default=Outcome.EMPTY, exclude=True)


class CourseRecommendations(BaseModel):
    """Ranked, size-capped course recommendations for one request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: list[RecommendedCourse] = Field(default_factory=list)
    general_advice: str | None = Field(default=None, alias="generalAdvice")
    outcome: Outcome = Field(default=Outcome.EMPTY, exclude=True)
