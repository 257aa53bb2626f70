"""Configuration models and YAML loader for the recommendation engine."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

ScoreSource = Literal["llm", "skills"]


class LLMConfig(BaseModel):
    """Generation service selection."""

    provider: str = "anthropic"
    model: str | None = None

    @field_validator("provider")
    @classmethod
    def provider_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "provider must not be empty"
            raise ValueError(msg)
        return v.strip().lower()


class JobsConfig(BaseModel):
    """Job recommendation policy."""

    max_items: int = Field(default=10, ge=1, le=10)
    min_match_score: float = Field(default=30.0, ge=0.0, le=100.0)
    # "llm" trusts the model's self-reported matchScore, "skills" recomputes it
    score_source: ScoreSource = "llm"


class CoursesConfig(BaseModel):
    """Course recommendation policy."""

    max_items: int = Field(default=5, ge=3, le=5)


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/recommendations.db"


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    jobs: JobsConfig = Field(default_factory=JobsConfig)
    courses: CoursesConfig = Field(default_factory=CoursesConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
