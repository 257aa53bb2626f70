"""Shape validation for generation-service payloads.

The declared shapes are strict pydantic models. A payload whose records all
satisfy the shape is VALID; a payload that is a list of records where some are
partial is LAX_ACCEPTED. Records are never modified or coerced here, that is
the sanitizer's job. Only a missing or non-list top level is a hard failure.
"""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class ShapeValidationError(ValueError):
    """The payload has no list of candidate records at the expected key."""


class ValidationStatus(str, Enum):
    VALID = "valid"
    LAX_ACCEPTED = "lax_accepted"


class JobRecord(BaseModel):
    """Fully-populated job record as the prompt asks for it."""

    model_config = ConfigDict(alias_generator=to_camel, strict=True)

    title: str
    company: str
    location: str
    key_required_skills: list[str]
    description: str
    application_link: str
    match_score: float
    platform: str


class CourseRecord(BaseModel):
    """Fully-populated course record as the prompt asks for it."""

    model_config = ConfigDict(alias_generator=to_camel, strict=True)

    title: str
    platform: str
    description: str
    url: str | None = None
    focus_area: str | None = None
    relevance_score: float | None = None


class ValidationResult:
    """Records found in a payload, tagged with how well they fit the shape."""

    def __init__(self, status: ValidationStatus, records: list[Any], invalid_count: int) -> None:
        self.status = status
        self.records = records
        self.invalid_count = invalid_count


def validate_payload(
    payload: Any,
    payload_key: str,
    shape: type[BaseModel],
) -> ValidationResult:
    """Check a decoded payload against a declared record shape.

    Args:
        payload: Decoded JSON from the generation service.
        payload_key: Key holding the record list (``jobs`` or ``recommendations``).
        shape: Strict pydantic model describing a fully-populated record.

    Returns:
        ValidationResult with the records exactly as received.

    Raises:
        ShapeValidationError: If the payload is not an object or the key does
            not hold a list.
    """
    if not isinstance(payload, dict):
        msg = f"Expected a JSON object with a '{payload_key}' list, got {type(payload).__name__}"
        raise ShapeValidationError(msg)

    records = payload.get(payload_key)
    if not isinstance(records, list):
        msg = f"Payload has no '{payload_key}' list (found {type(records).__name__})"
        raise ShapeValidationError(msg)

    invalid = sum(1 for record in records if not _conforms(record, shape))
    status = ValidationStatus.VALID if invalid == 0 else ValidationStatus.LAX_ACCEPTED
    if invalid:
        logger.debug(
            "Lax-accepted '%s': %d/%d records are partial", payload_key, invalid, len(records),
        )
    return ValidationResult(status, records, invalid)


def _conforms(record: Any, shape: type[BaseModel]) -> bool:
    try:
        shape.model_validate(record)
    except ValidationError:
        return False
    return True
