"""Ranking and optional skill-overlap re-scoring.

Score range for jobs: 0-100 (clamped). The generation service's own
matchScore is trusted unless the caller asks for skill-based re-scoring.

Skill-overlap weights, first matching tier per candidate skill:
  required skill  1.5
  title word      1.0
  description     0.5
Sum / number of candidate skills * 100, rounded half up, clamped to 0-100.
"""

import logging
import math
import re
from typing import Any

from careerrec.pipeline.rules import NO_DESCRIPTION, SKILL_NOT_SPECIFIED

logger = logging.getLogger(__name__)

REQUIRED_SKILL_WEIGHT = 1.5
TITLE_WORD_WEIGHT = 1.0
DESCRIPTION_WORD_WEIGHT = 0.5

_NON_WORD = re.compile(r"[^\w\s]")


def rank(records: list[dict[str, Any]], score_field: str, limit: int) -> list[dict[str, Any]]:
    """Sort by score descending and keep the first ``limit`` records.

    The sort is stable: equal scores keep their input order.
    """
    ranked = sorted(records, key=lambda r: r[score_field], reverse=True)
    return ranked[:limit]


def skill_overlap_score(record: dict[str, Any], candidate_skills: list[str]) -> int:
    """Compute a 0-100 match score from candidate skills vs. job content.

    Args:
        record: Job record with camelCase keys (title, description, keyRequiredSkills).
        candidate_skills: Skills from the candidate profile.

    Returns:
        Integer score; 0 when the job has no title or there are no skills.
    """
    title = record.get("title")
    if not title or not candidate_skills:
        return 0

    skills = [_normalize(s) for s in candidate_skills]
    title_words = _normalize(title).split()
    description = record.get("description") or ""
    description_words = [] if description == NO_DESCRIPTION else _normalize(description).split()
    required = [
        _normalize(s)
        for s in record.get("keyRequiredSkills") or []
        if s != SKILL_NOT_SPECIFIED
    ]
    required = [s for s in required if s]

    total = 0.0
    for skill in skills:
        if not skill:
            continue
        if any(_overlaps(skill, r) for r in required):
            total += REQUIRED_SKILL_WEIGHT
        elif any(_overlaps(skill, w) for w in title_words):
            total += TITLE_WORD_WEIGHT
        elif any(_overlaps(skill, w) for w in description_words):
            total += DESCRIPTION_WORD_WEIGHT

    raw = total / len(skills) * 100
    return max(0, min(100, math.floor(raw + 0.5)))


def rescore_by_skills(record: dict[str, Any], candidate_skills: list[str]) -> dict[str, Any]:
    """Replace matchScore with the skill-overlap score.

    keyRequiredSkills is narrowed to the skills the candidate has; the full
    list is kept when none match.
    """
    score = skill_overlap_score(record, candidate_skills)
    wanted = [s for s in (_normalize(c) for c in candidate_skills) if s]
    required: list[str] = list(record.get("keyRequiredSkills") or [])
    matched = [
        skill for skill, norm in ((s, _normalize(s)) for s in required)
        if norm and skill != SKILL_NOT_SPECIFIED and any(_overlaps(c, norm) for c in wanted)
    ]

    logger.debug(
        "Re-scored '%s': %s -> %d", record.get("title"), record.get("matchScore"), score,
    )
    return {**record, "matchScore": float(score), "keyRequiredSkills": matched or required}


def _normalize(text: str) -> str:
    return _NON_WORD.sub("", text.lower())


def _overlaps(a: str, b: str) -> bool:
    return a in b or b in a
