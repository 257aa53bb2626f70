"""Admission policy for sanitized records.

Every dropped record is logged with a structured ``discard_reason`` so that
"the model produced nothing usable" can be told apart from "the model produced
low-confidence matches":

  missing_title, missing_location: raised by the sanitizer, logged here
  below_threshold: job score under the configured minimum
  duplicate: same normalized key seen earlier in the run
"""

import logging
from typing import Any

from careerrec.core.schemas import DiscardReason
from careerrec.pipeline.rules import VariantRules

logger = logging.getLogger(__name__)


def log_discard(
    rules: VariantRules,
    reason: DiscardReason,
    title: str | None,
    detail: str = "",
) -> None:
    """Emit one structured log entry for a dropped record."""
    logger.warning(
        "Skipping %s '%s': %s%s",
        rules.name,
        title or "<untitled>",
        reason.value,
        f" ({detail})" if detail else "",
        extra={"variant": rules.name, "discard_reason": reason.value, "title": title},
    )


def admit(record: dict[str, Any], rules: VariantRules) -> bool:
    """Apply the variant's business policy to a sanitized record.

    Jobs below ``min_score`` are rejected; variants without a minimum admit
    every record that survived sanitization.
    """
    if rules.min_score is None:
        return True
    score = record[rules.score_field]
    if score < rules.min_score:
        log_discard(
            rules,
            DiscardReason.BELOW_THRESHOLD,
            record.get("title"),
            f"{rules.score_field} {score:g} < {rules.min_score:g}",
        )
        return False
    return True


class DeduplicationFilter:
    """Drop records whose normalized key was already seen in this run.

    Stateful: one instance per request. The first occurrence wins.
    """

    def __init__(self, rules: VariantRules) -> None:
        self._rules = rules
        self._seen: set[tuple[str, ...]] = set()

    def __call__(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        result: list[dict[str, Any]] = []
        for record in records:
            key = self._key(record)
            if key in self._seen:
                log_discard(self._rules, DiscardReason.DUPLICATE, record.get("title"))
                continue
            self._seen.add(key)
            result.append(record)
        return result

    def _key(self, record: dict[str, Any]) -> tuple[str, ...]:
        return tuple(
            " ".join(str(record.get(field) or "").lower().split())
            for field in self._rules.dedup_fields
        )
