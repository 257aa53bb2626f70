"""Per-field sanitization of generated records.

Turns one untrusted record into a fully-populated dict (camelCase keys, same
as the generation payload) or raises RecordDiscarded when a fatal field is
missing. Applying sanitize_record to its own output returns it unchanged.
"""

import logging
import math
from typing import Any
from urllib.parse import quote, urlparse

from careerrec.core.schemas import DiscardReason
from careerrec.pipeline.rules import VariantRules

logger = logging.getLogger(__name__)

SEARCH_FALLBACK_BASE = "https://www.google.com/search?q="

# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class RecordDiscarded(Exception):
    """A record lacks a field that has no safe default."""

    def __init__(self, reason: DiscardReason, field: str) -> None:
        super().__init__(f"missing or empty '{field}'")
        self.reason = reason
        self.field = field


def _drop_surrogates(text: str) -> str:
    # JSON may carry lone surrogates, which cannot be UTF-8 encoded.
    return text.encode("utf-8", "ignore").decode("utf-8")


def clean_text(value: Any) -> str | None:
    """Return the trimmed string, or None for non-strings and blank strings."""
    if not isinstance(value, str):
        return None
    stripped = _drop_surrogates(value).strip()
    return stripped or None


def clean_list(value: Any) -> list[str]:
    """Return the non-blank, trimmed string entries of a list.

    A bare string is treated as a comma-separated list.
    """
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return []
    cleaned = (_drop_surrogates(str(item)).strip() for item in value if item is not None)
    return [item for item in cleaned if item]


def is_valid_url(link: str) -> bool:
    """True for absolute http(s) URLs with a host and no whitespace."""
    if any(ch.isspace() for ch in link):
        return False
    try:
        parsed = urlparse(link)
        _ = parsed.port  # malformed ports raise here
    except ValueError:
        return False
    return parsed.scheme.lower() in ("http", "https") and bool(parsed.hostname)


def repair_url(value: Any) -> str | None:
    """Return a usable URL, prefixing https:// to scheme-less hosts, or None."""
    link = clean_text(value)
    if link is None:
        return None
    if not link.lower().startswith(("http://", "https://")):
        if "." not in link:
            return None
        link = f"https://{link}"
    return link if is_valid_url(link) else None


def search_fallback_url(*parts: str) -> str:
    """Build a Google search URL for the given terms, URL-encoded."""
    query = " ".join(parts)
    return SEARCH_FALLBACK_BASE + quote(query, safe=_URI_COMPONENT_SAFE, errors="replace")


def clamp_score(value: Any, low: float, high: float) -> float:
    """Return value as float if it is a real number in [low, high], else low."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return low
    # float() overflows on huge ints, so compare first.
    if value < low or value > high:
        return low
    if isinstance(value, float) and math.isnan(value):
        return low
    return float(value)


def sanitize_record(raw: Any, rules: VariantRules) -> dict[str, Any]:
    """Sanitize one generated record according to the variant's rules.

    Args:
        raw: One element of the generated list; non-dicts count as empty.
        rules: Field policy for the variant.

    Returns:
        A dict holding every field of the variant, with defaults applied.

    Raises:
        RecordDiscarded: If a fatal field is missing or blank.
    """
    record: dict[str, Any] = raw if isinstance(raw, dict) else {}
    result: dict[str, Any] = {}

    for field in rules.fatal_fields:
        value = clean_text(record.get(field))
        if value is None:
            raise RecordDiscarded(DiscardReason(f"missing_{field}"), field)
        result[field] = value

    for field, default in rules.text_defaults.items():
        result[field] = clean_text(record.get(field)) or default

    for field in rules.optional_text_fields:
        result[field] = clean_text(record.get(field))

    for field, default in rules.list_defaults.items():
        result[field] = clean_list(record.get(field)) or list(default)

    supplied = record.get(rules.url_field)
    link = repair_url(supplied)
    if link is None:
        link = search_fallback_url(*(result[f] for f in rules.fallback_query_fields))
        if clean_text(supplied) is not None:
            logger.warning(
                "Invalid %s %r for '%s' - defaulting to search URL",
                rules.url_field, supplied, result["title"],
            )
    result[rules.url_field] = link

    result[rules.score_field] = clamp_score(
        record.get(rules.score_field), rules.score_min, rules.score_max,
    )
    return result
