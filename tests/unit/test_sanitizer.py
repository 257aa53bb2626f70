"""Tests for per-field record sanitization."""

import logging
import math

import pytest

from careerrec.core.schemas import DiscardReason
from careerrec.pipeline.rules import course_rules, job_rules
from careerrec.pipeline.sanitizer import (
    RecordDiscarded,
    clamp_score,
    clean_list,
    clean_text,
    is_valid_url,
    repair_url,
    sanitize_record,
    search_fallback_url,
)

JOB = job_rules()
COURSE = course_rules()


def _job(**overrides: object) -> dict[str, object]:
    defaults: dict[str, object] = {
        "title": "Data Engineer",
        "company": "Acme Corp",
        "location": "Chennai, India",
        "keyRequiredSkills": ["Python", "SQL"],
        "description": "Build pipelines.",
        "applicationLink": "https://www.linkedin.com/jobs/view/1",
        "matchScore": 70,
        "platform": "LinkedIn",
    }
    defaults.update(overrides)
    return defaults


def _course(**overrides: object) -> dict[str, object]:
    defaults: dict[str, object] = {
        "title": "Intro to SQL",
        "platform": "Coursera",
        "description": "Query basics.",
        "url": "https://www.coursera.org/learn/sql",
        "focusArea": "SQL",
        "relevanceScore": 0.8,
    }
    defaults.update(overrides)
    return defaults


# ---------------------------------------------------------------------------
# Fatal fields
# ---------------------------------------------------------------------------


class TestFatalFields:
    @pytest.mark.parametrize("title", [None, "", "   ", 123, ["x"]])
    def test_missing_title_discards(self, title: object) -> None:
        with pytest.raises(RecordDiscarded) as exc_info:
            sanitize_record(_job(title=title), JOB)
        assert exc_info.value.reason is DiscardReason.MISSING_TITLE
        assert exc_info.value.field == "title"

    def test_absent_title_key_discards(self) -> None:
        record = _job()
        del record["title"]
        with pytest.raises(RecordDiscarded):
            sanitize_record(record, JOB)

    @pytest.mark.parametrize("location", [None, "", "  \t"])
    def test_missing_location_discards_job(self, location: object) -> None:
        with pytest.raises(RecordDiscarded) as exc_info:
            sanitize_record(_job(location=location), JOB)
        assert exc_info.value.reason is DiscardReason.MISSING_LOCATION

    def test_title_checked_before_location(self) -> None:
        with pytest.raises(RecordDiscarded) as exc_info:
            sanitize_record(_job(title="", location=""), JOB)
        assert exc_info.value.reason is DiscardReason.MISSING_TITLE

    def test_course_has_no_location_rule(self) -> None:
        result = sanitize_record(_course(), COURSE)
        assert "location" not in result

    def test_non_dict_record_discarded(self) -> None:
        with pytest.raises(RecordDiscarded):
            sanitize_record("Senior Engineer at Acme", JOB)
        with pytest.raises(RecordDiscarded):
            sanitize_record(None, JOB)


# ---------------------------------------------------------------------------
# Defaults and trimming
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_values_trimmed(self) -> None:
        result = sanitize_record(
            _job(title="  Data Engineer ", company=" Acme ", location=" Pune "), JOB,
        )
        assert result["title"] == "Data Engineer"
        assert result["company"] == "Acme"
        assert result["location"] == "Pune"

    def test_missing_company_defaults(self) -> None:
        result = sanitize_record(_job(company="   "), JOB)
        assert result["company"] == "Unknown Company"

    def test_missing_platform_defaults(self) -> None:
        assert sanitize_record(_job(platform=None), JOB)["platform"] == "Unknown Platform"
        assert sanitize_record(_course(platform=""), COURSE)["platform"] == "Unknown Platform"

    def test_missing_description_defaults(self) -> None:
        assert sanitize_record(_job(description=""), JOB)["description"] == (
            "No description provided."
        )
        assert sanitize_record(_course(description=None), COURSE)["description"] == (
            "No description provided."
        )

    def test_empty_skills_get_sentinel(self) -> None:
        result = sanitize_record(_job(keyRequiredSkills=[]), JOB)
        assert result["keyRequiredSkills"] == ["Skill not specified"]

    def test_blank_skills_get_sentinel(self) -> None:
        result = sanitize_record(_job(keyRequiredSkills=["  ", ""]), JOB)
        assert result["keyRequiredSkills"] == ["Skill not specified"]

    def test_missing_skills_get_sentinel(self) -> None:
        record = _job()
        del record["keyRequiredSkills"]
        assert sanitize_record(record, JOB)["keyRequiredSkills"] == ["Skill not specified"]

    def test_skills_trimmed_and_stringified(self) -> None:
        result = sanitize_record(_job(keyRequiredSkills=[" Python ", 3, None, ""]), JOB)
        assert result["keyRequiredSkills"] == ["Python", "3"]

    def test_skills_string_split_on_commas(self) -> None:
        result = sanitize_record(_job(keyRequiredSkills="Python, SQL ,Airflow"), JOB)
        assert result["keyRequiredSkills"] == ["Python", "SQL", "Airflow"]

    def test_course_focus_area_optional(self) -> None:
        assert sanitize_record(_course(focusArea="  "), COURSE)["focusArea"] is None
        assert sanitize_record(_course(focusArea=" SQL "), COURSE)["focusArea"] == "SQL"

    def test_unknown_keys_dropped(self) -> None:
        result = sanitize_record(_job(salary="10 LPA", remote=True), JOB)
        assert "salary" not in result
        assert "remote" not in result

    def test_job_result_has_all_fields(self) -> None:
        result = sanitize_record({"title": "Engineer", "location": "Remote"}, JOB)
        assert set(result) == {
            "title", "company", "location", "keyRequiredSkills",
            "description", "applicationLink", "matchScore", "platform",
        }


# ---------------------------------------------------------------------------
# URL repair
# ---------------------------------------------------------------------------


class TestUrlRepair:
    def test_scheme_added_to_bare_host(self) -> None:
        result = sanitize_record(_job(applicationLink="example.com"), JOB)
        assert result["applicationLink"] == "https://example.com"

    def test_valid_url_kept(self) -> None:
        link = "http://careers.example.org/jobs/42?ref=x"
        assert sanitize_record(_job(applicationLink=link), JOB)["applicationLink"] == link

    def test_unrepairable_url_falls_back_to_search(self) -> None:
        result = sanitize_record(
            _job(title="Data Engineer", company="Acme Corp", location="Chennai, India",
                 applicationLink="not a url"),
            JOB,
        )
        assert result["applicationLink"] == (
            "https://www.google.com/search?q=Data%20Engineer%20Acme%20Corp%20Chennai%2C%20India"
        )

    def test_missing_url_falls_back_with_defaults(self) -> None:
        result = sanitize_record(_job(company=None, applicationLink=None), JOB)
        assert result["applicationLink"].endswith("Unknown%20Company%20Chennai%2C%20India")

    def test_whitespace_in_host_falls_back(self) -> None:
        result = sanitize_record(_job(applicationLink="https://exa mple.com/job"), JOB)
        assert result["applicationLink"].startswith("https://www.google.com/search?q=")

    def test_course_fallback_uses_title_and_platform(self) -> None:
        result = sanitize_record(_course(url=None), COURSE)
        assert result["url"] == "https://www.google.com/search?q=Intro%20to%20SQL%20Coursera"

    def test_invalid_url_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="careerrec.pipeline.sanitizer"):
            sanitize_record(_job(applicationLink="apply now"), JOB)
        assert "defaulting to search URL" in caplog.text

    def test_missing_url_not_logged_as_invalid(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="careerrec.pipeline.sanitizer"):
            sanitize_record(_job(applicationLink=""), JOB)
        assert caplog.records == []


class TestUrlHelpers:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("https://example.com", "https://example.com"),
            ("  www.naukri.com/job/1  ", "https://www.naukri.com/job/1"),
            ("HTTPS://Example.com/x", "HTTPS://Example.com/x"),
            ("localhost", None),
            ("", None),
            (None, None),
            (42, None),
            ("http://localhost:99999/x", None),
        ],
    )
    def test_repair_url(self, value: object, expected: str | None) -> None:
        assert repair_url(value) == expected

    @pytest.mark.parametrize(
        ("link", "valid"),
        [
            ("https://example.com/a", True),
            ("http://example.com", True),
            ("ftp://example.com", False),
            ("https://", False),
            ("https://exa mple.com", False),
            ("example.com", False),
        ],
    )
    def test_is_valid_url(self, link: str, valid: bool) -> None:
        assert is_valid_url(link) is valid

    def test_search_fallback_encodes_like_uri_component(self) -> None:
        url = search_fallback_url("C++ Dev", "A&B (India)", "Pune/Remote")
        assert url == (
            "https://www.google.com/search?q=C%2B%2B%20Dev%20A%26B%20(India)%20Pune%2FRemote"
        )


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------


class TestScores:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (45, 45.0),
            (0, 0.0),
            (100, 100.0),
            (87.5, 87.5),
            (150, 0.0),
            (-5, 0.0),
            ("85", 0.0),
            (True, 0.0),
            (None, 0.0),
            (math.nan, 0.0),
            (10**400, 0.0),
            (-(10**400), 0.0),
        ],
    )
    def test_job_match_score(self, value: object, expected: float) -> None:
        assert sanitize_record(_job(matchScore=value), JOB)["matchScore"] == expected

    def test_course_relevance_range(self) -> None:
        assert sanitize_record(_course(relevanceScore=0.8), COURSE)["relevanceScore"] == 0.8
        assert sanitize_record(_course(relevanceScore=80), COURSE)["relevanceScore"] == 0.0
        assert sanitize_record(_course(relevanceScore=1), COURSE)["relevanceScore"] == 1.0

    def test_clamp_score_returns_float(self) -> None:
        assert isinstance(clamp_score(7, 0, 10), float)
        assert clamp_score(math.inf, 0, 100) == 0


# ---------------------------------------------------------------------------
# Idempotence
# ---------------------------------------------------------------------------


class TestIdempotence:
    @pytest.mark.parametrize(
        "record",
        [
            _job(),
            _job(company=None, keyRequiredSkills=[], applicationLink="example.com"),
            _job(applicationLink="not a url", matchScore="high", description=" "),
            _job(keyRequiredSkills="Go, Rust", platform=None),
        ],
    )
    def test_job_sanitize_twice_is_stable(self, record: dict[str, object]) -> None:
        once = sanitize_record(record, JOB)
        assert sanitize_record(once, JOB) == once

    @pytest.mark.parametrize(
        "record",
        [_course(), _course(url="udemy.com/course/x", focusArea=None, relevanceScore=3)],
    )
    def test_course_sanitize_twice_is_stable(self, record: dict[str, object]) -> None:
        once = sanitize_record(record, COURSE)
        assert sanitize_record(once, COURSE) == once


class TestTextHelpers:
    def test_clean_text(self) -> None:
        assert clean_text("  a b ") == "a b"
        assert clean_text("   ") is None
        assert clean_text(5) is None

    def test_clean_list_rejects_non_lists(self) -> None:
        assert clean_list({"a": 1}) == []
        assert clean_list(None) == []


class TestLoneSurrogates:
    def test_dropped_from_text_fields(self) -> None:
        result = sanitize_record(_job(title="Dev \ud800", company="Ac\udfffme"), JOB)
        assert result["title"] == "Dev"
        assert result["company"] == "Acme"

    def test_search_fallback_still_built(self) -> None:
        result = sanitize_record(
            _job(title="Dev \ud800", location="Remote", applicationLink=None), JOB,
        )
        assert result["applicationLink"] == (
            "https://www.google.com/search?q=Dev%20Acme%20Corp%20Remote"
        )

    def test_dropped_from_skills(self) -> None:
        result = sanitize_record(_job(keyRequiredSkills=["\ud800", "Go\udc00"]), JOB)
        assert result["keyRequiredSkills"] == ["Go"]

    def test_fallback_url_encodes_surrogate_as_replacement(self) -> None:
        assert search_fallback_url("Dev\ud800") == "https://www.google.com/search?q=Dev%3F"
