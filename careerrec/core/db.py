"""SQLite persistence for recommendation runs and their ranked items."""

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

from careerrec.core.schemas import CandidateProfile, CourseRecommendations, JobRecommendations

_RUNS_TABLE = """
CREATE TABLE IF NOT EXISTS recommendation_runs (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    variant         TEXT    NOT NULL,
    outcome         TEXT    NOT NULL,
    item_count      INTEGER NOT NULL DEFAULT 0,
    profile_json    TEXT    NOT NULL,
    general_advice  TEXT,
    created_at      TEXT    NOT NULL
);
"""

_JOB_ITEMS_TABLE = """
CREATE TABLE IF NOT EXISTS job_items (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    run_id              INTEGER NOT NULL REFERENCES recommendation_runs(id),
    rank                INTEGER NOT NULL,
    title               TEXT    NOT NULL,
    company             TEXT    NOT NULL,
    location            TEXT    NOT NULL,
    key_required_skills TEXT    NOT NULL,
    description         TEXT    NOT NULL,
    application_link    TEXT    NOT NULL,
    match_score         REAL    NOT NULL,
    platform            TEXT    NOT NULL,
    UNIQUE(run_id, rank)
);
"""

_COURSE_ITEMS_TABLE = """
CREATE TABLE IF NOT EXISTS course_items (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    run_id          INTEGER NOT NULL REFERENCES recommendation_runs(id),
    rank            INTEGER NOT NULL,
    title           TEXT    NOT NULL,
    platform        TEXT    NOT NULL,
    description     TEXT    NOT NULL,
    url             TEXT    NOT NULL,
    focus_area      TEXT,
    relevance_score REAL    NOT NULL,
    UNIQUE(run_id, rank)
);
"""


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_RUNS_TABLE)
    conn.execute(_JOB_ITEMS_TABLE)
    conn.execute(_COURSE_ITEMS_TABLE)
    conn.commit()
    return conn


def _insert_run(
    conn: sqlite3.Connection,
    variant: str,
    outcome: str,
    item_count: int,
    profile: CandidateProfile,
    general_advice: str | None = None,
) -> int:
    cursor = conn.execute(
        """
        INSERT INTO recommendation_runs
            (variant, outcome, item_count, profile_json, general_advice, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            variant,
            outcome,
            item_count,
            profile.model_dump_json(),
            general_advice,
            datetime.now().isoformat(),
        ),
    )
    return cursor.lastrowid or 0


def save_job_recommendations(
    conn: sqlite3.Connection,
    profile: CandidateProfile,
    result: JobRecommendations,
) -> int:
    """Store a job result and its items in rank order. Returns the run ID."""
    run_id = _insert_run(conn, "job", result.outcome.value, len(result.items), profile)
    conn.executemany(
        """
        INSERT INTO job_items
            (run_id, rank, title, company, location, key_required_skills,
             description, application_link, match_score, platform)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                run_id,
                rank,
                job.title,
                job.company,
                job.location,
                json.dumps(job.key_required_skills),
                job.description,
                job.application_link,
                job.match_score,
                job.platform,
            )
            for rank, job in enumerate(result.items, start=1)
        ],
    )
    conn.commit()
    return run_id


def save_course_recommendations(
    conn: sqlite3.Connection,
    profile: CandidateProfile,
    result: CourseRecommendations,
) -> int:
    """Store a course result and its items in rank order. Returns the run ID."""
    run_id = _insert_run(
        conn, "course", result.outcome.value, len(result.items), profile, result.general_advice,
    )
    conn.executemany(
        """
        INSERT INTO course_items
            (run_id, rank, title, platform, description, url, focus_area, relevance_score)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                run_id,
                rank,
                course.title,
                course.platform,
                course.description,
                course.url,
                course.focus_area,
                course.relevance_score,
            )
            for rank, course in enumerate(result.items, start=1)
        ],
    )
    conn.commit()
    return run_id


def get_run(conn: sqlite3.Connection, run_id: int) -> dict[str, Any] | None:
    """Return the run row as a dict, or None if it does not exist."""
    row = conn.execute(
        "SELECT * FROM recommendation_runs WHERE id = ?", (run_id,),
    ).fetchone()
    return dict(row) if row is not None else None


def get_run_items(conn: sqlite3.Connection, run_id: int) -> list[dict[str, Any]]:
    """Return the stored items of a run in rank order."""
    run = get_run(conn, run_id)
    if run is None:
        return []
    table = "job_items" if run["variant"] == "job" else "course_items"
    rows = conn.execute(
        f"SELECT * FROM {table} WHERE run_id = ? ORDER BY rank",
        (run_id,),
    ).fetchall()
    items = [dict(row) for row in rows]
    if table == "job_items":
        for item in items:
            item["key_required_skills"] = json.loads(item["key_required_skills"])
    return items
