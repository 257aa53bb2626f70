"""CLI entry point for the recommendation engine."""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from careerrec.core.config import Settings
from careerrec.core.db import init_db, save_course_recommendations, save_job_recommendations
from careerrec.core.schemas import CandidateProfile, CourseRecommendations, JobRecommendations
from careerrec.llm import LLMProvider, available_providers, get_provider
from careerrec.pipeline.orchestrator import (
    export_results_json,
    recommend_courses,
    recommend_jobs,
)
from careerrec.pipeline.prompts import (
    COURSE_SYSTEM_PROMPT,
    JOB_SYSTEM_PROMPT,
    build_course_prompt,
    build_job_prompt,
)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--profile",
        default="config/profile.yaml",
        help="Path to candidate profile YAML (default: config/profile.yaml)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in settings)",
    )
    parser.add_argument(
        "--provider",
        choices=available_providers(),
        help="LLM provider, overrides llm.provider from settings",
    )
    parser.add_argument(
        "--model",
        help="Model ID, overrides llm.model from settings",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the prompts without calling the LLM",
    )
    parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Store the result in the database from settings",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Recommend jobs and courses from resume-derived facts using an LLM",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    jobs_parser = subparsers.add_parser("jobs", help="Recommend jobs")
    _add_common_arguments(jobs_parser)
    jobs_parser.add_argument(
        "--score-source",
        choices=["llm", "skills"],
        help="Rank by the model's matchScore or by skill overlap, overrides jobs.score_source",
    )

    courses_parser = subparsers.add_parser("courses", help="Recommend courses")
    _add_common_arguments(courses_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(args: argparse.Namespace) -> Settings:
    """Load settings and apply command-line overrides."""
    settings = Settings.from_yaml(args.config) if args.config else Settings()

    llm = settings.llm.model_copy(update={
        k: v for k, v in (("provider", args.provider), ("model", args.model)) if v
    })
    jobs = settings.jobs
    if getattr(args, "score_source", None):
        jobs = jobs.model_copy(update={"score_source": args.score_source})
    return settings.model_copy(update={"llm": llm, "jobs": jobs})


def dry_run(command: str, profile: CandidateProfile, settings: Settings) -> None:
    """Print what would be sent without calling the LLM."""
    if command == "jobs":
        system, prompt = JOB_SYSTEM_PROMPT, build_job_prompt(profile)
    else:
        system, prompt = COURSE_SYSTEM_PROMPT, build_course_prompt(profile)

    print(f"[DRY RUN] provider: {settings.llm.provider} (model: {settings.llm.model or 'default'})")
    print("[DRY RUN] system prompt:")
    print(system)
    print("[DRY RUN] user prompt:")
    print(prompt)


async def run(
    command: str,
    profile: CandidateProfile,
    settings: Settings,
    provider: LLMProvider,
) -> JobRecommendations | CourseRecommendations:
    """Run one recommendation request against the given provider."""
    if command == "jobs":
        return await recommend_jobs(profile, provider, settings)
    return await recommend_courses(profile, provider, settings)


def print_summary(result: JobRecommendations | CourseRecommendations) -> None:
    print(f"\n{len(result.items)} recommendations ({result.outcome.value}).")
    if isinstance(result, JobRecommendations):
        for i, job in enumerate(result.items, start=1):
            print(f"  {i:>2}. [{job.match_score:5.1f}] {job.title} - {job.company}, "
                  f"{job.location} ({job.platform})")
    else:
        for i, course in enumerate(result.items, start=1):
            print(f"  {i:>2}. [{course.relevance_score:.2f}] {course.title} ({course.platform})")
        if result.general_advice:
            print(f"\nAdvice: {result.general_advice}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args)
        profile = CandidateProfile.from_yaml(args.profile)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.dry_run:
        dry_run(args.command, profile, settings)
        return

    try:
        provider = get_provider(settings.llm.provider)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    result = asyncio.run(run(args.command, profile, settings, provider))
    print_summary(result)

    if args.save:
        conn = init_db(settings.database.path)
        if isinstance(result, JobRecommendations):
            run_id = save_job_recommendations(conn, profile, result)
        else:
            run_id = save_course_recommendations(conn, profile, result)
        conn.close()
        print(f"Saved as run {run_id} in {settings.database.path}")

    if args.export == "json":
        print(f"\n{export_results_json(result)}")


if __name__ == "__main__":
    main()
