"""
Resume Job Finder - CLI Entry Point.

Runs the whole wizard in a terminal: analyze a resume, confirm the profile,
search, then browse and save results.
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from job_finder.agents import JobSearcher, ResumeAnalyzer, create_client  # noqa: E402
from job_finder.config import settings  # noqa: E402
from job_finder.errors import ValidationError  # noqa: E402
from job_finder.models import EDITABLE_PROFILE_FIELDS, AppStep, Theme  # noqa: E402
from job_finder.store import PreferenceStore, SqlStorage, get_session_factory, init_db  # noqa: E402
from job_finder.tools.file_encoder import guess_media_type  # noqa: E402
from job_finder.utils.presenter import parse_search_text, render_text  # noqa: E402
from job_finder.wizard import WizardController  # noqa: E402

FIELD_LABELS = {
    "job_name": "Job title",
    "experience_years": "Years of experience",
    "skills": "Skills",
    "certifications": "Certifications",
}


def ats_label(score: float) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    return "Needs Work"


def print_profile(wizard: WizardController) -> None:
    data = wizard.resume_data
    if data.ats_score is not None:
        print(f"\nATS score: {data.ats_score:.0f}/100 ({ats_label(data.ats_score)})")
        for rec in data.ats_recommendations or []:
            print(f"  - {rec}")
    print("\nExtracted profile:")
    for field in EDITABLE_PROFILE_FIELDS:
        print(f"  {FIELD_LABELS[field]}: {getattr(data, field)}")


def confirm_profile(wizard: WizardController) -> None:
    """Let the user overwrite any extracted field (Enter keeps it)."""
    for field in EDITABLE_PROFILE_FIELDS:
        current = getattr(wizard.resume_data, field)
        value = input(f"{FIELD_LABELS[field]} [{current}]: ").strip()
        if value:
            wizard.edit_profile(field, value)


def print_saved(wizard: WizardController) -> None:
    jobs = wizard.saved_jobs
    if not jobs:
        print("No saved jobs yet. Use /save N on a search result.")
        return
    for idx, job in enumerate(jobs, 1):
        print(f"  [{idx}] {job.title or 'Job Listing'}\n      {job.uri}")


def print_results(wizard: WizardController) -> None:
    result = wizard.search_result
    print(render_text(parse_search_text(result.text)))
    print("\nSources:")
    if not result.sources:
        print("  (none)")
    for idx, source in enumerate(result.sources, 1):
        mark = "*" if wizard.is_saved(source.uri) else " "
        print(f" {mark}[{idx}] {source.title or 'Job Link'}\n      {source.uri}")


async def run(cv_path: Path) -> None:
    """Run the job finder CLI."""
    print("Resume Job Finder")
    print("=" * 40)

    try:
        media_type = guess_media_type(cv_path)
    except ValidationError as e:
        print(f"Error: {e.message}")
        return

    print("\nInitializing...")
    init_db()
    store = PreferenceStore(SqlStorage(get_session_factory()), system_theme=Theme(settings.default_theme))
    try:
        client = create_client()
    except ValueError as e:
        print(f"Error: {e}")
        return
    wizard = WizardController(ResumeAnalyzer(client), JobSearcher(client), store)
    print(f"Theme: {store.theme.value}")

    while True:
        if wizard.step == AppStep.UPLOAD:
            print(f"\nAnalyzing {cv_path.name}...")
            await wizard.upload_resume(cv_path.read_bytes(), media_type)

        if wizard.step == AppStep.ERROR:
            print(f"\nProcess failed: {wizard.error_message}")
            if input("Try again? (y/n): ").strip().lower() not in ("y", "yes"):
                break
            wizard.reset()
            continue

        if wizard.step == AppStep.CONFIRM_DETAILS:
            print_profile(wizard)
            confirm_profile(wizard)
            location = ""
            while not location:
                location = input("Location (e.g. New York, Remote): ").strip()
                if not location:
                    print("Please enter a location")
            interests = input("Interests (e.g. Fintech, Startups): ").strip()
            print("\nSourcing opportunities...")
            await wizard.submit_preferences(location, interests)
            continue

        if wizard.step == AppStep.RESULTS:
            print_results(wizard)
            if not command_loop(wizard):
                break


def command_loop(wizard: WizardController) -> bool:
    """Handle result commands. Returns False to quit, True after a reset."""
    print("\nCommands: /save N, /saved, /theme, /reset, /quit")
    print("-" * 40)
    while True:
        try:
            user_input = input("> ").strip()
        except (KeyboardInterrupt, EOFError):
            return False

        if user_input == "/quit":
            return False

        if user_input == "/reset":
            wizard.reset()
            return True

        if user_input == "/saved":
            wizard.open_saved_jobs()
            print_saved(wizard)
            wizard.close_saved_jobs()
        elif user_input == "/theme":
            print(f"Theme: {wizard.store.toggle_theme().value}")
        elif user_input.startswith("/save "):
            sources = wizard.search_result.sources
            try:
                index = int(user_input[6:].strip())
            except ValueError:
                index = 0
            if not 1 <= index <= len(sources):
                print(f"Pick a source between 1 and {len(sources)}")
                continue
            source = sources[index - 1]
            saved = wizard.toggle_save(source)
            print(("Saved: " if saved else "Removed: ") + (source.title or source.uri))
        elif user_input:
            print("Unknown command")


def main():
    logging.basicConfig(level=settings.log_level.upper())
    if len(sys.argv) < 2:
        print("Usage: python main.py <resume.pdf|png|jpg|webp>")
        return

    # Join all args for filenames with spaces
    cv_path = Path(" ".join(sys.argv[1:]))
    if not cv_path.exists():
        print(f"Not found: {cv_path}")
        return

    try:
        asyncio.run(run(cv_path))
    except KeyboardInterrupt:
        pass
    print("Goodbye!")


if __name__ == "__main__":
    main()
