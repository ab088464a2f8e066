#!/usr/bin/env python3
"""
Resume Fit CLI.

A tool to parse resumes, extract job requirements and score how well a
resume matches a job posting, with optional LLM-powered rewriting.

Usage:
    python main.py parse RESUME              # Show parsed resume facts
    python main.py job URL                   # Scrape and extract a job posting
    python main.py compare RESUME -f JOB     # Score a resume against a job
    python main.py rank RESUME -d JOBS_DIR   # Rank many job postings
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from tqdm import tqdm

from resume_fit.exceptions import ResumeFitError
from resume_fit.keyword_engine import categorize_skills
from resume_fit.logging_config import configure_logging


def _services():
    from backend.services import Services

    services = Services()
    configure_logging(services.settings.log_level)
    return services


def _fail(error: ResumeFitError) -> None:
    click.echo(f"Error: {error.message}", err=True)
    if error.hint:
        click.echo(f"  {error.hint}", err=True)
    sys.exit(1)


def _echo_json(record) -> None:
    click.echo(json.dumps(record.model_dump(by_alias=True, mode="json"), indent=2))


def _read_resume(services, resume: str, use_fallback: bool = True):
    from resume_fit.data_extraction import media_type_for_path

    resume_path = Path(resume)
    media_type = media_type_for_path(resume_path)
    return services.resumes.parse(resume_path.read_bytes(), media_type, use_fallback)


def _read_job(services, job_url: Optional[str], job_file: Optional[str], text: Optional[str]):
    if job_file:
        text = Path(job_file).read_text(encoding="utf-8")

    if not job_url and not (text or "").strip():
        click.echo("Error: Provide a job URL, --job-file or --text", err=True)
        sys.exit(1)

    return services.jobs.submit(job_url=job_url, job_text=text)


def job_options(func):
    """Shared options for commands that take a job posting."""
    func = click.option(
        "--text", "-t", type=str, default=None, help="Job description text",
    )(func)
    func = click.option(
        "--job-file", "-f", type=click.Path(exists=True, dir_okay=False), default=None,
        help="Path to a job description text file",
    )(func)
    func = click.option(
        "--job-url", "-u", type=str, default=None, help="Job posting URL to scrape",
    )(func)
    return func


@click.group()
@click.version_option(version="1.0.0", prog_name="Resume Fit")
def cli():
    """
    Resume Fit - Score your resume against job postings.

    Parse a resume, extract the requirements of a job posting and see
    which skills and requirements are matched or missing.
    """
    pass


@cli.command()
@click.argument("resume", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the facts as JSON")
@click.option(
    "--llm-fallback/--no-llm-fallback",
    default=True,
    help="Ask the LLM for skills when none are found",
)
def parse(resume: str, as_json: bool, llm_fallback: bool):
    """
    Display the facts extracted from a PDF or DOCX resume.

    Example:
        python main.py parse resume.pdf
    """
    services = _services()

    try:
        facts = _read_resume(services, resume, llm_fallback)
    except ResumeFitError as e:
        _fail(e)

    if as_json:
        _echo_json(facts)
        return

    click.echo(f"Resume: {resume}")
    click.echo("=" * 50)
    click.echo(f"Emails: {', '.join(facts.emails) or 'N/A'}")
    click.echo(f"Phones: {', '.join(facts.phones) or 'N/A'}")
    click.echo()

    click.echo(f"Skills ({len(facts.skills)}):")
    for category, skills in categorize_skills(facts.skills).items():
        click.echo(f"  {category.replace('_', ' ').title()}: {', '.join(skills)}")

    for title, section in (("Experience", facts.experience_text), ("Education", facts.education_text)):
        click.echo()
        click.echo(f"{title}:")
        preview = section[:300] + ("..." if len(section) > 300 else "")
        click.echo(f"  {preview or 'N/A'}")


@cli.command()
@click.argument("url", required=False)
@click.option("--text", "-t", type=str, default=None, help="Job description text (alternative to URL)")
@click.option(
    "--file", "-f", "job_file", type=click.Path(exists=True, dir_okay=False), default=None,
    help="Path to a job description text file",
)
@click.option("--json", "as_json", is_flag=True, help="Print the facts as JSON")
def job(url: Optional[str], text: Optional[str], job_file: Optional[str], as_json: bool):
    """
    Extract skills and requirements from a job posting.

    Example:
        python main.py job https://www.indeed.com/viewjob?jk=123
        python main.py job --file vacancies/acme.txt
    """
    services = _services()

    try:
        facts = _read_job(services, url, job_file, text)
    except ResumeFitError as e:
        _fail(e)

    if as_json:
        _echo_json(facts)
        return

    if facts.source_url:
        click.echo(f"Source: {facts.source_url}")
    click.echo(f"Skills: {', '.join(facts.skills) or 'none detected'}")
    click.echo(
        f"Years of experience: {facts.years_experience if facts.years_experience is not None else 'not stated'}"
    )
    click.echo()
    click.echo(f"Requirements ({len(facts.requirements)}):")
    for requirement in facts.requirements:
        click.echo(f"  • {requirement}")


@cli.command()
@click.argument("resume", type=click.Path(exists=True, dir_okay=False))
@job_options
@click.option("--json", "as_json", is_flag=True, help="Print the comparison as JSON")
def compare(resume: str, job_url: Optional[str], job_file: Optional[str], text: Optional[str], as_json: bool):
    """
    Score a resume against a job posting.

    Example:
        python main.py compare resume.pdf --job-file vacancies/acme.txt
    """
    services = _services()

    try:
        facts = _read_resume(services, resume)
        job_facts = _read_job(services, job_url, job_file, text)
    except ResumeFitError as e:
        _fail(e)

    result = services.analysis.compare(facts, job_facts)

    if as_json:
        _echo_json(result)
        return

    click.echo("═" * 50)
    click.echo(f"  MATCH: {result.match_percentage}%")
    click.echo("═" * 50)

    sections = (
        ("Matched skills", result.matched_skills),
        ("Missing skills", result.missing_skills),
        ("Matched requirements", result.matched_requirements),
        ("Missing requirements", result.missing_requirements),
        ("Strengths", result.strengths),
        ("Weaknesses", result.weaknesses),
        ("Suggestions", result.suggestions),
    )
    for title, items in sections:
        if items:
            click.echo()
            click.echo(f"{title}:")
            for item in items:
                click.echo(f"  • {item}")


@cli.command()
@click.argument("resume", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--jobs-dir",
    "-d",
    type=click.Path(exists=True, file_okay=False),
    required=True,
    help="Directory containing job description .txt files",
)
@click.option("--top", "-n", type=int, default=10, help="Number of jobs to show")
def rank(resume: str, jobs_dir: str, top: int):
    """
    Rank every job posting in a directory by match percentage.

    Example:
        python main.py rank resume.pdf --jobs-dir vacancies
    """
    from resume_fit.requirement_extractor import extract_job_facts

    services = _services()

    try:
        facts = _read_resume(services, resume)
    except ResumeFitError as e:
        _fail(e)

    job_files = sorted(Path(jobs_dir).glob("*.txt"))
    if not job_files:
        click.echo(f"No job description files found in {jobs_dir}")
        return

    ranked = []
    for job_path in tqdm(job_files, desc="Scoring"):
        content = job_path.read_text(encoding="utf-8").strip()
        if not content:
            continue
        result = services.analysis.compare(facts, extract_job_facts(content))
        ranked.append((job_path.stem, result))

    # * Best match first, then by name
    ranked.sort(key=lambda item: (-item[1].match_percentage, item[0]))

    click.echo()
    click.echo("Jobs ranked by match:")
    click.echo("-" * 50)
    for i, (name, result) in enumerate(ranked[:top], 1):
        bar = "█" * (result.match_percentage // 5)
        click.echo(f"{i}. {name:25} {bar:20} {result.match_percentage:3d}%")


@cli.command()
@click.argument("resume", type=click.Path(exists=True, dir_okay=False))
@job_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the rewritten resume (Markdown) to this file",
)
def rewrite(resume: str, job_url: Optional[str], job_file: Optional[str], text: Optional[str], output: Optional[str]):
    """
    Rewrite a resume with the LLM to better match a job posting.

    Requires OPENROUTER_API_KEY (or OPENAI_API_KEY).

    Example:
        python main.py rewrite resume.docx --job-file vacancies/acme.txt -o tailored.md
    """
    services = _services()

    try:
        facts = _read_resume(services, resume)
        job_facts = _read_job(services, job_url, job_file, text)
        click.echo("Rewriting resume...")
        result = services.analysis.rewrite(facts, job_facts)
    except ResumeFitError as e:
        _fail(e)

    click.echo(f"Match before rewrite: {result.comparison.match_percentage}%")

    if output:
        Path(output).write_text(result.rewritten_resume, encoding="utf-8")
        click.echo(f"✓ Rewritten resume saved to {output}")
    else:
        click.echo()
        click.echo(result.rewritten_resume)


@cli.command()
@click.option("--host", "-h", default="127.0.0.1", help="Host to bind to")
@click.option("--port", "-p", default=8000, help="Port to bind to")
@click.option(
    "--reload/--no-reload",
    default=True,
    help="Enable auto-reload for development",
)
def serve(host: str, port: int, reload: bool):
    """
    Start the API server.

    Example:
        python main.py serve
        python main.py serve --port 8080
    """
    import uvicorn

    click.echo(f"Starting Resume Fit API on http://{host}:{port}")
    click.echo("Press Ctrl+C to stop")
    click.echo()

    uvicorn.run(
        "backend.api:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    cli()
