#!/usr/bin/env python3
"""
ATS Scoring and Optimization CLI

Scores a résumé against a job posting, optimizes it, and patches the
original document in place.

Commands:
    analyze   - Score a résumé against a job posting
    optimize  - Rewrite a résumé toward a job posting
    keywords  - Extract canonical keywords from a job posting
    compare   - Compare two résumé versions against one posting
    improve   - Apply optimized text to the original PDF/DOCX/TXT in place

Examples:\n

    ats.py analyze resume.pdf job.txt                      # Summary

    ats.py analyze resume.pdf job.txt --json               # Full result as JSON

    ats.py optimize resume.txt job.txt -a aggressive -o optimized.txt

    ats.py optimize resume.txt job.txt --mutation-only -o optimized.txt

    ats.py improve resume.pdf optimized.txt -o improved.pdf
"""

import io
import json
from pathlib import Path
from typing import Optional

import typer
from docx import Document
from dotenv import load_dotenv
from typing_extensions import Annotated

from atscore.contexts.intake.exceptions import InvalidInputError
from atscore.contexts.rendering.exceptions import UnsupportedFormatError
from atscore.contexts.tailoring.changes import AGGRESSIVENESS_LEVELS, OptimizationPreferences
from atscore.service import AtsService
from atscore.utils.logger import session_log_dir, setup_logger
from atscore.utils.pdf_processing import extract_pdf_text

load_dotenv()

app = typer.Typer(
    help="Score résumés against job postings and optimize them",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


# =============================================================================
# HELPERS
# =============================================================================


def start_session(command: str, **provenance) -> Path:
    """Install log sinks for one CLI invocation."""
    return setup_logger(
        context_name=command,
        log_dir=session_log_dir(command),
        extra_provenance=provenance,
    )


def read_document_text(path: Path) -> str:
    """Plain text of a .pdf, .docx or text file."""
    if not path.exists():
        typer.secho(f"Error: file not found: {path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return extract_pdf_text(path)
    if suffix == ".docx":
        document = Document(io.BytesIO(path.read_bytes()))
        return "\n".join(paragraph.text for paragraph in document.paragraphs)
    return path.read_text(encoding="utf-8")


def fail(error: Exception) -> None:
    typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def echo_json(data: dict) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


# =============================================================================
# COMMANDS
# =============================================================================


@app.command("analyze")
def analyze_command(
    resume: Annotated[Path, typer.Argument(help="Résumé file (.pdf, .docx or text)")],
    job: Annotated[Path, typer.Argument(help="Job posting file (.pdf, .docx or text)")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the full result as JSON")] = False,
):
    """
    Score a résumé against a job posting.

    Examples:\n

        $ ats.py analyze resume.pdf job.txt

        $ ats.py analyze resume.pdf job.txt --json
    """
    start_session("analyze", Resume=resume, Job=job)
    service = AtsService()

    try:
        result = service.analyze(read_document_text(resume), read_document_text(job))
    except InvalidInputError as e:
        fail(e)

    if as_json:
        echo_json(result.to_dict())
        return

    typer.secho(f"\nATS score: {result.ats_score}/100", fg=typer.colors.BLUE, bold=True)
    for name, value in vars(result.breakdown).items():
        typer.echo(f"  {name}: {value:.2f}")
    typer.echo(f"\nMatched ({len(result.matched_keywords)}): {', '.join(result.matched_keywords) or '-'}")
    typer.echo(f"Missing ({len(result.missing_keywords)}): {', '.join(result.missing_keywords) or '-'}")

    if result.suggestions:
        typer.echo("\nSuggestions:")
        for suggestion in result.suggestions:
            typer.echo(f"  [{suggestion.priority}] {suggestion.message}")


@app.command("optimize")
def optimize_command(
    resume: Annotated[Path, typer.Argument(help="Résumé file (.pdf, .docx or text)")],
    job: Annotated[Path, typer.Argument(help="Job posting file (.pdf, .docx or text)")],
    aggressiveness: Annotated[
        str,
        typer.Option("--aggressiveness", "-a", help=f"One of: {', '.join(AGGRESSIVENESS_LEVELS)}"),
    ] = "moderate",
    mutation_only: Annotated[
        bool,
        typer.Option("--mutation-only", help="Only edit bullets literally; keep the original layout"),
    ] = False,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write the optimized text here")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the full result as JSON")] = False,
):
    """
    Rewrite a résumé toward a job posting and report the score change.

    Examples:\n

        $ ats.py optimize resume.txt job.txt -o optimized.txt

        $ ats.py optimize resume.txt job.txt -a aggressive --mutation-only
    """
    start_session("optimize", Resume=resume, Job=job, Aggressiveness=aggressiveness)
    service = AtsService()
    preferences = OptimizationPreferences(aggressiveness=aggressiveness, mutation_only=mutation_only)

    try:
        result = service.optimize(read_document_text(resume), read_document_text(job), preferences=preferences)
    except InvalidInputError as e:
        fail(e)

    if output is not None:
        output.write_text(result.optimized_text, encoding="utf-8")

    if as_json:
        echo_json(result.to_dict())
        return

    typer.secho(
        f"\nScore: {result.original_score} -> {result.optimized_score} ({result.score_improvement:+d})",
        fg=typer.colors.GREEN if result.score_improvement > 0 else typer.colors.YELLOW,
        bold=True,
    )
    typer.echo(f"{len(result.changes)} changes:")
    for change in result.changes:
        typer.echo(f"  {change.type} @ {change.location}: {change.reason}")
    if output is not None:
        typer.echo(f"\nOptimized résumé written to {output}")


@app.command("keywords")
def keywords_command(
    job: Annotated[Path, typer.Argument(help="Job posting file (.pdf, .docx or text)")],
):
    """Extract canonical keywords from a job posting (JSON)."""
    start_session("keywords", Job=job)

    try:
        keywords = AtsService().extract_keywords(read_document_text(job))
    except InvalidInputError as e:
        fail(e)

    echo_json(keywords)


@app.command("compare")
def compare_command(
    original: Annotated[Path, typer.Argument(help="Original résumé file")],
    optimized: Annotated[Path, typer.Argument(help="Optimized résumé file")],
    job: Annotated[Path, typer.Argument(help="Job posting file")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the full comparison as JSON")] = False,
):
    """Compare two résumé versions against the same job posting."""
    start_session("compare", Original=original, Optimized=optimized, Job=job)

    try:
        comparison = AtsService().compare_versions(
            read_document_text(original), read_document_text(optimized), read_document_text(job)
        )
    except InvalidInputError as e:
        fail(e)

    if as_json:
        echo_json(comparison.to_dict())
        return

    improvements = comparison.improvements
    typer.secho(
        f"\nScore: {comparison.original.ats_score} -> {comparison.optimized.ats_score} "
        f"({improvements.ats_score_improvement:+d})",
        fg=typer.colors.BLUE,
        bold=True,
    )
    typer.echo(f"Keyword match: {improvements.keyword_match_improvement:+d} points")
    typer.echo(f"Added: {', '.join(improvements.new_keywords_added) or '-'}")
    typer.echo(f"Removed: {', '.join(improvements.keywords_removed) or '-'}")


@app.command("improve")
def improve_command(
    document: Annotated[Path, typer.Argument(help="Original résumé (.pdf, .docx or .txt)")],
    optimized_text: Annotated[Path, typer.Argument(help="Optimized résumé text, line-aligned")],
    output: Annotated[Path, typer.Option("--output", "-o", help="Where to write the patched document")],
    max_words: Annotated[
        int, typer.Option("--max-words", help="Max words a line may grow by", min=0)
    ] = 3,
    no_shrink: Annotated[
        bool, typer.Option("--no-shrink", help="Skip PDF lines that don't fit instead of shrinking the font")
    ] = False,
):
    """
    Apply optimized text to the original document without changing its layout.

    Examples:\n

        $ ats.py improve resume.pdf optimized.txt -o improved.pdf
    """
    start_session("improve", Document=document, Text=optimized_text)

    try:
        result = AtsService().improve_in_place(
            document.read_bytes(),
            optimized_text.read_text(encoding="utf-8"),
            filename=document.name,
            max_words_added_per_line=max_words,
            allow_shrink_font=not no_shrink,
        )
    except (InvalidInputError, UnsupportedFormatError) as e:
        fail(e)

    output.write_bytes(result.new_bytes)
    typer.secho(f"\n{len(result.changes)} lines rewritten in place", fg=typer.colors.GREEN, bold=True)
    for change in result.changes:
        where = f"p{change.page} " if change.page is not None else ""
        typer.echo(f"  {where}#{change.index}: {change.improved}")
    typer.echo(f"Written to {output}")


if __name__ == "__main__":
    app()
