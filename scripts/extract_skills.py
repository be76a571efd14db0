#!/usr/bin/env python3
"""
Run the skill extraction pipeline on a job description file.

Usage:
    python scripts/extract_skills.py jobs/GrowthAnalyst_Acme.md
    python scripts/extract_skills.py jobs/GrowthAnalyst_Acme.md --json
    python scripts/extract_skills.py jobs/GrowthAnalyst_Acme.md --debug --dictionaries my_dicts/
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from skillsift.contexts.dictionaries import (
    DictionaryLoadError,
    load_dictionaries,
    load_extraction_config,
)
from skillsift.contexts.extraction import FuzzyMatchers, extract_skills
from skillsift.contexts.extraction.logger import setup_extraction_logger
from skillsift.contexts.normalization import get_confidence_label

load_dotenv()

app = typer.Typer(help="Extract required and desired skills from a job description.")


def _echo_records(title: str, records) -> None:
    typer.echo(f"\n=== {title} ({len(records)}) ===")
    if not records:
        typer.echo("  None")
    for record in records:
        label = get_confidence_label(record.confidence)
        typer.echo(
            f"  {record.name} [{record.canonical}] "
            f"{record.confidence:.2f} {label} ({record.match_type.value})"
        )


@app.command()
def main(
    job_file: Annotated[Path, typer.Argument(help="Job description text or markdown file")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
    debug: Annotated[
        bool, typer.Option("--debug", help="Show candidates, rejections and stage counts")
    ] = False,
    dictionaries_dir: Annotated[
        Optional[Path],
        typer.Option("--dictionaries", help="Dictionaries directory (default: bundled)"),
    ] = None,
    log_dir: Annotated[
        Optional[Path], typer.Option("--log-dir", help="Directory for extract.log")
    ] = None,
):
    """Extract skills and tools from JOB_FILE."""
    if not job_file.exists():
        typer.echo(f"ERROR: Job file not found: {job_file}", err=True)
        raise typer.Exit(1)

    setup_extraction_logger(
        log_dir, source="extract_skills", console_level="DEBUG" if debug else "WARNING"
    )

    try:
        dictionaries = load_dictionaries(dictionaries_dir)
        config = load_extraction_config()
    except DictionaryLoadError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    text = job_file.read_text(encoding="utf-8")
    result = extract_skills(text, dictionaries, config, FuzzyMatchers.build(dictionaries))

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    typer.echo(f"Job file: {job_file}")
    _echo_records("Required skills", result.required_skills)
    _echo_records("Required tools", result.required_tools)
    _echo_records("Desired skills", result.desired_skills)
    _echo_records("Desired tools", result.desired_tools)

    if debug:
        typer.echo(f"\n=== Candidates ({len(result.candidates)}) ===")
        for item in result.candidates:
            inferred = item.inferred_type.value if item.inferred_type else "-"
            typer.echo(f"  {item.raw} ({inferred}, {item.confidence:.2f}): {item.evidence}")

        typer.echo(f"\n=== Rejected ({len(result.rejected)}) ===")
        for item in result.rejected:
            typer.echo(f"  {item.raw}: {item.evidence}")

        typer.echo("\n=== Stage counts ===")
        for stage, count in result.debug.to_dict().items():
            typer.echo(f"  {stage}: {count}")

    typer.echo(
        f"\nConfidence: {result.confidence:.2f} "
        f"({len(result.required)} required, {len(result.desired)} desired, "
        f"{result.execution_time_ms:.1f}ms)"
    )

    if result.is_empty:
        typer.secho("\n! No skills found", fg=typer.colors.YELLOW)
    else:
        typer.secho("\n✓ Extraction complete", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
