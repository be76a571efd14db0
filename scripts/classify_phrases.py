#!/usr/bin/env python3
"""
Classify (and optionally normalize) individual skill phrases.

Useful for checking why a phrase was kept or rejected.

Usage:
    python scripts/classify_phrases.py HubSpot "lifecycle marketing" "communication skills"
    python scripts/classify_phrases.py GA4 "google analytics" --normalize
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from skillsift.contexts.classification import SkillType, classify_skill_phrase
from skillsift.contexts.dictionaries import DictionaryLoadError, load_dictionaries
from skillsift.contexts.extraction import FuzzyMatchers
from skillsift.contexts.normalization import SkillNormalizer, get_confidence_label

load_dotenv()

app = typer.Typer(help="Classify skill phrases and show the deciding layer.")


@app.command()
def main(
    phrases: Annotated[list[str], typer.Argument(help="Phrases to classify")],
    normalize: Annotated[
        bool, typer.Option("--normalize", help="Also normalize CORE_SKILL and TOOL phrases")
    ] = False,
    dictionaries_dir: Annotated[
        Optional[Path],
        typer.Option("--dictionaries", help="Dictionaries directory (default: bundled)"),
    ] = None,
):
    """Print type, confidence, layer and evidence for each phrase."""
    try:
        dictionaries = load_dictionaries(dictionaries_dir)
    except DictionaryLoadError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    normalizers = {}
    if normalize:
        matchers = FuzzyMatchers.build(dictionaries)
        normalizers = {
            SkillType.CORE_SKILL: SkillNormalizer(
                dictionaries.skills_taxonomy, dictionaries, matchers.skills
            ),
            SkillType.TOOL: SkillNormalizer(
                dictionaries.tools_dictionary, dictionaries, matchers.tools
            ),
        }

    for phrase in phrases:
        result = classify_skill_phrase(phrase, dictionaries)
        color = typer.colors.RED if result.skill_type is SkillType.REJECTED else typer.colors.GREEN
        typer.secho(f"\n{phrase}", bold=True)
        typer.secho(f"  type: {result.skill_type.value}", fg=color)
        typer.echo(f"  canonical: {result.canonical}")
        typer.echo(f"  confidence: {result.confidence:.2f}")
        typer.echo(f"  layer: {result.source_location.value}")
        typer.echo(f"  evidence: {result.evidence}")
        if result.inferred_type is not None:
            typer.echo(f"  inferred type: {result.inferred_type.value}")

        normalizer = normalizers.get(result.skill_type)
        if normalizer is not None:
            normalized = normalizer.normalize(phrase)
            typer.echo(
                f"  normalized: {normalized.normalized} [{normalized.canonical}] "
                f"{normalized.confidence:.2f} {get_confidence_label(normalized.confidence)} "
                f"({normalized.match_type.value})"
            )


if __name__ == "__main__":
    app()
