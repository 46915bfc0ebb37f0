"""Command-line interface for citefuse.

Provides CLI commands for fusing and scoring candidate citation metadata.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("citefuse")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"


@click.group()
@click.version_option(version=__version__, prog_name="citefuse")
def cli() -> None:
    """Fuse citation metadata produced by several parsers into one record.

    Use 'citefuse COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="out",
    help="Output directory for results (default: out)",
)
@click.option(
    "--threshold",
    type=click.IntRange(0, 100),
    default=0,
    help="Ignore candidates scoring below this (default: 0 = keep all)",
)
@click.option(
    "--no-guess",
    is_flag=True,
    help="Do not guess missing publication types",
)
@click.option(
    "--no-audit",
    is_flag=True,
    help="Do not write events.jsonl and run.json",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def fuse(
    input_path: str,
    output_dir: str,
    threshold: int,
    no_guess: bool,
    no_audit: bool,
    verbose: bool,
) -> None:
    """Fuse every candidate set in INPUT_PATH.

    INPUT_PATH is a JSON file (one candidate set or a list of them) or a
    JSONL file with one candidate set per line.

    Examples
    --------
        citefuse fuse candidates.jsonl
        citefuse fuse candidates.json -o results --threshold 50
    """
    from citefuse.audit import RunContext
    from citefuse.engine import BatchConfig, run_batch
    from citefuse.fusion import FusionConfig

    input_path_obj = Path(input_path)
    config = BatchConfig(
        fusion=FusionConfig(score_threshold=threshold, guess_publication_type=not no_guess),
        output_dir=Path(output_dir),
    )

    if verbose:
        click.echo(f"Fusing: {input_path}", err=True)
        click.echo(f"  Output: {output_dir}", err=True)
        click.echo(f"  Threshold: {threshold}", err=True)

    run = None if no_audit else RunContext.start(config.output_dir, parameters=config.to_dict())

    try:
        if run:
            run.start_stage("fuse")

        result = run_batch(
            input_path_obj,
            config=config,
            logger=run.audit_logger if run else None,
        )

        if run:
            run.finish_stage("fuse", counters=_stage_counters(result.summary.to_dict()))
            if result.success:
                run.add_input(input_path_obj, candidate_sets=result.summary.citations_in)
                for path in result.output_files.values():
                    run.add_artifact(Path(path))
            run.finish(
                status="success" if result.success else "failed",
                citations_processed=result.summary.citations_in,
            )
            run = None

        if not result.success:
            click.secho(f"✗ Fusion failed: {result.error_message}", fg="red", err=True)
            sys.exit(1)

        summary = result.summary
        if verbose:
            for name, path in result.output_files.items():
                click.echo(f"  {name}: {path}", err=True)
        click.secho(
            f"✓ Fused {summary.citations_fused} of {summary.citations_in} citations "
            f"({summary.citations_failed} failed, mean score {summary.mean_parse_score:.2f})",
            fg="green",
        )

    except Exception as e:
        if run:
            run.record_error(e, include_traceback=verbose)
            run.finish(status="failed")
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)


def _stage_counters(summary: dict) -> dict[str, int]:
    return {k: v for k, v in summary.items() if isinstance(v, int) and not isinstance(v, bool)}


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
def score(input_path: str) -> None:
    """Score every candidate in INPUT_PATH without fusing.

    Prints one line per live candidate: citation id, candidate position,
    source, parse score and publication type (guessed types are marked
    with "*").

    Examples
    --------
        citefuse score candidates.jsonl
    """
    from citefuse.fusion import FusionError, score_candidates
    from citefuse.parse import CandidateFileError, load_candidate_sets

    try:
        candidate_sets = load_candidate_sets(input_path)
    except CandidateFileError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    for candidate_set in candidate_sets:
        try:
            scored = score_candidates(candidate_set.candidates)
        except FusionError as e:
            click.echo(f"{candidate_set.citation_id}\t-\t-\t-\t{e}")
            continue
        for candidate in scored:
            publication_type = candidate.description.publication_type
            type_label = str(publication_type) if publication_type else "-"
            if candidate.type_guessed:
                type_label += "*"
            click.echo(
                f"{candidate_set.citation_id}\t{candidate.index}\t"
                f"{candidate.description.source or '-'}\t{candidate.score}\t{type_label}"
            )


if __name__ == "__main__":
    cli()
