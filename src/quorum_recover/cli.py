"""Command line interface: ``quorum-recover [OPTIONS] [INPUT]``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TextIO

import click

from .audit import AuditTrail
from .consensus import combination_count, consensus
from .decoding import load_document
from .errors import QuorumError, ShareDecodingError
from .models import render_json, render_yaml
from .policy import load_policy

_logger = logging.getLogger(__name__)


def _detect_format(source: TextIO, requested: Optional[str]) -> str:
    if requested:
        return requested
    suffix = Path(getattr(source, "name", "") or "").suffix.lower()
    return "yaml" if suffix in (".yaml", ".yml") else "json"


def _read_source(source: TextIO) -> str:
    try:
        return source.read()
    except UnicodeDecodeError as exc:
        raise ShareDecodingError("input is not valid UTF-8") from exc


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--input-format",
    type=click.Choice(["json", "yaml"]),
    default=None,
    help="Share document format (default: guessed from the file name, else json).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    show_default=True,
    help="Result output format.",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Worker processes for the search.")
@click.option(
    "--max-combinations",
    type=click.IntRange(min=0),
    default=None,
    help="Refuse searches larger than this many combinations (0 disables the limit).",
)
@click.option(
    "--audit-dir",
    type=click.Path(file_okay=False, writable=True),
    default=None,
    help="Write a signed audit entry for this run into DIR.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(
    source: TextIO,
    input_format: Optional[str],
    output_format: str,
    workers: Optional[int],
    max_combinations: Optional[int],
    audit_dir: Optional[str],
    verbose: bool,
) -> None:
    """Recover a secret from SOURCE shares, detecting corrupted ones.

    SOURCE is a JSON (or YAML) share document; ``-`` reads standard input.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_policy()
    workers = workers if workers is not None else settings.workers
    limit = max_combinations if max_combinations is not None else settings.max_combinations
    audit_path = audit_dir or settings.audit_dir
    trail = AuditTrail(audit_path) if audit_path else None

    try:
        share_set = load_document(_read_source(source), fmt=_detect_format(source, input_format))
        result = consensus(share_set.shares, share_set.k, workers=workers, max_combinations=limit)
    except QuorumError as exc:
        _logger.debug("reconstruction failed", exc_info=True)
        if trail is not None:
            trail.record_event(
                "consensus.failed",
                details={"error": type(exc).__name__, "message": str(exc)},
            )
        raise click.ClickException(str(exc)) from exc

    if trail is not None:
        trail.record_event(
            "consensus.solved",
            details={
                "n": share_set.n,
                "k": share_set.k,
                "combinations": combination_count(share_set.n, share_set.k),
                "inliers": list(result.inliers),
                "outliers": list(result.outliers),
            },
        )
    click.echo(render_yaml(result) if output_format == "yaml" else render_json(result), nl=output_format != "yaml")


if __name__ == "__main__":
    main()
