"""CLI commands for ranking a record file."""

import json
import sys
import uuid
from pathlib import Path

import click
import structlog

from src.data_model.errors import RankerError
from src.observability.logging import (
    bind_run_context,
    configure_logging_from_settings,
)
from src.ranker import RankingEngine, RankScope
from src.records.loader import load_store
from src.settings import get_settings
from src.signals.weights import (
    ConfigValidationError,
    SignalWeights,
    load_signal_weights,
)


logger = structlog.get_logger()

_SCOPE_CHOICE = click.Choice([scope.value for scope in RankScope])


def _build_engine(records_path: Path, weights_path: Path | None) -> RankingEngine:
    """Load records and weights and construct an engine.

    Args:
        records_path: Path to the record file.
        weights_path: Optional weights YAML; falls back to settings.

    Returns:
        Ranking engine over the loaded records.
    """
    settings = get_settings()
    configure_logging_from_settings(settings)
    bind_run_context(str(uuid.uuid4()))

    weights_path = weights_path or settings.weights_path
    weights: SignalWeights | None = None
    if weights_path is not None:
        try:
            weights = load_signal_weights(weights_path)
        except ConfigValidationError as e:
            click.echo(f"Invalid weights file {e.file_path}:", err=True)
            for error in e.errors:
                click.echo(f"  - {error['loc']}: {error['msg']}", err=True)
            sys.exit(1)

    try:
        store = load_store(records_path)
    except RankerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    return RankingEngine(store, weights=weights)


_records_option = click.option(
    "--records",
    "records_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML or JSON record file.",
)
_weights_option = click.option(
    "--weights",
    "weights_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a signal weights YAML file.",
)
_scope_option = click.option(
    "--scope",
    default=RankScope.GLOBAL.value,
    type=_SCOPE_CHOICE,
    help="Ranking scope (default: global).",
)


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Multi-signal entity ranking CLI."""


@cli.command()
@_records_option
@_weights_option
@_scope_option
@click.option("--limit", default=20, type=int, help="Number of entities to list.")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
def top(
    records_path: Path,
    weights_path: Path | None,
    scope: str,
    limit: int,
    json_output: bool,
) -> None:
    """List the best-ranked entities of a scope."""
    engine = _build_engine(records_path, weights_path)
    try:
        entity_ids = engine.top(scope, limit)
        explanations = [engine.rank_explanation(eid, scope) for eid in entity_ids]
    except RankerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(
            json.dumps([exp.model_dump(mode="json") for exp in explanations], indent=2)
        )
        return

    for explanation in explanations:
        click.echo(
            f"#{explanation.index + 1:<5} {explanation.entity_id:<30} "
            f"{explanation.to_debug_string()}"
        )


@cli.command()
@_records_option
@_weights_option
@_scope_option
@click.argument("entity_id")
def explain(
    records_path: Path,
    weights_path: Path | None,
    scope: str,
    entity_id: str,
) -> None:
    """Explain how ENTITY_ID was ranked."""
    engine = _build_engine(records_path, weights_path)
    try:
        explanation = engine.rank_explanation(entity_id, scope)
        signals = engine.signals(entity_id)
        percentile = engine.percentile(entity_id)
    except RankerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{entity_id} is #{explanation.index + 1} in scope '{scope}'")
    click.echo(f"  {explanation.to_debug_string()}")
    click.echo(f"  Percentile (global): {percentile:.3f}")
    click.echo("Signals:")
    for name, value in signals.to_dict().items():
        if name != "entity_id":
            click.echo(f"  {name}: {value}")


@cli.command()
@_records_option
@_weights_option
@click.argument("entity_id")
def neighbors(records_path: Path, weights_path: Path | None, entity_id: str) -> None:
    """Show the entities ranked just above and below ENTITY_ID."""
    engine = _build_engine(records_path, weights_path)
    try:
        scope = engine.navigation_scope(entity_id)
        previous_id = engine.previous_ranked(entity_id)
        next_id = engine.next_ranked(entity_id)
    except RankerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Scope: {scope.value}")
    click.echo(f"  previous: {previous_id}")
    click.echo(f"  next: {next_id}")


@cli.command()
@_records_option
@_weights_option
def validate(records_path: Path, weights_path: Path | None) -> None:
    """Check that a record file can be ranked (no broken references)."""
    engine = _build_engine(records_path, weights_path)
    try:
        snapshot = engine.snapshot
    except RankerError as e:
        logger.error("validation_failed", **e.to_dict())
        click.echo(f"Validation failed: {e}", err=True)
        sys.exit(1)

    click.echo("Records are valid!")
    click.echo(f"  Entities: {snapshot.entity_count}")
    click.echo(f"  Languages: {len(snapshot.index(RankScope.LANGUAGE))}")
    click.echo(f"  Checksum: {snapshot.index(RankScope.GLOBAL).checksum}")


if __name__ == "__main__":
    cli()
