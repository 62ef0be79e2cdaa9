"""Show which model each operation resolves to."""

import json
from pathlib import Path
from typing import List, Optional

import typer

from ..engine.logging import setup_logging
from ..engine.models import Failed, Resolved
from ..engine.operations import describe_outcome, resolve_operations
from .common import EXIT_CONFIG, load_inputs

def resolve(
    operations: List[str] = typer.Argument(..., help="Operations to resolve, e.g. commit branch"),
    config: Optional[Path] = typer.Option(None, "--config", help="Global config file"),
    local_config: Optional[Path] = typer.Option(None, "--local-config", help="Project-local config file"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="YAML/JSON catalog instead of llm's registry"),
    as_json: bool = typer.Option(False, "--json", help="Print outcomes as JSON"),
    log_file: Optional[Path] = typer.Option(None, "--log", help="Write JSONL execution log"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Resolve the configured model for each operation.

    Operations are resolved independently: one bad override is reported
    and the rest still resolve. Exits with 10 if any operation failed.

    The global model can be overridden with OPMODELS_MODEL=provider/model.
    """
    setup_logging(log_file, verbose)
    snapshot, catalog = load_inputs("resolve", config, local_config, catalog_path)
    outcomes = resolve_operations(snapshot, operations, catalog, log_file)

    if as_json:
        typer.echo(json.dumps(
            {name: describe_outcome(outcome) for name, outcome in outcomes.items()},
            indent=2,
        ))
    else:
        for name, outcome in outcomes.items():
            if isinstance(outcome, Resolved):
                typer.echo(f"{name}: {outcome.descriptor.identifier}")
            elif isinstance(outcome, Failed):
                typer.echo(f"{name}: error")
                typer.echo(f"[resolve] {name}: {outcome.error}", err=True)
            else:
                typer.echo(f"{name}: (unset, using invoker default)")

    if any(isinstance(outcome, Failed) for outcome in outcomes.values()):
        raise typer.Exit(EXIT_CONFIG)
