"""Run a prompt for an operation using its configured model."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml

from ..engine.context import DEFAULT_MODEL, InvocationContext
from ..engine.errors import ResolutionError
from ..engine.llm_runner import llm_model_id, run_llm
from ..engine.logging import log_step, setup_logging
from ..engine.operations import prepare_context
from .common import EXIT_CONFIG, EXIT_EXTERNAL, fail, load_inputs

def parse_options(pairs: List[str]) -> Dict[str, Any]:
    """Parse ``key=value`` pairs; values are read as YAML scalars."""
    options = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--option")
        try:
            options[key] = yaml.safe_load(value) if value else ""
        except yaml.YAMLError as e:
            raise typer.BadParameter(
                f"Cannot parse value for '{key}': {e}", param_hint="--option"
            ) from e
    return options

def run(
    operation: str = typer.Argument(..., help="Operation name, e.g. commit"),
    prompt: Optional[str] = typer.Option(None, "--prompt", "-p", help="Prompt to send (or read from stdin)"),
    system: Optional[str] = typer.Option(None, "--system", "-s", help="System prompt to use"),
    option: List[str] = typer.Option([], "--option", "-o", help="Model option as key=value (repeatable)"),
    default_model: Optional[str] = typer.Option(
        DEFAULT_MODEL, "--default-model", help="llm model id to use when no model is configured"
    ),
    stream: bool = typer.Option(True, "--stream/--no-stream", help="Stream output"),
    config: Optional[Path] = typer.Option(None, "--config", help="Global config file"),
    local_config: Optional[Path] = typer.Option(None, "--local-config", help="Project-local config file"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="YAML/JSON catalog instead of llm's registry"),
    log_file: Optional[Path] = typer.Option(None, "--log", help="Write JSONL execution log"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Resolve the model for OPERATION and run the prompt with it.

    A resolution error aborts before any model is called (exit 10).
    OPMODELS_MODEL=provider/model overrides the global model.
    --default-model takes a bare llm model id.
    """
    setup_logging(log_file, verbose)
    if not prompt:
        if not sys.stdin.isatty():
            prompt = sys.stdin.read().strip()
        if not prompt:
            raise typer.BadParameter("Prompt is required (use --prompt or pipe to stdin)")

    base = InvocationContext(
        default_model=default_model or None,
        system=system,
        stream=stream,
        options=parse_options(option),
    )
    snapshot, catalog = load_inputs("run", config, local_config, catalog_path)
    try:
        context = prepare_context(snapshot, operation, catalog, base, log_file)
    except ResolutionError as e:
        fail("run", e, EXIT_CONFIG)

    if verbose:
        typer.echo(f"[run] {operation}: using {llm_model_id(context) or 'llm default'}", err=True)
    try:
        result = run_llm(prompt, context)
    except Exception as e:
        typer.echo(f"[run] LLM error: {e}", err=True)
        raise typer.Exit(EXIT_EXTERNAL)
    log_step("invoke", {"operation": operation, "model": llm_model_id(context), "result": result}, log_file)

    if not stream:
        typer.echo(result)
