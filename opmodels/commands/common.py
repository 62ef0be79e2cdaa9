"""Option plumbing shared by the CLI commands."""

from pathlib import Path
from typing import NoReturn, Optional, Tuple

import typer

from ..engine.catalog import Catalog, load_catalog
from ..engine.config import load_snapshot
from ..engine.errors import CatalogUnavailable, ConfigError, OpmodelsError
from ..engine.selection import ConfigSnapshot

# Exit codes: configuration mistakes vs. failures outside the user's config.
EXIT_CONFIG = 10
EXIT_EXTERNAL = 20

def fail(command: str, error: OpmodelsError, code: int) -> NoReturn:
    typer.echo(f"[{command}] {error}", err=True)
    raise typer.Exit(code)

def load_inputs(
    command: str,
    config: Optional[Path],
    local_config: Optional[Path],
    catalog_path: Optional[Path],
) -> Tuple[ConfigSnapshot, Catalog]:
    """Load the config snapshot and catalog, exiting with a message on error."""
    try:
        snapshot = load_snapshot(config, local_config)
    except ConfigError as e:
        fail(command, e, EXIT_CONFIG)
    return snapshot, load_catalog_or_exit(command, catalog_path)

def load_catalog_or_exit(command: str, catalog_path: Optional[Path]) -> Catalog:
    try:
        return load_catalog(catalog_path)
    except CatalogUnavailable as e:
        fail(command, e, EXIT_EXTERNAL)
