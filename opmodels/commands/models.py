"""List the providers and models in the catalog."""

from pathlib import Path
from typing import Optional

import typer

from ..engine.errors import UnknownProvider
from .common import EXIT_CONFIG, fail, load_catalog_or_exit

def models(
    provider: Optional[str] = typer.Argument(None, help="Only list this provider's models"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="YAML/JSON catalog instead of llm's registry"),
) -> None:
    """List known models as provider/model identifiers."""
    catalog = load_catalog_or_exit("models", catalog_path)
    if provider is not None and not catalog.has_provider(provider):
        fail("models", UnknownProvider(provider, catalog.providers()), EXIT_CONFIG)

    providers = [provider] if provider is not None else catalog.providers()
    for name in providers:
        for model_name in catalog.models(name):
            typer.echo(f"{name}/{model_name}")
