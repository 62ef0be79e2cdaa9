"""CLI entry point for the opmodels package."""

import typer

app = typer.Typer(
    name="opmodels",
    help="Resolve and use per-operation models for the llm CLI",
    add_completion=False,
)

from opmodels.commands.models import models as models_command
from opmodels.commands.resolve import resolve as resolve_command
from opmodels.commands.run import run as run_command

app.command(name="resolve")(resolve_command)
app.command(name="models")(models_command)
app.command(name="run")(run_command)

def main():
    """Entry point for the opmodels CLI."""
    app()

if __name__ == "__main__":
    main()
