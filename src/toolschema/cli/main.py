"""Root command for the ``toolschema`` console script."""

from __future__ import annotations

import typer

from toolschema.cli import tools

app = typer.Typer(help="Generate function-calling schemas for agent tools.")
app.add_typer(tools.app, name="tools")
