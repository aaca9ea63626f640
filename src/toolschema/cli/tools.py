"""CLI entry points for inspecting and running configured tools."""

from __future__ import annotations

import json

from typing import TYPE_CHECKING

import typer

from toolschema.container import build_container
from toolschema.errors import ToolSchemaError
from toolschema.tools.registry import validate_tools

if TYPE_CHECKING:
    from toolschema.container import Container

app = typer.Typer(help="Inspect tool schemas and run configured tools.")


def _load_container() -> Container:
    """Build the container, turning configuration errors into a CLI exit."""
    try:
        return build_container()
    except ToolSchemaError as exc:
        typer.echo(f"Invalid tool configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("list")
def list_tools() -> None:
    """Print the descriptor of every configured tool."""
    container = _load_container()
    payload = [tool.descriptor().model_dump(mode="json") for tool in container.tools.all()]
    typer.echo(json.dumps(payload, indent=2))


@app.command("openai-spec")
def openai_spec(
    tool_name: str | None = typer.Option(
        None,
        "--tool",
        "-t",
        help="Limit the output to a single tool.",
    ),
) -> None:
    """Print the OpenAI function schemas for the configured tools."""
    container = _load_container()
    try:
        tools = [container.tools.get(tool_name)] if tool_name is not None else container.tools.all()
    except KeyError as exc:
        typer.echo(f"Unknown tool: {tool_name}", err=True)
        raise typer.Exit(code=1) from exc

    policy = container.settings.doc_miss_policy
    try:
        spec = [schema.to_openai() for tool in tools for schema in tool.to_call_schemas(on_missing=policy)]
    except ToolSchemaError as exc:
        typer.echo(f"Schema generation failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(spec, indent=2))


@app.command()
def validate() -> None:
    """Check that the configured tool names are unique."""
    container = _load_container()
    try:
        validate_tools(container.tools.all())
    except ToolSchemaError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"{len(container.tools)} tool(s) OK")


@app.command()
def run(
    tool_name: str = typer.Option(..., "--tool", "-t", help="Tool to execute."),
    input_text: str = typer.Option(..., "--input", "-i", help="Input passed to the tool."),
) -> None:
    """Execute a configured tool with a text input."""
    container = _load_container()
    try:
        tool = container.tools.get(tool_name)
    except KeyError as exc:
        typer.echo(f"Unknown tool: {tool_name}", err=True)
        raise typer.Exit(code=1) from exc

    try:
        answer = tool.execute(input=input_text)
    except Exception as exc:  # noqa: BLE001 - tool failures are reported, not raised
        typer.echo(f"Tool execution failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(answer)
