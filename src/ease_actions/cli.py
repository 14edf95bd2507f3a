"""CLI tool for inspecting and exercising the Ease action engine."""

import json
from pathlib import Path
from typing import Optional

import typer
from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from typing_extensions import Annotated

from ease_actions.chat.companion import CompanionChat
from ease_actions.chat.gemini_client import GeminiChatClient
from ease_actions.chat.pipeline import ProcessedResponse, ResponsePipeline
from ease_actions.chat.prompt import build_system_prompt
from ease_actions.config import EaseSettings
from ease_actions.execution.context import ExecutionContext
from ease_actions.observability.logging import setup_logging
from ease_actions.persistence.in_memory import InMemoryWellnessStore
from ease_actions.registry.wellness_actions import build_default_registry


app = typer.Typer(help="Ease action engine CLI")


@app.callback()
def main(
    log_level: Annotated[
        Optional[str], typer.Option(help="Log level (defaults to LOG_LEVEL)")
    ] = None,
):
    setup_logging(log_level)


def _local_context(store: InMemoryWellnessStore) -> ExecutionContext:
    def navigate(section: str) -> None:
        typer.echo(f"[navigate] {section}", err=True)

    return ExecutionContext(navigate=navigate, **store.hooks())


def _echo_response(response: ProcessedResponse, as_json: bool) -> None:
    if as_json:
        typer.echo(
            json.dumps(
                {
                    "display_text": response.display_text,
                    "results": [r.model_dump(mode="json") for r in response.results],
                },
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        typer.echo(response.display_text)


@app.command("actions")
def list_actions():
    """Lists the registered actions."""
    typer.echo(build_default_registry().describe_for_prompt())


@app.command("prompt")
def show_prompt():
    """Prints the system prompt sent to the model."""
    typer.echo(build_system_prompt(build_default_registry()))


@app.command("process")
def process(
    text: Annotated[
        Optional[str], typer.Argument(help="AI reply text to process")
    ] = None,
    file: Annotated[
        Optional[Path], typer.Option(help="Read the reply text from a file")
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print structured results")
    ] = False,
):
    """Runs a reply through extraction, dispatch and formatting."""
    if file is not None:
        if not file.exists():
            typer.echo(f"Error: File not found: {file}", err=True)
            raise typer.Exit(code=1)
        text = file.read_text(encoding="utf-8")
    if text is None:
        typer.echo("Error: provide TEXT or --file", err=True)
        raise typer.Exit(code=1)

    pipeline = ResponsePipeline(build_default_registry())
    response = pipeline.process(text, _local_context(InMemoryWellnessStore()))
    _echo_response(response, as_json)


@app.command("schemas")
def export_schemas(
    output: Annotated[
        Optional[Path], typer.Option(help="Write the schemas to this file")
    ] = None,
):
    """Exports the JSON schema of every action's parameters."""
    schemas = {}
    for schema in build_default_registry().list_schemas():
        doc = schema.to_json_schema()
        try:
            Draft202012Validator.check_schema(doc)
        except SchemaError as e:
            typer.echo(f"Invalid schema for {schema.name}: {e.message}", err=True)
            raise typer.Exit(code=1)
        schemas[schema.name] = doc

    rendered = json.dumps(schemas, indent=2)
    if output is None:
        typer.echo(rendered)
        return
    output.write_text(rendered, encoding="utf-8")
    typer.echo(f"Wrote {len(schemas)} schemas to {output}")


@app.command("chat")
def chat(
    message: Annotated[str, typer.Argument(help="Message to send to Sage")],
    as_json: Annotated[
        bool, typer.Option("--json", help="Print structured results")
    ] = False,
):
    """Sends one message to Sage and applies the actions in the reply."""
    settings = EaseSettings.from_env()
    if not settings.google_api_key:
        typer.echo("Error: GOOGLE_API_KEY is not set", err=True)
        raise typer.Exit(code=1)

    registry = build_default_registry()
    companion = CompanionChat(
        GeminiChatClient(registry, settings), ResponsePipeline(registry)
    )
    response = companion.respond(
        message, [], _local_context(InMemoryWellnessStore())
    )
    _echo_response(response, as_json)


if __name__ == "__main__":
    app()
