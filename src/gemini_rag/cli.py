#!/usr/bin/env python3
"""
CLI for the Gemini File Search knowledge base.

This module provides the gemini-rag command-line interface. Each command runs
one action against the configured store and prints its structured result as
JSON on stdout; logs go to stderr.

Usage:
    gemini-rag ensure-store
    gemini-rag list-stores --page-size 50
    gemini-rag upload-file docs/guide.md --metadata '{"team": "infra"}'
    gemini-rag upload-content "hello world" --display-name greeting.txt
    gemini-rag query "How do I rotate credentials?"
    gemini-rag --store team-docs --config settings.yaml query "..."
    gemini-rag --version
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from gemini_rag import __version__
from gemini_rag.actions import RagContext, build_actions_registry
from gemini_rag.exceptions import ConfigurationError
from gemini_rag.settings import RagSettings, load_settings

app = typer.Typer(
    name="gemini-rag",
    help="Knowledge base backed by Gemini File Search",
    no_args_is_help=True,
    add_completion=False,
)


def parse_metadata(value: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse metadata from a JSON object string or @file.json.

    Raises:
        typer.Exit: On parse error
    """
    if value is None:
        return None

    if value.startswith("@"):
        path = Path(value[1:])
        if not path.exists():
            typer.echo(f"Error: Metadata file not found: {path}", err=True)
            raise typer.Exit(1)
        text = path.read_text()
    else:
        text = value

    try:
        result = json.loads(text)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Invalid JSON in --metadata: {e}", err=True)
        raise typer.Exit(1)
    if not isinstance(result, dict):
        typer.echo(f"Error: Metadata must be a JSON object, got {type(result).__name__}", err=True)
        raise typer.Exit(1)
    return result


def setup_logging(verbose: int, quiet: bool, default_level: int = logging.INFO):
    """Configure logging based on verbosity flags, falling back to the configured level."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = default_level

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def create_context(settings: RagSettings) -> RagContext:
    return RagContext.from_settings(settings)


def run_action(ctx: typer.Context, name: str, **kwargs: Any) -> None:
    """Run one action, print its result as JSON and exit 1 on failure."""
    settings: RagSettings = ctx.obj["settings"]
    try:
        context = create_context(settings)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    registry = build_actions_registry(context)
    result = asyncio.run(registry[name](**kwargs))
    typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
    if not result.get("success"):
        raise typer.Exit(1)


@app.command("ensure-store")
def ensure_store(ctx: typer.Context):
    """Find the configured store or create it."""
    run_action(ctx, "ensure_store")


@app.command("list-stores")
def list_stores(
    ctx: typer.Context,
    page_size: Optional[int] = typer.Option(None, "--page-size", help="Stores per page (1-100)"),
):
    """List stores visible to the API key (first page)."""
    run_action(ctx, "list_stores", page_size=page_size)


@app.command("upload-file")
def upload_file(
    ctx: typer.Context,
    file_path: str = typer.Argument(..., help="Local path or fsspec URI (s3://, gs://, ...)"),
    mime_type: Optional[str] = typer.Option(None, "--mime-type", help="MIME type (detected from extension if omitted)"),
    display_name: Optional[str] = typer.Option(None, "--display-name", help="Display name (file name if omitted)"),
    metadata: Optional[str] = typer.Option(None, "--metadata", "-m", help="Metadata JSON object or @file.json"),
):
    """Upload a file to the configured store."""
    run_action(
        ctx,
        "upload_file",
        file_path=file_path,
        mime_type=mime_type,
        display_name=display_name,
        metadata=parse_metadata(metadata),
    )


@app.command("upload-content")
def upload_content(
    ctx: typer.Context,
    content: Optional[str] = typer.Argument(None, help="Text to upload"),
    display_name: str = typer.Option(..., "--display-name", help="Display name for the content"),
    from_file: Optional[Path] = typer.Option(None, "--from-file", help="Read the text from a local file"),
    metadata: Optional[str] = typer.Option(None, "--metadata", "-m", help="Metadata JSON object or @file.json"),
):
    """Upload text content to the configured store."""
    if from_file is not None:
        if content is not None:
            typer.echo("Error: Pass either CONTENT or --from-file, not both", err=True)
            raise typer.Exit(1)
        if not from_file.exists():
            typer.echo(f"Error: File not found: {from_file}", err=True)
            raise typer.Exit(1)
        content = from_file.read_text(encoding="utf-8")
    if content is None:
        typer.echo("Error: CONTENT or --from-file is required", err=True)
        raise typer.Exit(1)

    run_action(
        ctx,
        "upload_content",
        content=content,
        display_name=display_name,
        metadata=parse_metadata(metadata),
    )


@app.command("query")
def query(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Question to answer from the store"),
    model: Optional[str] = typer.Option(None, "--model", help="Model override"),
):
    """Query the configured store and print the answer with citations."""
    run_action(ctx, "query_store", query=text, model=model)


def version_callback(value: bool):
    """Handle --version flag."""
    if value:
        typer.echo(f"gemini-rag {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    store: Optional[str] = typer.Option(None, "--store", "-s", help="Store display name override"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity (-v info, -vv debug)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True,
                                 help="Show version and exit"),
):
    """Knowledge base backed by Gemini File Search."""
    try:
        settings = load_settings(config, store_display_name=store)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    setup_logging(verbose, quiet, settings.logging_level)
    ctx.obj = {"settings": settings}


def main():
    """Entry point for the gemini-rag CLI."""
    app()


if __name__ == "__main__":
    main()
