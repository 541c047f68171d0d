"""Command-line interface for the Crocodoc client using the library API."""

import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .. import __version__
from ..api import CrocodocAPI, CrocodocError
from ..config import load_settings, load_view_url
from ..generators import install as install_files
from ..utils import setup_logging

console = Console()
logger = logging.getLogger(__name__)


def _client(ctx: click.Context) -> CrocodocAPI:
    """Build an API client from the group options, once per invocation."""
    if "client" not in ctx.obj:
        settings = load_settings(ctx.obj["config"], overrides={"token": ctx.obj["api_token"]})
        ctx.obj["client"] = ctx.with_resource(CrocodocAPI(settings.config))
    return ctx.obj["client"]


def _run(ctx: click.Context, operation, *args) -> Any:
    """Call a client operation, turning library errors into a clean exit."""
    try:
        return operation(_client(ctx), *args)
    except CrocodocError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        logger.debug("Crocodoc call failed", exc_info=True)
        sys.exit(1)


@click.group()
@click.option(
    "-c", "--config", type=click.Path(exists=True, path_type=Path), help="Configuration file path"
)
@click.option(
    "--api-token",
    envvar="CROCODOC_API_TOKEN",
    help="Crocodoc API token (can also be set via CROCODOC_API_TOKEN env var)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, api_token: str | None, log_level: str):
    """Work with the Crocodoc document conversion API.

    Examples:
        crocodoc install --api-token <token>
        crocodoc upload http://www.example.com/test.doc
        crocodoc status <uuid> <uuid>
    """
    setup_logging(level=log_level)
    logging.getLogger().handlers = [RichHandler(console=Console(stderr=True), rich_tracebacks=True)]

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["api_token"] = api_token


@cli.command()
@click.option(
    "--api-token",
    "install_token",
    envvar="CROCODOC_API_TOKEN",
    required=True,
    help="Your Crocodoc API token",
)
@click.option(
    "-d",
    "--destination",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Root directory of the application",
)
@click.option("--force", is_flag=True, help="Overwrite existing files")
def install(install_token: str, destination: Path, force: bool):
    """Copy the Crocodoc configuration file and initializer into an application."""
    try:
        written = install_files(install_token, destination, force=force)
    except CrocodocError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    for path in written:
        console.print(f"[green]create[/green] {path}")


@cli.command()
@click.argument("url")
@click.pass_context
def upload(ctx: click.Context, url: str):
    """Upload the document at URL for conversion."""
    console.print_json(data=_run(ctx, CrocodocAPI.upload, url))


@cli.command()
@click.argument("uuids", nargs=-1, required=True)
@click.pass_context
def status(ctx: click.Context, uuids: tuple[str, ...]):
    """Show the conversion status of one or more documents."""
    console.print_json(data=_run(ctx, CrocodocAPI.status_many, uuids))


@cli.command()
@click.argument("uuid")
@click.pass_context
def delete(ctx: click.Context, uuid: str):
    """Delete a document."""
    if _run(ctx, CrocodocAPI.delete, uuid):
        console.print(f"[green]Deleted {uuid}[/green]")
    else:
        console.print(f"[yellow]Document {uuid} was not deleted[/yellow]")
        sys.exit(1)


@cli.command()
@click.argument("uuid")
@click.option("--editable", is_flag=True, help="Allow annotations and comments")
@click.option("--user", help="User id and name joined with a comma, e.g. 1337,Peter")
@click.option("--filter", "filter_", help="Annotations to show: all, none or user ids")
@click.option("--admin", is_flag=True, help="Allow editing other users' annotations")
@click.option("--downloadable", is_flag=True, help="Allow downloading the original")
@click.option("--copyprotected", is_flag=True, help="Prevent text selection")
@click.option("--demo", is_flag=True, help="Do not persist annotation changes")
@click.pass_context
def session(ctx: click.Context, uuid: str, filter_: str | None, **opts):
    """Create a viewing session and print its viewer URL."""
    opts["filter"] = filter_
    opts = {k: v for k, v in opts.items() if v}
    result = _run(ctx, CrocodocAPI.session, uuid, opts)
    click.echo(_client(ctx).view(result["session"]))


@cli.command()
@click.argument("session_id")
@click.pass_context
def view(ctx: click.Context, session_id: str):
    """Print the viewer URL for a session. No API token is needed."""
    try:
        view_url = load_view_url(ctx.obj["config"])
    except CrocodocError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    click.echo(f"{view_url}/{session_id}")


@cli.command()
@click.argument("uuid")
@click.option("--pdf", is_flag=True, help="Download the PDF version")
@click.option("--filename", help="Filename for the Content-Disposition header")
@click.option("--annotated", is_flag=True, help="Include annotations")
@click.option("--filter", "filter_", help="Annotations to include: all, none or user ids")
@click.pass_context
def download(ctx: click.Context, uuid: str, filter_: str | None, **opts):
    """Print the download URL of a document."""
    opts["filter"] = filter_
    opts = {k: v for k, v in opts.items() if v}
    click.echo(_run(ctx, CrocodocAPI.download, uuid, opts))


@cli.command()
@click.argument("uuid")
@click.option("--size", help="Maximum dimensions as WIDTHxHEIGHT")
@click.pass_context
def thumbnail(ctx: click.Context, uuid: str, size: str | None):
    """Print the thumbnail URL of a document."""
    click.echo(_run(ctx, CrocodocAPI.thumbnail, uuid, {"size": size}))


@cli.command()
@click.argument("uuid")
@click.option(
    "-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write the text to a file"
)
@click.pass_context
def text(ctx: click.Context, uuid: str, output: Path | None):
    """Print the extracted text of a document."""
    content = _run(ctx, CrocodocAPI.text, uuid)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
        console.print(f"[green]Text saved to {output}[/green]")
    else:
        click.echo(content, nl=False)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
