"""Main CLI entry point for the confluence-gateway command.

This module provides the Typer application that serves as the entry point
for the confluence-gateway command-line tool: one subcommand per gateway
operation, a local Markdown preview, and `serve` for the MCP stdio server.
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, TypeVar

import typer

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.confluence_client.api_wrapper import ConfluenceAPI, EditorMode
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import (
    ConfigurationError,
    GatewayError,
    InvalidCredentialsError,
    NetworkError,
    ResourceNotFoundError,
)
from src.confluence_client.http_client import AtlassianHttpClient
from src.content_converter import to_markdown

app = typer.Typer(
    name="confluence-gateway",
    help="""Read and write Confluence pages from the command line or serve them as MCP tools.

QUICK START:
  confluence-gateway get-page 123456                 # Page as JSON
  confluence-gateway search "space=TEAM AND type=page"
  confluence-gateway serve                           # MCP server on stdio

Credentials are read from CONFLUENCE_BASE_URL, CONFLUENCE_USER_EMAIL and
CONFLUENCE_API_TOKEN (environment or .env file).""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)

T = TypeVar("T")

VERSION = "0.1.0"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged. Logs always go to stderr,
    which keeps stdout free for results and for the MCP protocol stream.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-gateway_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _build_api() -> ConfluenceAPI:
    """Create a ConfluenceAPI from environment credentials.

    Raises:
        ConfigurationError: If credentials are missing or malformed
    """
    credentials = Authenticator().get_credentials()
    return ConfluenceAPI(AtlassianHttpClient.from_credentials(credentials))


def _exit_code_for(error: Exception) -> ExitCode:
    if isinstance(error, InvalidCredentialsError):
        return ExitCode.AUTH_ERROR
    if isinstance(error, NetworkError):
        return ExitCode.NETWORK_ERROR
    if isinstance(error, ResourceNotFoundError):
        return ExitCode.NOT_FOUND
    return ExitCode.GENERAL_ERROR


def _output(ctx: typer.Context) -> OutputHandler:
    return ctx.obj["output"]


def _run(ctx: typer.Context, message: str, operation: Callable[[ConfluenceAPI], T]) -> T:
    """Build the API, run one operation under a spinner and map failures to exit codes.

    Args:
        ctx: Typer context carrying the OutputHandler
        message: Spinner text
        operation: Callable receiving the ConfluenceAPI

    Returns:
        The operation's result

    Raises:
        typer.Exit: With the ExitCode matching the failure
    """
    output = _output(ctx)
    try:
        api = _build_api()
        with output.spinner(message):
            return operation(api)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        output.error(f"Configuration error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except (GatewayError, ValueError) as e:
        logger.error(f"{message.rstrip('.')} failed: {e}")
        output.error(str(e))
        raise typer.Exit(_exit_code_for(e))


def _read_content(content: Optional[str], file: Optional[Path]) -> str:
    """Return storage-format content from --content or --file (exactly one)."""
    if (content is None) == (file is None):
        raise typer.BadParameter("Provide exactly one of --content or --file")
    if file is not None:
        return file.read_text(encoding="utf-8")
    return content


def _render(content: str, markup: str, output_format: str) -> str:
    if output_format == "markdown" and markup:
        return to_markdown(markup)
    return content


def _check_format(output_format: str) -> str:
    if output_format not in ("text", "markdown"):
        raise typer.BadParameter("format must be 'text' or 'markdown'")
    return output_format


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"confluence-gateway version {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=results only, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Read and write Confluence pages, or serve them as MCP tools."""
    _configure_logging(verbosity, logdir)
    ctx.obj = {
        "output": OutputHandler(verbosity=verbosity, no_color=no_color),
        "verbosity": verbosity,
    }


@app.command()
def serve(ctx: typer.Context) -> None:
    """Serve the Confluence tools over MCP on stdin/stdout."""
    from src.tools.dispatcher import ToolDispatcher
    from src.tools.server import serve as serve_stdio

    output = _output(ctx)
    try:
        credentials = Authenticator().get_credentials()
    except ConfigurationError as e:
        output.error(f"Configuration error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    api = ConfluenceAPI(AtlassianHttpClient.from_credentials(credentials))
    dispatcher = ToolDispatcher(api, request_delay=credentials.request_delay)
    logger.info(f"Serving tools for {credentials.url}")
    asyncio.run(serve_stdio(dispatcher))


@app.command("get-page")
def get_page(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="ID of the page to retrieve"),
    output_format: str = typer.Option("text", "--format", "-f", help="Content format: text or markdown"),
    include_markup: bool = typer.Option(False, "--include-markup", help="Include the storage format body"),
) -> None:
    """Print a page as JSON."""
    _check_format(output_format)
    page = _run(ctx, "Fetching page...", lambda api: api.get_page(page_id))

    data = page.to_dict(include_markup=include_markup)
    data["content"] = _render(page.content, page.content_markup, output_format)
    _output(ctx).print_json(data)


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="CQL query, e.g. \"space=TEAM AND type=page\""),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Maximum number of results"),
    output_format: str = typer.Option("text", "--format", "-f", help="Content format: text or markdown"),
) -> None:
    """Search pages with CQL and print the matches as JSON."""
    _check_format(output_format)
    result = _run(ctx, "Searching...", lambda api: api.search_pages(query, limit=limit))

    pages = []
    for page in result.pages[:limit]:
        data = page.to_dict()
        data["content"] = _render(page.content, page.content_markup, output_format)
        pages.append(data)
    _output(ctx).print_json({"total": result.total, "returned": len(pages), "pages": pages})


@app.command()
def spaces(
    ctx: typer.Context,
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Maximum number of spaces"),
    table: bool = typer.Option(False, "--table", help="Render a table instead of JSON"),
) -> None:
    """List spaces."""
    result = _run(ctx, "Fetching spaces...", lambda api: api.get_spaces(limit=limit))

    found = result.spaces[:limit]
    if table:
        _output(ctx).print_spaces_table(list(found))
        return
    _output(ctx).print_json({
        "total": result.total,
        "returned": len(found),
        "spaces": [space.to_dict() for space in found],
    })


@app.command("create-page")
def create_page(
    ctx: typer.Context,
    space_key: str = typer.Option(..., "--space", "-s", help="Key of the target space"),
    title: str = typer.Option(..., "--title", "-t", help="Page title"),
    content: Optional[str] = typer.Option(None, "--content", help="Storage format (XHTML) body"),
    file: Optional[Path] = typer.Option(None, "--file", exists=True, dir_okay=False, help="Read the body from a file"),
    parent_id: Optional[str] = typer.Option(None, "--parent", help="Parent page ID"),
    editor_mode: EditorMode = typer.Option(EditorMode.V2, "--editor-mode", help="Editor: v1, v2 or auto"),
) -> None:
    """Create a page and print it as JSON."""
    body = _read_content(content, file)
    page = _run(
        ctx,
        "Creating page...",
        lambda api: api.create_page(space_key, title, body, parent_id=parent_id, editor_mode=editor_mode),
    )
    _output(ctx).success(f"Created page {page.id} in space {page.space_key}")
    _output(ctx).print_json(page.to_dict())


@app.command("update-page")
def update_page(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="ID of the page to update"),
    title: str = typer.Option(..., "--title", "-t", help="New page title"),
    version: int = typer.Option(..., "--version", help="Version number you last saw"),
    content: Optional[str] = typer.Option(None, "--content", help="Storage format (XHTML) body"),
    file: Optional[Path] = typer.Option(None, "--file", exists=True, dir_okay=False, help="Read the body from a file"),
) -> None:
    """Replace a page's title and body and print it as JSON."""
    body = _read_content(content, file)
    page = _run(ctx, "Updating page...", lambda api: api.update_page(page_id, title, body, version))
    _output(ctx).success(f"Updated page {page.id} to version {page.version}")
    _output(ctx).print_json(page.to_dict())


@app.command()
def comments(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="ID of the page"),
    limit: int = typer.Option(25, "--limit", "-n", min=1, help="Maximum number of comments"),
) -> None:
    """List a page's comments as JSON."""
    result = _run(ctx, "Fetching comments...", lambda api: api.get_comments(page_id, limit=limit))

    found = result.comments[:limit]
    _output(ctx).print_json({
        "total": result.total,
        "returned": len(found),
        "comments": [comment.to_dict() for comment in found],
    })


@app.command("add-comment")
def add_comment(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="ID of the page to comment on"),
    content: Optional[str] = typer.Option(None, "--content", help="Storage format (XHTML) body"),
    file: Optional[Path] = typer.Option(None, "--file", exists=True, dir_okay=False, help="Read the body from a file"),
    parent_id: Optional[str] = typer.Option(None, "--parent", help="Parent comment ID for a reply"),
) -> None:
    """Add a comment to a page and print it as JSON."""
    body = _read_content(content, file)
    comment = _run(ctx, "Adding comment...", lambda api: api.add_comment(page_id, body, parent_id=parent_id))
    _output(ctx).success(f"Added comment {comment.id} to page {comment.page_id}")
    _output(ctx).print_json(comment.to_dict())


@app.command()
def attachments(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="ID of the page"),
    limit: int = typer.Option(25, "--limit", "-n", min=1, help="Maximum number of attachments"),
) -> None:
    """List a page's attachments as JSON."""
    result = _run(ctx, "Fetching attachments...", lambda api: api.get_attachments(page_id, limit=limit))

    found = result.attachments[:limit]
    _output(ctx).print_json({
        "total": result.total,
        "returned": len(found),
        "attachments": [attachment.to_dict() for attachment in found],
    })


@app.command("add-attachment")
def add_attachment(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="ID of the page to attach to"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to upload"),
    filename: Optional[str] = typer.Option(None, "--filename", help="Name shown in Confluence (default: file name)"),
    comment: Optional[str] = typer.Option(None, "--comment", help="Version comment"),
) -> None:
    """Upload a file as an attachment and print its metadata as JSON."""
    data = file.read_bytes()
    name = filename or file.name
    attachment = _run(
        ctx,
        "Uploading attachment...",
        lambda api: api.add_attachment(page_id, data, name, comment=comment),
    )
    _output(ctx).success(f"Attached {attachment.title} to page {page_id}")
    _output(ctx).print_json(attachment.to_dict())


@app.command("to-markdown")
def to_markdown_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(None, exists=True, dir_okay=False, help="Storage format file (default: stdin)"),
) -> None:
    """Convert storage format (XHTML) to Markdown without contacting Confluence."""
    markup = file.read_text(encoding="utf-8") if file is not None else sys.stdin.read()
    _output(ctx).print(to_markdown(markup))


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
