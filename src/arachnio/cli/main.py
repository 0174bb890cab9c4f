"""Developer console for the Arachnio API.

Each command wraps one client operation and prints the result as a table, or
as raw JSON with `--json`.
"""

from pathlib import Path
from typing import Callable, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from arachnio.adapters.arachnio_client import DefaultArachnioClient
from arachnio.adapters.json_exporter import export_result_json
from arachnio.cli import doctor
from arachnio.cli.ui_components import (
    build_domains_table,
    build_extracted_panel,
    build_links_table,
    build_unwound_table,
)
from arachnio.core.config import ArachnioSettings
from arachnio.core.domain.models import ArachnioModel
from arachnio.core.errors import ArachnioError
from arachnio.core.logger import get_module_logger, setup_logger

ResultT = TypeVar("ResultT", bound=ArachnioModel)

app = typer.Typer(no_args_is_help=True, help="Arachnio API developer console.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
logger = get_module_logger("cli")

JSON_OPTION = typer.Option(False, "--json", help="Print the raw JSON response.")
OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Also write the JSON response here.")


def _client_factory() -> DefaultArachnioClient:
    return DefaultArachnioClient.from_settings()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request."),
) -> None:
    settings = ArachnioSettings()
    setup_logger("DEBUG" if verbose else settings.log_level)


def _call(operation: Callable[[DefaultArachnioClient], ResultT]) -> ResultT:
    try:
        client = _client_factory()
    except ValueError as exc:
        _console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    try:
        with client:
            return operation(client)
    except ArachnioError as exc:
        logger.debug("operation failed", exc_info=True)
        _console.print(f"[red]{type(exc).__name__}:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _save_output(result: ArachnioModel, output: Optional[Path]) -> None:
    if output is not None:
        path = export_result_json(result=result, output_path=output)
        _console.print(f"[green]Saved JSON to:[/green] {path}")


@app.command("parse-domain")
def parse_domain(
    hostname: str = typer.Argument(..., help="Hostname, e.g. www.google.com"),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Split a hostname into registry and public suffixes."""

    result = _call(lambda client: client.parse_domain_name(hostname))
    if as_json:
        _console.print_json(result.model_dump_json(by_alias=True))
    else:
        _console.print(build_domains_table([(result, None)]))
    _save_output(result, output)


@app.command("parse-domain-batch")
def parse_domain_batch(
    hostnames: List[str] = typer.Argument(..., help="Hostnames, in order."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Parse several hostnames in one request."""

    result = _call(lambda client: client.parse_domain_name_batch(hostnames))
    if as_json:
        _console.print_json(result.model_dump_json(by_alias=True))
    else:
        _console.print(build_domains_table((e.result, e.error) for e in result.entries))
    _save_output(result, output)


@app.command("parse-link")
def parse_link(
    url: str = typer.Argument(..., help="Absolute URL."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Split a URL into scheme, authority, path and query parameters."""

    result = _call(lambda client: client.parse_link(url))
    if as_json:
        _console.print_json(result.model_dump_json(by_alias=True))
    else:
        _console.print(build_links_table([(result, None)]))
    _save_output(result, output)


@app.command("parse-link-batch")
def parse_link_batch(
    urls: List[str] = typer.Argument(..., help="Absolute URLs, in order."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Parse several URLs in one request."""

    result = _call(lambda client: client.parse_link_batch(urls))
    if as_json:
        _console.print_json(result.model_dump_json(by_alias=True))
    else:
        _console.print(build_links_table((e.result, e.error) for e in result.entries))
    _save_output(result, output)


@app.command("unwind-link")
def unwind_link(
    url: str = typer.Argument(..., help="Absolute URL, possibly a shortener."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Follow redirects to the final (canonical) URL."""

    result = _call(lambda client: client.unwind_link(url))
    if as_json:
        _console.print_json(result.model_dump_json(by_alias=True))
    else:
        _console.print(build_unwound_table([(result, None)]))
    _save_output(result, output)


@app.command("unwind-link-batch")
def unwind_link_batch(
    urls: List[str] = typer.Argument(..., help="Absolute URLs, in order."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Unwind several URLs in one request."""

    result = _call(lambda client: client.unwind_link_batch(urls))
    if as_json:
        _console.print_json(result.model_dump_json(by_alias=True))
    else:
        _console.print(build_unwound_table((e.result, e.error) for e in result.entries))
    _save_output(result, output)


@app.command("extract-link")
def extract_link(
    url: str = typer.Argument(..., help="Absolute URL of a web page."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Unwind a URL and extract the page's entity metadata."""

    result = _call(lambda client: client.extract_link(url))
    if as_json:
        _console.print_json(result.model_dump_json(by_alias=True))
    else:
        _console.print(build_extracted_panel(result))
    _save_output(result, output)


def run() -> None:
    app()
