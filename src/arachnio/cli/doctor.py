"""Doctor command for configuration checks."""

from typing import Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from arachnio.adapters.arachnio_client import DefaultArachnioClient
from arachnio.core.config import FREE_PLAN_BASE_URL, ArachnioSettings, write_user_env_vars
from arachnio.core.errors import ArachnioError

app = typer.Typer(no_args_is_help=True, help="Configuration checks and setup.")

_console = Console()

PROBE_HOSTNAME = "www.example.com"


def _client_factory(settings: ArachnioSettings) -> DefaultArachnioClient:
    return DefaultArachnioClient.from_settings(settings)


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}…{secret[-4:]}"


def _probe(settings: ArachnioSettings) -> Tuple[bool, str]:
    """Parse a well-known hostname to check the key against the service."""

    try:
        with _client_factory(settings) as client:
            parsed = client.parse_domain_name(PROBE_HOSTNAME)
        return True, f"{parsed.hostname} -> {parsed.public_suffix}"
    except ArachnioError as exc:
        return False, f"{type(exc).__name__}: {exc}"


@app.command()
def run(
    probe: bool = typer.Option(True, "--probe/--no-probe", help="Call the API once."),
) -> None:
    """Show the effective configuration and probe the API."""

    settings = ArachnioSettings()

    table = Table(title="arachnio doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", escape(settings.base_url))
    if settings.api_key:
        table.add_row("API key", "OK", _mask(settings.api_key))
    else:
        table.add_row("API key", "MISSING", "Set ARACHNIO_API_KEY or run `doctor setup`")
    table.add_row("Key header", "OK", escape(settings.api_key_header))
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok = bool(settings.api_key)
    if probe and settings.api_key:
        ok, detail = _probe(settings)
        table.add_row("API probe", "OK" if ok else "FAIL", escape(detail))

    _console.print(table)

    if not ok:
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    base_url = typer.prompt("Base URL", default=FREE_PLAN_BASE_URL, show_default=True).strip()
    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not api_key:
        raise typer.BadParameter("base URL and API key are required")

    env_path = write_user_env_vars(
        {
            "ARACHNIO_BASE_URL": base_url,
            "ARACHNIO_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
