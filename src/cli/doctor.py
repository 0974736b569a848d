"""Doctor command for environment diagnostics."""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from adapters.solution_provider import build_solution_provider
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

# Valores de ejemplo que nunca deben enviarse como identidad real.
_PLACEHOLDER_VALUES = {
    "your full name",
    "your name",
    "reg12345",
    "your.email@example.com",
    "changeme",
}


def is_placeholder(value: str) -> bool:
    return value.strip().lower() in _PLACEHOLDER_VALUES


def _check_identity_field(label: str, value: str) -> tuple[str, str]:
    if not value.strip():
        return "FAIL", f"{label} is empty"
    if is_placeholder(value):
        return "FAIL", f"{label} still has the placeholder value '{value}'"
    return "OK", value


def _check_http(settings: AppSettings) -> tuple[bool, str]:
    """HEAD al host del endpoint: solo conectividad, no genera webhook."""

    parts = urlsplit(settings.generate_webhook_url)
    if not parts.scheme or not parts.netloc:
        return False, f"not an absolute URL: {settings.generate_webhook_url}"
    base = f"{parts.scheme}://{parts.netloc}/"
    try:
        with build_client(settings) as client:
            response = client.head(base)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"


def _check_solution(settings: AppSettings) -> tuple[bool, str]:
    provider = build_solution_provider(settings)
    try:
        query = provider.get()
    except (OSError, ValueError) as exc:
        return False, str(exc)
    return True, f"{len(query)} chars ({provider.explain().splitlines()[0]})"


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red]\n{exc}")
        raise typer.Exit(code=2) from exc

    table = Table(title="sqlhook Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    failures = 0

    # Identity
    for label, value in (
        ("Candidate name", settings.candidate_name),
        ("Registration", settings.candidate_reg_no),
        ("Email", settings.candidate_email),
    ):
        status, detail = _check_identity_field(label, value)
        failures += status == "FAIL"
        table.add_row(label, status, detail)

    table.add_row("Webhook endpoint", "OK", settings.generate_webhook_url)
    table.add_row(
        "Timeouts",
        "OK",
        f"connect {settings.http_connect_timeout_seconds}s / read {settings.http_timeout_seconds}s",
    )

    ok_solution, detail_solution = _check_solution(settings)
    failures += not ok_solution
    table.add_row("SQL solution", "OK" if ok_solution else "FAIL", detail_solution)

    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        ok_http, detail_http = _check_http(settings)
        failures += not ok_http
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if failures:
        _console.print(
            "\n[yellow]Note:[/yellow] run `sqlhook doctor setup` to store your candidate details "
            f"in {get_user_env_file()}."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive candidate setup (stores config in the user config .env)."""

    name = typer.prompt("Full name").strip()
    reg_no = typer.prompt("Registration number").strip()
    email = typer.prompt("Email").strip()

    if not name or not reg_no or not email:
        raise typer.BadParameter("name, registration number and email are required")
    if "@" not in email:
        raise typer.BadParameter("email must contain '@'")

    env_path = write_user_env_vars(
        {
            "SQLHOOK_CANDIDATE_NAME": name,
            "SQLHOOK_CANDIDATE_REG_NO": reg_no,
            "SQLHOOK_CANDIDATE_EMAIL": email,
        }
    )

    _console.print(f"[green]Saved candidate config to:[/green] {env_path}")
