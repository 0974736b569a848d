"""CLI principal (Typer).

Comandos:
- `run`: genera el webhook, envía la solución y muestra el estado final.
- `solution`: imprime el SQL y su explicación sin tocar la red.
- `doctor ...`: diagnósticos y configuración (ver `cli/doctor.py`).

El mapeo estado terminal -> exit code vive solo aquí:
SUCCEEDED/WARNED => 0, FAILED => 1, configuración inválida => 2.
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.auth import looks_like_jwt, mask_token
from adapters.solution_provider import build_solution_provider
from adapters.submission_client import SubmissionClient
from adapters.webhook_client import WebhookClient
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import (
    build_identity_table,
    build_report_panel,
    build_solution_panel,
    print_banner,
    step_label,
)
from core.config import AppSettings
from core.domain.models import IdentityRequest, WebhookGrant
from core.domain.outcomes import RunState
from core.services.submission_pipeline import PipelineHooks, run_submission

app = typer.Typer(
    no_args_is_help=True,
    help="Request a webhook, then submit the SQL solution with the issued bearer token.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red]\n{exc}")
        raise typer.Exit(code=2) from exc


@app.command(name="run")
def run_command(
    name: str | None = typer.Option(None, "--name", help="Candidate name (overrides SQLHOOK_CANDIDATE_NAME)."),
    reg_no: str | None = typer.Option(None, "--reg-no", help="Registration number (overrides SQLHOOK_CANDIDATE_REG_NO)."),
    email: str | None = typer.Option(None, "--email", help="Candidate email (overrides SQLHOOK_CANDIDATE_EMAIL)."),
    solution_file: Path | None = typer.Option(
        None,
        "--solution-file",
        help="Read the SQL from this file instead of the embedded solution.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat a declined submission (e.g. 401) as a failure.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No banner or solution panel."),
) -> None:
    """Generate the webhook and submit the SQL solution (one pass)."""

    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, console=_console)

    identity = IdentityRequest(
        name=name if name is not None else settings.candidate_name,
        registration_id=reg_no if reg_no is not None else settings.candidate_reg_no,
        email=email if email is not None else settings.candidate_email,
    )

    if not quiet:
        print_banner(_console)
        _console.print(build_identity_table(identity))

    provider = build_solution_provider(settings, solution_file)

    def on_step(state: RunState) -> None:
        if state is not RunState.START:
            _console.rule(step_label(state), style="cyan")

    def on_grant(grant: WebhookGrant) -> None:
        kind = "JWT" if looks_like_jwt(grant.access_token) else "opaque"
        _console.print(f"[green]Webhook URL:[/green] {grant.webhook_url}")
        _console.print(f"[green]Access token:[/green] {mask_token(grant.access_token)} ({kind})")

    def on_solution(query: str) -> None:
        if not quiet:
            _console.print(build_solution_panel(query))

    report = run_submission(
        identity=identity,
        webhook_client=WebhookClient(settings),
        solution_provider=provider,
        submission_client=SubmissionClient(settings),
        strict=strict,
        hooks=PipelineHooks(step=on_step, grant_acquired=on_grant, solution_ready=on_solution),
    )

    _console.print(build_report_panel(report))
    if not report.ok:
        raise typer.Exit(code=1)


@app.command(name="solution")
def solution_command(
    solution_file: Path | None = typer.Option(
        None,
        "--solution-file",
        help="Read the SQL from this file instead of the embedded solution.",
    ),
) -> None:
    """Print the SQL solution and its explanation (no network)."""

    settings = load_settings()
    provider = build_solution_provider(settings, solution_file)
    try:
        query = provider.get()
    except (OSError, ValueError) as exc:
        _console.print(f"[red]Cannot load solution:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    _console.print(build_solution_panel(query, provider.explain()))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
