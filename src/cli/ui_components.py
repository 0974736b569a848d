"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `run`, `solution` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.models import IdentityRequest
from core.domain.outcomes import RunReport, RunState

_STATE_STYLES: dict[RunState, tuple[str, str]] = {
    RunState.SUCCEEDED: ("green", "SUBMISSION COMPLETED SUCCESSFULLY"),
    RunState.WARNED: ("yellow", "SUBMISSION COMPLETED WITH WARNINGS"),
    RunState.FAILED: ("red", "SUBMISSION FAILED"),
}

_STEP_LABELS: dict[RunState, str] = {
    RunState.START: "Starting",
    RunState.WEBHOOK_PENDING: "STEP 1: Generating webhook URL",
    RunState.WEBHOOK_ACQUIRED: "STEP 2: Loading SQL solution",
    RunState.SUBMITTING: "STEP 3: Submitting SQL solution",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (`--quiet`).
    """

    title = Text("SQLHOOK", style="bold cyan")
    subtitle = Text("Webhook • Bearer token • SQL submission", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def step_label(state: RunState) -> str:
    return _STEP_LABELS.get(state, state.value)


def build_identity_table(identity: IdentityRequest) -> Table:
    """Tabla con los datos del candidato que se enviarán."""

    table = Table(title="Candidate", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Name", identity.name or "[red]<empty>[/red]")
    table.add_row("Registration", identity.registration_id or "[red]<empty>[/red]")
    table.add_row("Email", identity.email or "[red]<empty>[/red]")
    return table


def build_solution_panel(query: str, explanation: str | None = None) -> Panel:
    """Panel con el SQL (resaltado) y, opcionalmente, su explicación."""

    syntax = Syntax(query, "sql", theme="ansi_dark", word_wrap=True)
    if not explanation:
        return Panel(syntax, title="SQL solution", border_style="magenta")

    table = Table.grid(padding=(1, 0))
    table.add_row(syntax)
    table.add_row(Text(explanation, style="dim"))
    return Panel(table, title="SQL solution", border_style="magenta")


def build_report_panel(report: RunReport) -> Panel:
    """Panel final: estado terminal + tipo de error + status HTTP."""

    color, headline = _STATE_STYLES[report.state]
    body = Text()
    body.append(headline + "\n\n", style=f"bold {color}")
    body.append(f"State: {report.state.value}\n")
    if report.webhook_url:
        body.append(f"Webhook: {report.webhook_url}\n")
    if report.error_kind is not None:
        body.append(f"Error: {report.error_kind.label()}\n", style=color)
    if report.status_code is not None:
        body.append(f"HTTP status: {report.status_code}\n")
    if report.detail:
        body.append(f"Detail: {report.detail}\n", style="dim")
    if report.state is RunState.WARNED:
        body.append(
            "\nThe remote side declined the authenticated request. "
            "This is expected in sandbox environments (e.g. 401).",
            style="dim",
        )
    return Panel(body, title="Result", border_style=color)
