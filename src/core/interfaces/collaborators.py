"""Contratos de los colaboradores del orquestador.

Por qué Protocol:
- Define contratos estructurales (duck typing) sin herencia rígida.
- El orquestador depende de estas abstracciones; los tests pasan dobles
  simples sin tocar HTTP.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import IdentityRequest, SubmissionPayload, WebhookGrant
from core.domain.outcomes import SubmissionOutcome


@runtime_checkable
class WebhookIssuer(Protocol):
    """Intercambia una identidad por un `WebhookGrant` (un round-trip)."""

    def generate(self, identity: IdentityRequest) -> WebhookGrant:
        """Devuelve un grant válido o lanza `WebhookError`."""

        ...


@runtime_checkable
class SolutionSubmitter(Protocol):
    """Entrega la solución a la URL del grant, autenticada con su token."""

    def submit(self, grant: WebhookGrant, payload: SubmissionPayload) -> SubmissionOutcome:
        """Nunca lanza por status HTTP ni por red: devuelve el outcome."""

        ...


@runtime_checkable
class SolutionProvider(Protocol):
    """Fuente del texto SQL (dato estático, no lógica)."""

    def get(self) -> str:
        ...

    def explain(self) -> str:
        ...
