"""Cliente de envío de la solución al webhook.

Notas:
- 2xx => ACCEPTED
- cualquier otro status (incluido 401) => REJECTED, devuelto, nunca lanzado
- red/timeout => UNREACHABLE
"""

from __future__ import annotations

import logging

import httpx

from adapters.auth import bearer_header, mask_token
from adapters.http_client import build_client, short_body
from core.config import AppSettings
from core.domain.models import SubmissionPayload, WebhookGrant
from core.domain.outcomes import SubmissionOutcome

logger = logging.getLogger(__name__)


class SubmissionClient:
    """Entrega el `SubmissionPayload` a la URL del grant."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def submit(self, grant: WebhookGrant, payload: SubmissionPayload) -> SubmissionOutcome:
        if not grant.is_valid():
            raise ValueError("refusing to submit with an invalid webhook grant")
        if not payload.query.strip():
            raise ValueError("submission query must not be empty")

        headers = {
            "Authorization": bearer_header(grant.access_token),
            "Content-Type": "application/json",
        }
        logger.info("Submitting solution to %s", grant.webhook_url)
        logger.info("Authorization: Bearer %s", mask_token(grant.access_token))
        logger.debug("Submitted query: %s", payload.query.strip())

        try:
            with build_client(
                self._settings,
                extra_headers=headers,
                transport=self._transport,
            ) as client:
                response = client.post(grant.webhook_url, json=payload.to_wire())
        except httpx.TransportError as exc:
            logger.error("Submission did not complete: %s", exc)
            return SubmissionOutcome.unreachable(f"{type(exc).__name__}: {exc}")

        body = short_body(response)
        if response.is_success:
            logger.info("Solution accepted (HTTP %s)", response.status_code)
            logger.debug("Response body: %s", body)
            return SubmissionOutcome.accepted(response.status_code, body)

        logger.warning("Solution rejected (HTTP %s): %s", response.status_code, body)
        return SubmissionOutcome.rejected(response.status_code, body)
