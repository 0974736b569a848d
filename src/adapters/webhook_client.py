"""Cliente del endpoint de generación de webhook.

Implementación:
- POST JSON `{name, regNo, email}` sin `Authorization` (el token aún no existe).
- Respuesta 2xx esperada: `{webhookUrl, accessToken}`.

Notas:
- Un único intento, sin reintentos.
- Cada fallo se lanza como `WebhookError` con su `ErrorKind` explícito.
"""

from __future__ import annotations

import json
import logging
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from adapters.auth import mask_token
from adapters.http_client import build_client, short_body
from core.config import AppSettings
from core.domain.models import IdentityRequest, WebhookGrant
from core.domain.outcomes import ErrorKind, WebhookError

logger = logging.getLogger(__name__)

_WIRE_KEYS = ("webhookUrl", "accessToken")


class WebhookClient:
    """Intercambia un `IdentityRequest` por un `WebhookGrant`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._settings.generate_webhook_url

    def generate(self, identity: IdentityRequest) -> WebhookGrant:
        missing = identity.missing_fields()
        if missing:
            raise WebhookError(
                ErrorKind.INVALID_INPUT,
                f"identity fields must not be empty: {', '.join(missing)}",
            )

        body = identity.to_wire()
        logger.info("Requesting webhook from %s for candidate %s", self.endpoint, identity.name)
        logger.debug("Webhook request payload: %s", body)

        try:
            with build_client(
                self._settings,
                extra_headers={"Content-Type": "application/json"},
                transport=self._transport,
            ) as client:
                response = client.post(self.endpoint, json=body)
        except httpx.TimeoutException as exc:
            raise WebhookError(ErrorKind.UNREACHABLE, f"timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise WebhookError(ErrorKind.UNREACHABLE, f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise WebhookError(
                ErrorKind.REMOTE_REJECTED,
                short_body(response) or response.reason_phrase,
                status_code=response.status_code,
            )

        grant = _parse_grant(response)
        logger.info("Webhook URL received: %s", grant.webhook_url)
        logger.debug("Access token received: %s", mask_token(grant.access_token))
        return grant


def _parse_grant(response: httpx.Response) -> WebhookGrant:
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise WebhookError(
            ErrorKind.INVALID_RESPONSE,
            f"response body is not JSON: {exc}",
            status_code=response.status_code,
        ) from exc

    if not isinstance(data, dict):
        raise WebhookError(
            ErrorKind.INVALID_RESPONSE,
            f"expected a JSON object, got {type(data).__name__}",
            status_code=response.status_code,
        )

    try:
        # Only the wire names count; `webhook_url`/`access_token` are not part of the contract.
        grant = WebhookGrant.model_validate({key: data.get(key) for key in _WIRE_KEYS})
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise WebhookError(
            ErrorKind.INVALID_RESPONSE,
            f"missing or malformed fields: {fields or 'unknown'}",
            status_code=response.status_code,
        ) from exc

    if not grant.is_valid():
        raise WebhookError(
            ErrorKind.INVALID_RESPONSE,
            "webhookUrl and accessToken must both be non-empty",
            status_code=response.status_code,
        )

    parts = urlsplit(grant.webhook_url.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise WebhookError(
            ErrorKind.INVALID_RESPONSE,
            f"webhookUrl is not an absolute http(s) URL: {grant.webhook_url!r}",
            status_code=response.status_code,
        )
    return grant
