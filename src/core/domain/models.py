"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los alias (`regNo`, `webhookUrl`, `finalQuery`) documentan el contrato REST
  externo en un solo lugar.
- Serializar/parsear el JSON de ambos endpoints queda fuera de los clientes.

Nota:
- Estos modelos son transitorios: viven una sola ejecución y nunca se persisten.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class IdentityRequest(BaseModel):
    """Identidad del candidato enviada al endpoint de generación de webhook.

    Se permite construirla con campos vacíos: quien valida es
    `WebhookClient.generate`, que falla con `INVALID_INPUT` sin hacer I/O.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(
        ...,
        description="Nombre del candidato.",
    )
    registration_id: str = Field(
        ...,
        alias="regNo",
        description="Número de registro (define la pregunta asignada).",
    )
    email: str = Field(
        ...,
        description="Email del candidato.",
    )

    def missing_fields(self) -> list[str]:
        """Nombres (wire) de los campos vacíos o solo espacios."""

        missing: list[str] = []
        for attr, wire in (("name", "name"), ("registration_id", "regNo"), ("email", "email")):
            if not getattr(self, attr).strip():
                missing.append(wire)
        return missing

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class WebhookGrant(BaseModel):
    """Par (URL, token) emitido por el sistema remoto.

    Autoriza exactamente un envío posterior.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    webhook_url: str = Field(
        ...,
        alias="webhookUrl",
        description="URL absoluta donde se envía la solución.",
    )
    access_token: str = Field(
        ...,
        alias="accessToken",
        description="Credencial bearer opaca.",
    )

    def is_valid(self) -> bool:
        return bool(self.webhook_url.strip()) and bool(self.access_token.strip())


class SubmissionPayload(BaseModel):
    """Cuerpo del envío: el texto SQL final."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    query: str = Field(
        ...,
        alias="finalQuery",
        description="Texto SQL de la solución (dato estático).",
    )

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)
