"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/solución) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GENERATE_WEBHOOK_URL = "https://bfhldevapigw.healthrx.co.in/hiring/generateWebhook/PYTHON"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "sqlhook"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "sqlhook"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sqlhook"
    return Path.home() / ".config" / "sqlhook"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# sqlhook user config (.env)"]
    for key in sorted(existing.keys()):
        value = existing[key]
        if " " in value:
            value = f'"{value}"'
        lines.append(f"{key}={value}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.

    Los datos del candidato pueden quedar vacíos aquí: el cliente de webhook
    es quien los rechaza (`INVALID_INPUT`) antes de tocar la red.
    """

    model_config = SettingsConfigDict(
        env_prefix="SQLHOOK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    candidate_name: str = Field(
        default="",
        description="Nombre completo del candidato.",
    )
    candidate_reg_no: str = Field(
        default="",
        description="Número de registro del candidato.",
    )
    candidate_email: str = Field(
        default="",
        description="Email del candidato.",
    )

    generate_webhook_url: str = Field(
        default=DEFAULT_GENERATE_WEBHOOK_URL,
        min_length=8,
        description="Endpoint que emite el webhook + access token.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout de lectura/escritura por request (segundos).",
    )
    http_connect_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout de conexión por request (segundos).",
    )
    user_agent: str = Field(
        default="sqlhook/0.1",
        min_length=1,
        description="User-Agent para ambas llamadas HTTP.",
    )

    solution_path: Path | None = Field(
        default=None,
        description="Ruta opcional a un .sql que reemplaza la solución embebida.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level
