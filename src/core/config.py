"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El cliente HTTP y el pipeline reciben la config de forma explícita: no hay
  URL base global.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UNASSIGNED_LABEL = "Sin asignar"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "tour-recon"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "tour-recon"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tour-recon"
    return Path.home() / ".config" / "tour-recon"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env del usuario, conservando las existentes."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# tour-recon user config (.env)"]
    for key in sorted(existing):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la herramienta de conciliación.

    Orden de precedencia: argumentos explícitos > variables de entorno
    `TOUR_RECON_*` > `.env` del proyecto > `.env` global del usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOUR_RECON_",
        extra="ignore",
        case_sensitive=False,
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="http://localhost:4050",
        min_length=8,
        description="URL base de la API del back-office (sin /api).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="tour-recon/0.1",
        min_length=1,
        description="User-Agent enviado a la API.",
    )
    unassigned_label: str = Field(
        default=DEFAULT_UNASSIGNED_LABEL,
        min_length=1,
        description="Etiqueta mostrada cuando una referencia no se puede resolver.",
    )
    reservation_sample_size: int = Field(
        default=10,
        ge=0,
        description="Reservas listadas en el resumen de reservas.",
    )
    resolution_sample_size: int = Field(
        default=5,
        ge=0,
        description="Reservas usadas en la simulación de resolución de etiquetas.",
    )
    concurrent_fetch: bool = Field(
        default=False,
        description="Descargar las tres secciones en paralelo (asyncio.gather).",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Nivel de logging para stderr (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value
