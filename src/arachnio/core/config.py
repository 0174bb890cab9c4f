"""Configuración del cliente.

Centraliza variables de entorno (pydantic-settings) para que el cliente HTTP y
la consola lean la misma configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FREE_PLAN_BASE_URL = "https://api.arachn.io/booh1cxg5suxjets"
API_KEY_HEADER_NAME = "X-BLOBR-KEY"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "arachnio"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "arachnio"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "arachnio"
    return Path.home() / ".config" / "arachnio"


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


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# arachnio user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class ArachnioSettings(BaseSettings):
    """Configuración central del cliente.

    La API key es opcional aquí; el cliente la exige al construirse.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARACHNIO_",
        extra="ignore",
        case_sensitive=False,
        # Los últimos ganan: la config de usuario primero, el .env del proyecto la pisa.
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=FREE_PLAN_BASE_URL,
        min_length=8,
        description="Base URL del producto contratado (cada plan tiene la suya).",
    )
    api_key: str | None = Field(
        default=None,
        description="API key del portal de desarrolladores.",
    )
    api_key_header: str = Field(
        default=API_KEY_HEADER_NAME,
        min_length=1,
        description="Header HTTP que transporta la API key.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="arachnio-python/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la consola (DEBUG, INFO, WARNING...).",
    )


def default_settings() -> ArachnioSettings:
    """Valores por defecto sin leer el entorno ni ningún `.env`."""

    return ArachnioSettings.model_construct()
