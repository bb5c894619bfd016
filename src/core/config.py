"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings): URL del registry,
credenciales y timeouts. La CLI y los adaptadores leen de aquí.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "modelctl"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "modelctl"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "modelctl"
    return Path.home() / ".config" / "modelctl"


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


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# modelctl user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="MODELCTL_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    server_url: str = Field(
        default="http://localhost:9081",
        min_length=8,
        description="Base URL del servidor que expone el registry.",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos). Los imports grandes tardan.",
    )
    user_agent: str = Field(
        default="modelctl/0.1",
        min_length=1,
        description="User-Agent para las peticiones al registry.",
    )
    token: str | None = Field(
        default=None,
        description="Token de sesión; se envía como cookie `token`.",
    )
    provider: str | None = Field(
        default=None,
        description="Proveedor remoto; se envía como cookie `meshery-provider`.",
    )
    registry_home: Path = Field(
        default_factory=lambda: Path.home() / ".meshery",
        description="Carpeta local donde el registry deja modelos y logs generados.",
    )

    @property
    def register_url(self) -> str:
        return self.server_url.rstrip("/") + "/api/meshmodels/register"
