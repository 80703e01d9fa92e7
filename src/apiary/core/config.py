"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- Lets adapters (HTTP, HTML) and services read configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "apiary"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "apiary"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "apiary"
    return Path.home() / ".config" / "apiary"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def read_env_file(path: Path) -> dict[str, str]:
    """Parse a dotenv file into a dict, skipping comments and malformed lines."""

    values: dict[str, str] = {}
    if not path.exists():
        return values
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env, keeping existing ones."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    merged = read_env_file(env_path)
    merged.update({k: v for k, v in values.items() if v})

    lines = ["# Apiary user config (.env)"]
    lines.extend(f"{key}={merged[key]}" for key in sorted(merged))
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars) without leaking into the crawl logic.
    - One configuration contract for the CLI, the fetcher and the renderer.
    """

    model_config = SettingsConfigDict(
        env_prefix="APIARY_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://api.w3.org/",
        min_length=8,
        description="Root of the hypermedia API; entity URLs are built below it.",
    )
    user_profile_url: str = Field(
        default="https://www.w3.org/users/",
        min_length=8,
        description="Prefix used to link user entities found in lists (id is appended).",
    )
    api_key: str | None = Field(
        default=None,
        description="Fallback API key when the page does not declare `data-api-key`.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="apiary/0.5 (+https://github.com/w3c/apiary)",
        min_length=1,
        description="User-Agent sent to the API.",
    )
