"""Runtime configuration read from the process environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import urlparse

DEFAULT_API_BASE = "https://builder.impromptu-labs.com/api_tools"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


@dataclass(frozen=True, slots=True)
class RemoteSettings:
    """Connection details for the remote text-processing API."""

    api_base: str = DEFAULT_API_BASE
    api_token: str = ""
    app_id: str = ""
    timeout: float = 60.0

    def __post_init__(self) -> None:
        parsed = urlparse(self.api_base)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("api_base must include scheme and host")
        object.__setattr__(self, "api_base", self.api_base.rstrip("/"))

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_token}",
            "X-Generated-App-ID": self.app_id,
        }


@dataclass(frozen=True, slots=True)
class AppSettings:
    remote: RemoteSettings
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_settings() -> AppSettings:
    """Build settings from ``DOCSUM_*`` environment variables."""

    remote = RemoteSettings(
        api_base=os.getenv("DOCSUM_API_BASE") or DEFAULT_API_BASE,
        api_token=os.getenv("DOCSUM_API_TOKEN", ""),
        app_id=os.getenv("DOCSUM_APP_ID", ""),
        timeout=_float_env("DOCSUM_HTTP_TIMEOUT", 60.0),
    )

    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    if not origins:
        origins = list(DEFAULT_CORS_ORIGINS)

    return AppSettings(
        remote=remote,
        log_level=(os.getenv("DOCSUM_LOG_LEVEL") or "INFO").upper(),
        cors_origins=origins,
    )
