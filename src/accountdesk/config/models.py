"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, accountdesk.toml only contains
overrides. A fresh install needs only ``[api] base_url``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- accountdesk.toml sections ---


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    base_url: str = "http://localhost:8080/api"
    timeout: float = Field(default=10.0, gt=0)


class NotificationsConfig(BaseModel):
    """[notifications] section. TTLs in milliseconds."""

    model_config = {"frozen": True}

    success_ttl_ms: int = Field(default=5000, ge=0)
    error_ttl_ms: int = Field(default=7000, ge=0)
    warning_ttl_ms: int = Field(default=5000, ge=0)
    info_ttl_ms: int = Field(default=4000, ge=0)


class NavigationConfig(BaseModel):
    """[navigation] section."""

    model_config = {"frozen": True}

    redirect_delay: float = Field(default=2.0, ge=0)


class ThemeConfig(BaseModel):
    """[theme] section."""

    model_config = {"frozen": True}

    prefers_dark: bool = False
    preferences_dir: Path = Field(default_factory=lambda: Path.home() / ".accountdesk")

