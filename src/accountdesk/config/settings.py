"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``ACCOUNTDESK_*`` prefix, ``__`` for nested sections)
  3. TOML file    (``accountdesk.toml`` discovered via walk-up)
  4. Code defaults baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from accountdesk.config.discovery import find_config
from accountdesk.config.models import (
    ApiConfig,
    NavigationConfig,
    NotificationsConfig,
    ThemeConfig,
)
from accountdesk.services.notifications import Severity


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading one TOML file (absent file reads as empty)."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed to settings_customise_sources during construction.
_tls = threading.local()


class DeskSettings(BaseSettings):
    """Frozen settings for one accountdesk invocation.

    Stored on the CLI :class:`~accountdesk.commands._context.AppContext`.

    Attributes:
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ACCOUNTDESK_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    api: ApiConfig = Field(default_factory=ApiConfig)
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    theme: ThemeConfig = Field(default_factory=ThemeConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> DeskSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored; without
        one, ``accountdesk.toml`` is discovered from *start* (default cwd).
        """
        toml_path: Path | None
        if config_path:
            p = Path(config_path)
            toml_path = p if p.is_file() else None
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    def toast_ttls(self) -> dict[Severity, int]:
        """Per-severity toast TTLs in milliseconds."""
        n = self.notifications
        return {
            Severity.SUCCESS: n.success_ttl_ms,
            Severity.ERROR: n.error_ttl_ms,
            Severity.WARNING: n.warning_ttl_ms,
            Severity.INFO: n.info_ttl_ms,
        }
