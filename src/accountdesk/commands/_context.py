"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Builds the backend client and services lazily and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from accountdesk.config.logging import configure_logging
from accountdesk.infrastructure.api_client import HttpAccountApi
from accountdesk.infrastructure.preferences import PreferenceStore
from accountdesk.output.formatters import format_result
from accountdesk.services.account import AccountService
from accountdesk.services.navigation import Router
from accountdesk.services.notifications import NotificationQueue
from accountdesk.services.theme import ThemeService

if TYPE_CHECKING:
    from accountdesk.config.settings import DeskSettings
    from accountdesk.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared through Click's command hierarchy.

    One notification queue and one router live for the whole invocation,
    the CLI equivalent of a browser session.
    """

    def __init__(self, settings: DeskSettings) -> None:
        self.settings = settings
        self.notifications = NotificationQueue(ttl_ms=settings.toast_ttls())
        self.router = Router()
        self._accounts: AccountService | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def interactive(self) -> bool:
        """Prompts fire only without ``--no-interact``/``--json`` and on a TTY."""
        return (
            not self.settings.no_interact
            and not self.settings.json_output
            and sys.stdin.isatty()
        )

    @property
    def accounts(self) -> AccountService:
        if self._accounts is None:
            api = HttpAccountApi(self.settings.api.base_url, timeout=self.settings.api.timeout)
            self._accounts = AccountService(
                api,
                self.notifications,
                self.router,
                redirect_delay=self.settings.navigation.redirect_delay,
            )
        return self._accounts

    @property
    def theme(self) -> ThemeService:
        store = PreferenceStore(self.settings.theme.preferences_dir)
        return ThemeService(store, system_prefers_dark=self.settings.theme.prefers_dark)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
