"""Command group: light/dark theme preference."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from accountdesk.services.result import ServiceResult

if TYPE_CHECKING:
    from accountdesk.commands._context import AppContext


@click.group()
def theme() -> None:
    """Show or toggle the theme preference."""


@theme.command()
@click.pass_obj
def show(app: AppContext) -> None:
    """Print the effective theme."""
    svc = app.theme
    app.emit(ServiceResult(ok=True, op="theme_show", data={"theme": svc.current().value}))


@theme.command()
@click.pass_obj
def toggle(app: AppContext) -> None:
    """Switch between dark and light and remember the choice."""
    new = app.theme.toggle()
    app.emit(ServiceResult(ok=True, op="theme_toggle", data={"theme": new.value}))
