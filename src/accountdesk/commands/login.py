"""Command: sign in."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from accountdesk.commands._context import AppContext


@click.command()
@click.option("--email", default=None, help="Account email.")
@click.option("--password", default=None, help="Account password.")
@click.option("--remember-me", is_flag=True, help="Keep the session signed in.")
@click.pass_obj
def login(
    app: AppContext,
    email: str | None,
    password: str | None,
    remember_me: bool,
) -> None:
    """Sign in with email and password."""
    if email is None and app.interactive:
        email = click.prompt("Email", default="")
    if password is None and app.interactive:
        password = click.prompt("Password", default="", hide_input=True)

    result = asyncio.run(
        app.accounts.login(email or "", password or "", remember_me=remember_me)
    )
    app.emit(result)
