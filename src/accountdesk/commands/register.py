"""Command: create an account."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click

from accountdesk.domain.forms import REGISTRATION_FORM

if TYPE_CHECKING:
    from accountdesk.commands._context import AppContext

# CLI option dest -> form field name
_FIELD_OPTIONS: dict[str, str] = {
    "first_name": "firstName",
    "last_name": "lastName",
    "user_name": "userName",
    "email": "email",
    "phone": "phone",
    "password": "password",
}


@click.command()
@click.option("--first-name", default=None, help="First name (letters and spaces).")
@click.option("--last-name", default=None, help="Last name (letters and spaces).")
@click.option("--user-name", default=None, help="Username (letters, digits, underscore).")
@click.option("--email", default=None, help="Email address.")
@click.option("--phone", default=None, help="Phone number (11 digits).")
@click.option("--password", default=None, help="Password (6+ characters).")
@click.pass_obj
def register(app: AppContext, **options: str | None) -> None:
    """Register a new account.

    Missing values are prompted for in an interactive terminal; otherwise
    they are submitted empty and reported as field errors.
    """
    values: dict[str, str] = {}
    for dest, field_name in _FIELD_OPTIONS.items():
        value = options.get(dest)
        if value is None and app.interactive:
            label = REGISTRATION_FORM.spec(field_name).label
            value = click.prompt(label, default="", hide_input=field_name == "password")
        values[field_name] = value or ""

    app.emit(asyncio.run(app.accounts.register(values)))
