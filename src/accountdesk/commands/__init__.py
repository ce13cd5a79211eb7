"""Subcommand modules for accountdesk.

Provides register_commands(), which imports each command module only
when the root group is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the theme group and the register/login commands on the root group."""
    from accountdesk.commands.login import login
    from accountdesk.commands.register import register
    from accountdesk.commands.theme import theme

    cli.add_command(register)
    cli.add_command(login)
    cli.add_command(theme)
