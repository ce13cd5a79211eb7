"""In-process router: the current view plus navigation history."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavItem:
    path: str
    label: str
    icon: str


NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem("/home", "Dashboard", "home"),
    NavItem("/about", "About", "info"),
    NavItem("/login", "Login", "log-in"),
    NavItem("/register", "Register", "user-plus"),
)

KNOWN_ROUTES = frozenset({"/home", "/about", "/login", "/register", "/dashboard"})


class Navigator(Protocol):
    def navigate(self, route: str) -> None: ...


class Router:
    """Records where the user is and how they got there.

    Unknown routes are accepted and logged; rendering a not-found view is
    the UI layer's concern.
    """

    def __init__(self, initial: str = "/home") -> None:
        self.current = initial
        self.history: list[str] = [initial]

    def navigate(self, route: str) -> None:
        if route not in KNOWN_ROUTES:
            logger.warning("Navigating to unknown route %s", route)
        self.current = route
        self.history.append(route)
