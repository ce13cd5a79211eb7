"""Theme preference: persisted ``"theme"`` key with an OS-level fallback."""

from __future__ import annotations

from enum import StrEnum

from accountdesk.infrastructure.preferences import PreferenceStore

THEME_KEY = "theme"


class Theme(StrEnum):
    DARK = "dark"
    LIGHT = "light"


class ThemeService:
    """Reads and toggles the theme.

    Parameters:
        store: Persistent preferences.
        system_prefers_dark: OS-level preference used when nothing is stored.
    """

    def __init__(self, store: PreferenceStore, *, system_prefers_dark: bool = False) -> None:
        self._store = store
        self._system_prefers_dark = system_prefers_dark

    def current(self) -> Theme:
        saved = self._store.get(THEME_KEY)
        if saved in (Theme.DARK, Theme.LIGHT):
            return Theme(saved)
        return Theme.DARK if self._system_prefers_dark else Theme.LIGHT

    def is_dark(self) -> bool:
        return self.current() is Theme.DARK

    def toggle(self) -> Theme:
        """Flip the theme and persist the new value."""
        new = Theme.LIGHT if self.is_dark() else Theme.DARK
        self._store.set(THEME_KEY, new.value)
        return new

    def set(self, theme: Theme) -> None:
        self._store.set(THEME_KEY, Theme(theme).value)
