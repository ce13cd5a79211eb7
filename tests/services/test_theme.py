"""Tests for ThemeService."""

from pathlib import Path

import pytest

from accountdesk.infrastructure.preferences import PreferenceStore
from accountdesk.services.theme import THEME_KEY, Theme, ThemeService


@pytest.fixture
def store(tmp_path: Path) -> PreferenceStore:
    return PreferenceStore(tmp_path / "prefs")


class TestThemeService:
    @pytest.mark.parametrize("prefers_dark,expected", [(True, Theme.DARK), (False, Theme.LIGHT)])
    def test_falls_back_to_system(
        self, store: PreferenceStore, prefers_dark: bool, expected: Theme
    ) -> None:
        assert ThemeService(store, system_prefers_dark=prefers_dark).current() is expected

    def test_saved_value_wins(self, store: PreferenceStore) -> None:
        store.set(THEME_KEY, "light")
        assert ThemeService(store, system_prefers_dark=True).current() is Theme.LIGHT

    def test_toggle_persists(self, store: PreferenceStore) -> None:
        svc = ThemeService(store)
        assert svc.toggle() is Theme.DARK
        assert store.get(THEME_KEY) == "dark"
        assert svc.toggle() is Theme.LIGHT
        assert store.get(THEME_KEY) == "light"

    def test_garbage_value_ignored(self, store: PreferenceStore) -> None:
        store.set(THEME_KEY, "purple")
        assert ThemeService(store, system_prefers_dark=True).current() is Theme.DARK
