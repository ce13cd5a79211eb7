"""Tests for the in-process router."""

from accountdesk.services.navigation import KNOWN_ROUTES, NAV_ITEMS, Router


class TestRouter:
    def test_defaults_to_home(self) -> None:
        router = Router()
        assert router.current == "/home"
        assert router.history == ["/home"]

    def test_navigate_records_history(self) -> None:
        router = Router()
        router.navigate("/register")
        router.navigate("/login")
        assert router.current == "/login"
        assert router.history == ["/home", "/register", "/login"]

    def test_unknown_route_is_accepted(self) -> None:
        router = Router()
        router.navigate("/nowhere")
        assert router.current == "/nowhere"

    def test_nav_items_are_known_routes(self) -> None:
        assert {item.path for item in NAV_ITEMS} <= KNOWN_ROUTES
