"""Unit tests for navigation state and the theme preference."""

from fastapi import Response

from lexi.catalog import get_template
from lexi.models import Theme
from lexi.state import AppState, AppView, ThemePreference


class TestAppState:
    def test_starts_on_dashboard(self):
        state = AppState()
        assert state.view is AppView.DASHBOARD
        assert state.template is None
        assert state.theme is Theme.LIGHT

    def test_select_template_opens_generator(self):
        state = AppState().select_template("5")
        assert state.view is AppView.GENERATOR
        assert state.template == get_template("5")

    def test_unknown_template_goes_home(self):
        state = AppState(view=AppView.ABOUT).select_template("nope")
        assert state.view is AppView.DASHBOARD
        assert state.template is None

    def test_generator_requires_template(self):
        assert AppState().navigate(AppView.GENERATOR).view is AppView.DASHBOARD

    def test_leaving_generator_clears_template(self):
        state = AppState().select_template("1").navigate(AppView.ANALYZER)
        assert state.view is AppView.ANALYZER
        assert state.template is None

    def test_theme_is_kept_across_navigation(self):
        state = AppState().with_theme(Theme.DARK).select_template("2").go_home()
        assert state.theme is Theme.DARK


class TestTheme:
    def test_parse(self):
        assert Theme.parse("dark") is Theme.DARK
        assert Theme.parse(" DARK ") is Theme.DARK
        assert Theme.parse("light") is Theme.LIGHT

    def test_parse_falls_back_to_light(self):
        assert Theme.parse(None) is Theme.LIGHT
        assert Theme.parse("") is Theme.LIGHT
        assert Theme.parse("sepia") is Theme.LIGHT

    def test_toggle(self):
        assert Theme.LIGHT.toggled() is Theme.DARK
        assert Theme.DARK.toggled().toggled() is Theme.DARK


class TestThemePreference:
    def test_load_from_cookies(self):
        pref = ThemePreference("t")
        assert pref.load({"t": "dark"}) is Theme.DARK
        assert pref.load({}) is Theme.LIGHT

    def test_save_sets_long_lived_cookie(self):
        pref = ThemePreference("t")
        response = Response()
        pref.save(response, Theme.DARK)
        header = response.headers["set-cookie"]
        assert header.startswith("t=dark;")
        assert "Max-Age=31536000" in header
        assert "SameSite=lax" in header
