# lexi/state.py
# Application state owned by the top level of the web app

from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional

from fastapi import Response

from lexi.catalog import DocumentTemplate, find_template
from lexi.config import THEME_COOKIE
from lexi.models import Theme


class AppView(str, Enum):
    DASHBOARD = "DASHBOARD"
    GENERATOR = "GENERATOR"
    ANALYZER = "ANALYZER"
    ABOUT = "ABOUT"


@dataclass(frozen=True)
class AppState:
    view: AppView = AppView.DASHBOARD
    template: Optional[DocumentTemplate] = None
    theme: Theme = Theme.LIGHT

    def select_template(self, template_id: str) -> "AppState":
        """Open the generator for a template; unknown ids stay on the dashboard."""
        template = find_template(template_id)
        if template is None:
            return self.go_home()
        return replace(self, view=AppView.GENERATOR, template=template)

    def navigate(self, view: AppView) -> "AppState":
        if view is AppView.GENERATOR:
            if self.template is None:
                return self.go_home()
            return replace(self, view=view)
        return replace(self, view=view, template=None)

    def go_home(self) -> "AppState":
        return replace(self, view=AppView.DASHBOARD, template=None)

    def with_theme(self, theme: Theme) -> "AppState":
        return replace(self, theme=theme)


class ThemePreference:
    """Load-at-init / save-on-change boundary for the persisted theme flag.

    The flag lives in a long-lived browser cookie: it is read from the request
    cookies when a page is rendered and written on the response when toggled.
    """

    max_age = 365 * 24 * 60 * 60

    def __init__(self, key: str = THEME_COOKIE):
        self.key = key

    def load(self, cookies: Mapping[str, str]) -> Theme:
        return Theme.parse(cookies.get(self.key))

    def save(self, response: Response, theme: Theme) -> Theme:
        response.set_cookie(self.key, theme.value, max_age=self.max_age, samesite="lax")
        return theme


theme_preference = ThemePreference()
