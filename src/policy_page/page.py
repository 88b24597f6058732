"""HTML document assembly around the rendered policy fragment.

The page, error panel and redirect markup live in ``templates/``; the CLI
``render`` command and the HTTP app both go through :func:`get_environment`.
"""

from __future__ import annotations

from functools import lru_cache

from jinja2 import Environment, PackageLoader
from markupsafe import Markup

from .config import PageConfig
from .models import RenderOutcome, RenderStatus
from .theme import Theme

TOGGLE_ICONS = {Theme.LIGHT: "🌙", Theme.DARK: "☀️"}


@lru_cache
def get_environment() -> Environment:
    return Environment(
        loader=PackageLoader("policy_page"),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def error_panel(contact_email: str) -> str:
    """Static message shown when no content could be rendered."""

    template = get_environment().get_template("error_panel.html")
    return template.render(contact_email=contact_email)


def redirect_document(url: str) -> str:
    return get_environment().get_template("redirect.html").render(url=url)


def render_document(
    outcome: RenderOutcome,
    page: PageConfig,
    theme: Theme = Theme.LIGHT,
    *,
    toggle_action: str | None = None,
) -> str:
    if outcome.status is RenderStatus.REDIRECT and outcome.redirect_url:
        return redirect_document(outcome.redirect_url)
    # The fragment is produced by the converter from escaped source text.
    return get_environment().get_template("page.html").render(
        page=page,
        theme=theme,
        toggle_action=toggle_action,
        toggle_icon=TOGGLE_ICONS[theme],
        content=Markup(outcome.html),
    )


__all__ = ["error_panel", "get_environment", "redirect_document", "render_document"]
