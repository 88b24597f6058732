from policy_page.config import PageConfig
from policy_page.models import RenderOutcome, RenderStatus
from policy_page.page import error_panel, render_document
from policy_page.theme import Theme


def test_document_wraps_content_in_container() -> None:
    outcome = RenderOutcome(run_id="r", status=RenderStatus.LOADED, html="<h1>Policy</h1>")
    document = render_document(outcome, PageConfig(title="Privacy & Terms"), Theme.LIGHT)
    assert document.startswith("<!DOCTYPE html>")
    assert "<title>Privacy &amp; Terms</title>" in document
    assert '<div id="privacy-content" class="loaded"><h1>Policy</h1></div>' in document
    assert '<body class="light-theme">' in document
    assert "themeToggle" not in document


def test_toggle_control_when_action_given() -> None:
    outcome = RenderOutcome(run_id="r", status=RenderStatus.LOADED, html="")
    document = render_document(outcome, PageConfig(), Theme.DARK, toggle_action="/theme/toggle")
    assert 'action="/theme/toggle"' in document
    assert 'aria-label="Switch to light theme"' in document


def test_redirect_document() -> None:
    outcome = RenderOutcome(
        run_id="r", status=RenderStatus.REDIRECT, html="", redirect_url="/test.html"
    )
    document = render_document(outcome, PageConfig())
    assert 'http-equiv="refresh" content="0; url=/test.html"' in document
    assert "privacy-content" not in document


def test_error_panel_has_contact_and_retry() -> None:
    panel = error_panel("help@example.org")
    assert "Oops! Something went wrong" in panel
    assert '<a href="mailto:help@example.org">help@example.org</a>' in panel
    assert 'class="retry-button"' in panel


def test_fragment_is_inserted_unescaped_and_config_values_are_escaped() -> None:
    outcome = RenderOutcome(
        run_id="r", status=RenderStatus.LOADED, html='<p><a href="#x">x &amp; y</a></p>'
    )
    page = PageConfig(title="<Policy>", stylesheet='a.css" onload="x')
    document = render_document(outcome, page)
    assert '<p><a href="#x">x &amp; y</a></p>' in document
    assert "<title>&lt;Policy&gt;</title>" in document
    assert 'href="a.css&#34; onload=&#34;x"' in document


def test_stylesheet_link_omitted_when_unset() -> None:
    outcome = RenderOutcome(run_id="r", status=RenderStatus.LOADED, html="")
    document = render_document(outcome, PageConfig(stylesheet=None))
    assert "<link" not in document
    assert ".retry-button" in document


def test_error_panel_escapes_contact_email() -> None:
    panel = error_panel('a"b@example.org')
    assert 'href="mailto:a&#34;b@example.org"' in panel


def test_redirect_document_escapes_url() -> None:
    outcome = RenderOutcome(
        run_id="r", status=RenderStatus.REDIRECT, html="", redirect_url='/a?b=1&c="2"'
    )
    document = render_document(outcome, PageConfig())
    assert 'url=/a?b=1&amp;c=&#34;2&#34;"' in document
    assert document.startswith("<!DOCTYPE html>")
