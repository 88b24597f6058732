from bs4 import BeautifulSoup

from policy_page.decorate import (
    decorate_fragment,
    decorate_links,
    header_id,
    is_external,
    parse_fragment,
    wrap_emojis,
)


def decorated(html: str) -> BeautifulSoup:
    return BeautifulSoup(decorate_fragment(html), "html.parser")


def test_header_id_basic() -> None:
    assert header_id("Information We Collect") == "information-we-collect"
    assert header_id("What We DON'T Collect") == "what-we-dont-collect"
    assert header_id("📱 On-Device   Data") == "-on-device-data"


def test_header_id_is_stable() -> None:
    text = "Data Storage & Security"
    first = header_id(text)
    assert first == header_id(text)
    assert header_id(first) == first


def test_top_level_heading_not_decorated() -> None:
    soup = decorated("<h1>Title</h1>")
    heading = soup.find("h1")
    assert heading.get_text() == "Title"
    assert heading.find("a") is None
    assert heading.get("id") is None


def test_subheading_gets_id_and_anchor() -> None:
    soup = decorated("<h2>Overview</h2>")
    heading = soup.find("h2")
    assert heading["id"] == "overview"
    anchor = heading.find("a")
    assert anchor["href"] == "#overview"
    assert anchor["class"] == ["header-anchor"]
    assert anchor["aria-hidden"] == "true"
    assert anchor.get_text() == "#"


def test_duplicate_headings_get_distinct_ids() -> None:
    soup = decorated("<h3>Usage</h3><h3>Usage</h3>")
    assert [h["id"] for h in soup.find_all("h3")] == ["usage", "usage-2"]


def test_header_id_drops_non_ascii_letters() -> None:
    assert header_id("Über uns") == "ber-uns"
    assert header_id("Café Hours") == "caf-hours"


def test_duplicate_suffix_never_reuses_existing_id() -> None:
    soup = decorated("<h2>Usage</h2><h2>Usage</h2><h2>Usage 2</h2>")
    ids = [h["id"] for h in soup.find_all("h2")]
    assert ids == ["usage", "usage-2", "usage-2-2"]
    assert len(set(ids)) == 3


def test_external_link_decorated() -> None:
    soup = decorated('<p><a href="http://example.com">text</a></p>')
    link = soup.find("a")
    assert link["href"] == "http://example.com"
    assert link["target"] == "_blank"
    assert link["rel"] == ["noopener", "noreferrer"]
    assert link.get_text() == "text ↗"


def test_relative_and_mailto_links_untouched() -> None:
    soup = decorated('<p><a href="/about">About</a> <a href="mailto:a@b.c">a@b.c</a></p>')
    for link in soup.find_all("a"):
        assert link.get("target") is None
        assert "↗" not in link.get_text()


def test_mail_markers_suppress_arrow() -> None:
    soup = parse_fragment(
        '<a href="https://mail.example.com">📧 Write</a><a href="https://x.example">mailto:me</a>'
    )
    decorate_links(soup)
    for link in soup.find_all("a"):
        assert link["target"] == "_blank"
        assert "↗" not in link.get_text()


def test_is_external() -> None:
    assert is_external("https://example.com")
    assert is_external("HTTP://EXAMPLE.COM")
    assert not is_external("#overview")
    assert not is_external("mailto:a@b.c")
    assert not is_external(None)


def test_emojis_wrapped_individually() -> None:
    soup = decorated("<p>🔒 Secure ✅ done</p>")
    spans = soup.find_all("span", class_="emoji")
    assert [span.get_text() for span in spans] == ["🔒", "✅"]
    assert soup.find("p").get_text() == "🔒 Secure ✅ done"


def test_variation_selector_emoji_wrapped_as_one() -> None:
    soup = decorated("<p>I \u2764\ufe0f privacy</p>")
    spans = soup.find_all("span", class_="emoji")
    assert [span.get_text() for span in spans] == ["\u2764\ufe0f"]


def test_plain_symbols_not_wrapped() -> None:
    soup = decorated("<h2>Section 1</h2><p><a href='https://x.example'>go</a></p>")
    assert soup.find_all("span", class_="emoji") == []


def test_emoji_in_heading_leaves_leading_hyphen() -> None:
    soup = decorated("<h3>📱 Photo Access</h3>")
    heading = soup.find("h3")
    assert heading["id"] == "-photo-access"
    assert heading.find("span", class_="emoji").get_text() == "📱"


def test_wrap_emojis_is_idempotent() -> None:
    soup = parse_fragment("<p>🚀 launch</p>")
    wrap_emojis(soup)
    wrap_emojis(soup)
    assert len(soup.find_all("span", class_="emoji")) == 1
