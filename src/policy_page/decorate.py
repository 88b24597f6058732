"""Tree transforms applied to a rendered fragment before display."""

from __future__ import annotations

import re

import regex
from bs4 import BeautifulSoup, NavigableString
from bs4.element import Tag

ANCHOR_HEADINGS = ("h2", "h3", "h4", "h5", "h6")
EXTERNAL_HREF_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
EMOJI_RE = regex.compile(r"(\p{Emoji_Presentation}|\p{Emoji}\uFE0F)")
NON_WORD_RE = re.compile(r"[^A-Za-z0-9_\s-]")
WHITESPACE_RE = re.compile(r"\s+")
EXTERNAL_MARKER = " ↗"
MAIL_MARKERS = ("📧", "mailto:")
SKIP_TEXT_PARENTS = frozenset({"script", "style"})


def parse_fragment(html_text: str) -> BeautifulSoup:
    return BeautifulSoup(html_text, "html.parser")


def header_id(text: str) -> str:
    """Derive a same-page anchor id from heading text."""

    cleaned = NON_WORD_RE.sub("", text.lower())
    return WHITESPACE_RE.sub("-", cleaned)


def decorate_headers(soup: BeautifulSoup) -> BeautifulSoup:
    assigned: set[str] = set()
    for heading in soup.find_all(list(ANCHOR_HEADINGS)):
        base = header_id(heading.get_text()) or "section"
        anchor_id, suffix = base, 2
        while anchor_id in assigned:
            anchor_id = f"{base}-{suffix}"
            suffix += 1
        assigned.add(anchor_id)
        heading["id"] = anchor_id
        anchor = soup.new_tag("a", href=f"#{anchor_id}", attrs={"aria-hidden": "true"})
        anchor["class"] = "header-anchor"
        anchor.string = "#"
        heading.append(anchor)
    return soup


def is_external(href: str | None) -> bool:
    return bool(href) and bool(EXTERNAL_HREF_RE.match(href))


def decorate_links(soup: BeautifulSoup) -> BeautifulSoup:
    for link in soup.find_all("a", href=True):
        if not is_external(link["href"]):
            continue
        link["target"] = "_blank"
        link["rel"] = "noopener noreferrer"
        content = link.decode_contents()
        if not any(marker in content for marker in MAIL_MARKERS):
            link.append(EXTERNAL_MARKER)
    return soup


def _inside_emoji_span(node: NavigableString) -> bool:
    parent = node.parent
    return parent is not None and parent.name == "span" and "emoji" in parent.get("class", [])


def _text_nodes(soup: BeautifulSoup) -> list[NavigableString]:
    nodes: list[NavigableString] = []
    for node in soup.find_all(string=True):
        if type(node) is not NavigableString:
            continue
        if node.parent is not None and node.parent.name in SKIP_TEXT_PARENTS:
            continue
        if _inside_emoji_span(node):
            continue
        nodes.append(node)
    return nodes


def _emoji_pieces(soup: BeautifulSoup, text: str) -> list[NavigableString | Tag]:
    pieces: list[NavigableString | Tag] = []
    position = 0
    for match in EMOJI_RE.finditer(text):
        if match.start() > position:
            pieces.append(NavigableString(text[position:match.start()]))
        span = soup.new_tag("span")
        span["class"] = "emoji"
        span.string = match.group(1)
        pieces.append(span)
        position = match.end()
    if position < len(text):
        pieces.append(NavigableString(text[position:]))
    return pieces


def wrap_emojis(soup: BeautifulSoup) -> BeautifulSoup:
    for node in _text_nodes(soup):
        text = str(node)
        if not EMOJI_RE.search(text):
            continue
        pieces = _emoji_pieces(soup, text)
        node.replace_with(*pieces)
    return soup


DECORATORS = (decorate_headers, decorate_links, wrap_emojis)


def decorate_fragment(html_text: str) -> str:
    soup = parse_fragment(html_text)
    for decorator in DECORATORS:
        soup = decorator(soup)
    return str(soup)


__all__ = [
    "DECORATORS",
    "decorate_fragment",
    "decorate_headers",
    "decorate_links",
    "header_id",
    "is_external",
    "parse_fragment",
    "wrap_emojis",
]
