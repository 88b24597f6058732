"""Markdown-to-HTML conversion as an ordered pipeline of named stages.

The document is parsed into one block per source line. Each stage takes the
current block list and returns a new one; the final list is serialized to an
HTML fragment. Stages run in a fixed order because later stages depend on the
block kinds assigned by earlier ones.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from .utils import normalize_newlines


class ConversionError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class BlockKind(str, Enum):
    BLANK = "blank"
    TEXT = "text"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"


@dataclass(slots=True)
class Block:
    kind: BlockKind
    lines: list[str] = field(default_factory=list)
    level: int = 0


StageFunc = Callable[[list[Block]], list[Block]]


@dataclass(frozen=True, slots=True)
class Stage:
    name: str
    apply: StageFunc


HEADING_RE = re.compile(r"^(#{1,3}) (.*)$")
STRONG_RE = re.compile(r"\*\*(.*?)\*\*")
EM_RE = re.compile(r"\*(.*?)\*")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
EMPTY_CONTENT_RE = re.compile(r"\s+|<br\s*/?>")
LIST_MARKER = "- "


def parse_lines(text: str) -> list[Block]:
    """Split *text* into one TEXT or BLANK block per line, HTML-escaped."""

    blocks: list[Block] = []
    for line in normalize_newlines(text).split("\n"):
        if not line.strip():
            blocks.append(Block(BlockKind.BLANK))
        else:
            blocks.append(Block(BlockKind.TEXT, [html.escape(line, quote=False)]))
    return blocks


def _map_lines(blocks: list[Block], func: Callable[[str], str]) -> list[Block]:
    return [Block(block.kind, [func(line) for line in block.lines], block.level) for block in blocks]


def mark_headings(blocks: list[Block]) -> list[Block]:
    result: list[Block] = []
    for block in blocks:
        match = HEADING_RE.match(block.lines[0]) if block.kind is BlockKind.TEXT else None
        if match:
            result.append(Block(BlockKind.HEADING, [match.group(2)], len(match.group(1))))
        else:
            result.append(block)
    return result


def _emphasize(line: str) -> str:
    line = STRONG_RE.sub(r"<strong>\1</strong>", line)
    return EM_RE.sub(r"<em>\1</em>", line)


def apply_emphasis(blocks: list[Block]) -> list[Block]:
    return _map_lines(blocks, _emphasize)


def _link(match: re.Match[str]) -> str:
    label, url = match.group(1), match.group(2).strip()
    return f'<a href="{url.replace(chr(34), "&quot;")}">{label}</a>'


def apply_links(blocks: list[Block]) -> list[Block]:
    return _map_lines(blocks, lambda line: LINK_RE.sub(_link, line))


def group_paragraphs(blocks: list[Block]) -> list[Block]:
    """Merge adjacent TEXT lines into paragraphs.

    Blank lines end the current paragraph, however many there are. Headings
    always stand alone, so nothing trails a closing heading tag.
    """

    result: list[Block] = []
    current: Block | None = None
    for block in blocks:
        if block.kind is BlockKind.TEXT:
            if current is None:
                current = Block(BlockKind.PARAGRAPH)
                result.append(current)
            current.lines.extend(block.lines)
            continue
        current = None
        if block.kind is not BlockKind.BLANK:
            result.append(block)
    return result


def _is_empty(block: Block) -> bool:
    return all(not EMPTY_CONTENT_RE.sub("", line) for line in block.lines)


def drop_empty_paragraphs(blocks: list[Block]) -> list[Block]:
    return [block for block in blocks if not (block.kind is BlockKind.PARAGRAPH and _is_empty(block))]


def extract_lists(blocks: list[Block]) -> list[Block]:
    """Split each maximal run of ``- `` lines out of its paragraph into a list."""

    result: list[Block] = []
    for block in blocks:
        if block.kind is not BlockKind.PARAGRAPH:
            result.append(block)
            continue
        run: Block | None = None
        for line in block.lines:
            # Trailing whitespace is already gone, so an empty item is a lone "-".
            is_item = line == LIST_MARKER.rstrip() or line.startswith(LIST_MARKER)
            kind = BlockKind.LIST if is_item else BlockKind.PARAGRAPH
            if run is None or run.kind is not kind:
                run = Block(kind)
                result.append(run)
            run.lines.append(line[len(LIST_MARKER):] if is_item else line)
    return result


DEFAULT_STAGES: tuple[Stage, ...] = (
    Stage("headings", mark_headings),
    Stage("emphasis", apply_emphasis),
    Stage("links", apply_links),
    Stage("paragraphs", group_paragraphs),
    Stage("cleanup", drop_empty_paragraphs),
    Stage("lists", extract_lists),
)


def serialize_block(block: Block) -> str:
    if block.kind is BlockKind.HEADING:
        return f"<h{block.level}>{block.lines[0]}</h{block.level}>"
    if block.kind is BlockKind.PARAGRAPH:
        return f"<p>{'<br>'.join(block.lines)}</p>"
    if block.kind is BlockKind.LIST:
        items = "".join(f"<li>{line}</li>" for line in block.lines)
        return f"<ul>{items}</ul>"
    raise ValueError(f"Block kind {block.kind.value} cannot be serialized")


class MarkdownPipeline:
    def __init__(self, stages: Sequence[Stage] = DEFAULT_STAGES) -> None:
        self._stages = tuple(stages)

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(stage.name for stage in self._stages)

    def run(self, text: str) -> list[Block]:
        if not isinstance(text, str):
            raise ConversionError("INVALID_INPUT", f"Expected markdown text, got {type(text).__name__}")
        blocks = parse_lines(text)
        for stage in self._stages:
            try:
                blocks = stage.apply(blocks)
            except Exception as exc:
                raise ConversionError(
                    "CONVERSION_FAILED", f"Failed to parse markdown in {stage.name} stage: {exc}"
                ) from exc
        return blocks

    def render(self, text: str) -> str:
        blocks = self.run(text)
        try:
            return "\n".join(serialize_block(block) for block in blocks)
        except ValueError as exc:
            raise ConversionError("CONVERSION_FAILED", f"Failed to parse markdown: {exc}") from exc


def render_markdown(text: str, pipeline: MarkdownPipeline | None = None) -> str:
    return (pipeline or MarkdownPipeline()).render(text)


__all__ = [
    "Block",
    "BlockKind",
    "ConversionError",
    "DEFAULT_STAGES",
    "MarkdownPipeline",
    "Stage",
    "apply_emphasis",
    "apply_links",
    "drop_empty_paragraphs",
    "extract_lists",
    "group_paragraphs",
    "mark_headings",
    "parse_lines",
    "render_markdown",
    "serialize_block",
]
