"""
Result presenter for grounded search output.

The search prompt asks the model for markdown shaped like

    # Group: Remote Roles
    **Summary**: strong remote demand
    *   Backend Engineer at Acme - Remote ([Apply](https://acme.example/jobs/1))

but nothing enforces it. Parsing is best effort: anything that does not look
like a group degrades to headings and paragraphs, and no input raises.
"""

import re
from collections.abc import Iterable, Iterator
from typing import Literal, Union

from pydantic import BaseModel, Field

GROUP_HEADER_RE = re.compile(r"^[ \t]*#{1,6}[ \t]*Group[ \t]*:[ \t]*(.*?)[ \t]*$", re.IGNORECASE | re.MULTILINE)
SUMMARY_RE = re.compile(r"^\**\s*Summary\s*\**\s*:\s*\**\s*(.*?)\s*$", re.IGNORECASE)
BULLET_RE = re.compile(r"^(?:[*\-•]|\d+[.)])\s+(.*)$")
HEADING_RE = re.compile(r"^#{1,6}\s*(.*)$")
LINK_RE = re.compile(r"\[([^\]]+)\]\(\s*([^)\s]+)\s*\)|(https?://[^\s<>()\[\]]+)")

TRAILING_PUNCTUATION = ".,;:!?'\""
BARE_LINK_LABEL = "link"


class TextSegment(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class LinkSegment(BaseModel):
    kind: Literal["link"] = "link"
    label: str
    url: str


Segment = Union[TextSegment, LinkSegment]


class HeadingBlock(BaseModel):
    kind: Literal["heading"] = "heading"
    text: str


class ParagraphBlock(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    segments: list[Segment]
    bullet: bool = False


class GroupBlock(BaseModel):
    kind: Literal["group"] = "group"
    title: str
    summary: list[Segment] | None = None
    items: list[list[Segment]] = Field(default_factory=list)
    notes: list[list[Segment]] = Field(default_factory=list)


Block = Union[GroupBlock, HeadingBlock, ParagraphBlock]


def _is_web_url(url: str) -> bool:
    return url.lower().startswith(("http://", "https://"))


def split_links(line: str) -> list[Segment]:
    """
    Split a line into plain text and link segments.

    Recognizes markdown links `[label](url)` and bare http(s) URLs. Text
    around the links is kept verbatim. Markdown links pointing anywhere but
    http(s) stay plain text.
    """
    segments: list[Segment] = []
    buffer = ""
    last = 0

    for match in LINK_RE.finditer(line):
        buffer += line[last:match.start()]
        last = match.end()

        label, url, bare = match.group(1), match.group(2), match.group(3)
        if bare:
            stripped = bare.rstrip(TRAILING_PUNCTUATION)
            tail = bare[len(stripped):]
            if buffer:
                segments.append(TextSegment(text=buffer))
            segments.append(LinkSegment(label=BARE_LINK_LABEL, url=stripped))
            buffer = tail
        elif _is_web_url(url):
            if buffer:
                segments.append(TextSegment(text=buffer))
            segments.append(LinkSegment(label=label.strip(), url=url))
            buffer = ""
        else:
            buffer += match.group(0)

    buffer += line[last:]
    if buffer:
        segments.append(TextSegment(text=buffer))
    return segments


def _clean_title(raw: str) -> str:
    return raw.strip().strip("*[]\"'").strip()


def _plain_blocks(lines: Iterable[str]) -> Iterator[Block]:
    """Fallback rendering: headings and paragraphs, one per non-empty line."""
    for line in lines:
        clean = line.strip()
        if not clean:
            continue

        if len(clean) > 4 and clean.startswith("**") and clean.endswith("**"):
            yield HeadingBlock(text=clean.replace("**", "").strip())
            continue

        heading = HEADING_RE.match(clean)
        if heading:
            text = heading.group(1).replace("**", "").strip()
            if text:
                yield HeadingBlock(text=text)
            continue

        bullet = BULLET_RE.match(clean)
        content = bullet.group(1) if bullet else clean
        yield ParagraphBlock(segments=split_links(content), bullet=bool(bullet))


def _group_block(title: str, body: str) -> GroupBlock:
    group = GroupBlock(title=title)
    for line in body.splitlines():
        clean = line.strip()
        if not clean:
            continue

        summary = SUMMARY_RE.match(clean)
        if summary and group.summary is None:
            group.summary = split_links(summary.group(1).rstrip("*").strip())
            continue

        bullet = BULLET_RE.match(clean)
        if bullet:
            group.items.append(split_links(bullet.group(1).strip()))
        else:
            group.notes.append(split_links(clean))
    return group


def iter_blocks(text: str | None) -> Iterator[Block]:
    """
    Lazily turn search output into presentation blocks.

    Text is split at every "# Group:" header. Each group yields a GroupBlock
    with its title, optional summary, bullet items and leftover lines as notes.
    Text before the first group, and groups without a usable title, fall back
    to headings and paragraphs.
    """
    text = text if isinstance(text, str) else ("" if text is None else str(text))
    headers = list(GROUP_HEADER_RE.finditer(text))

    preamble_end = headers[0].start() if headers else len(text)
    yield from _plain_blocks(text[:preamble_end].splitlines())

    for index, header in enumerate(headers):
        body_end = headers[index + 1].start() if index + 1 < len(headers) else len(text)
        body = text[header.end():body_end]
        title = _clean_title(header.group(1))
        if title:
            yield _group_block(title, body)
        else:
            yield from _plain_blocks(body.splitlines())


def parse_search_text(text: str | None) -> list[Block]:
    """Parse search output into a list of presentation blocks."""
    return list(iter_blocks(text))


def _render_segments(segments: list[Segment]) -> str:
    parts = []
    for segment in segments:
        if isinstance(segment, LinkSegment):
            parts.append(f"{segment.label} <{segment.url}>")
        else:
            parts.append(segment.text)
    return "".join(parts)


def render_text(blocks: Iterable[Block]) -> str:
    """Render blocks for a terminal."""
    lines: list[str] = []
    for block in blocks:
        if isinstance(block, GroupBlock):
            lines.append("")
            lines.append(f"== {block.title} ==")
            if block.summary:
                lines.append(f"  {_render_segments(block.summary)}")
            for note in block.notes:
                lines.append(f"  {_render_segments(note)}")
            for item in block.items:
                lines.append(f"  • {_render_segments(item)}")
        elif isinstance(block, HeadingBlock):
            lines.append("")
            lines.append(block.text.upper())
        else:
            prefix = "• " if block.bullet else ""
            lines.append(f"{prefix}{_render_segments(block.segments)}")
    return "\n".join(lines).strip("\n")
