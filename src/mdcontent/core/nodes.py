"""Block and inline node types with Markdown, plain text, and HTML renderers

Every node renders itself in three formats. Block renderings end with a single
newline (plain text of an empty block is empty); inline renderings never add
line terminators of their own. Container blocks expose their direct child
blocks through `children`.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from markdown_it.common.utils import escapeHtml


MD_ESCAPE_RE = re.compile(r'([\\`*_\[\]<~&])')
# Characters that open a block construct when they start a line.
BLOCK_MARKER_RE = re.compile(r'^( {0,3})([#>+=-])', re.MULTILINE)
ORDERED_MARKER_RE = re.compile(r'^( {0,3})([0-9]{1,9})([.)])', re.MULTILINE)
BULLET = "• "


def _escape_markdown(text: str) -> str:
    return MD_ESCAPE_RE.sub(r'\\\1', text)


def _escape_line_starts(markdown: str) -> str:
    markdown = BLOCK_MARKER_RE.sub(r'\1\\\2', markdown)
    return ORDERED_MARKER_RE.sub(r'\1\2\\\3', markdown)


class InlineNode:
    """A span of inline content inside a paragraph, heading, or table cell."""

    def render_markdown(self) -> str:
        raise NotImplementedError

    def render_plain_text(self) -> str:
        raise NotImplementedError

    def render_html(self) -> str:
        raise NotImplementedError


InlineLike = Union[str, InlineNode]


def _inlines(parts: Iterable[InlineLike]) -> tuple[InlineNode, ...]:
    """Coerce builder arguments into inline nodes; bare strings become Text."""
    return tuple(Text(p) if isinstance(p, str) else p for p in parts)


def _md(nodes: Iterable[InlineNode]) -> str:
    return "".join(n.render_markdown() for n in nodes)


def _plain(nodes: Iterable[InlineNode]) -> str:
    return "".join(n.render_plain_text() for n in nodes)


def _html(nodes: Iterable[InlineNode]) -> str:
    return "".join(n.render_html() for n in nodes)


@dataclass(frozen=True)
class Text(InlineNode):
    text: str

    def render_markdown(self) -> str:
        return _escape_markdown(self.text)

    def render_plain_text(self) -> str:
        return self.text

    def render_html(self) -> str:
        return escapeHtml(self.text)


@dataclass(frozen=True)
class Code(InlineNode):
    """Inline code span."""
    code: str

    def render_markdown(self) -> str:
        longest = max((len(run) for run in re.findall(r'`+', self.code)), default=0)
        fence = "`" * (longest + 1)
        pad = " " if self.code.startswith("`") or self.code.endswith("`") else ""
        return f"{fence}{pad}{self.code}{pad}{fence}"

    def render_plain_text(self) -> str:
        return self.code

    def render_html(self) -> str:
        return f"<code>{escapeHtml(self.code)}</code>"


@dataclass(frozen=True)
class SoftBreak(InlineNode):
    def render_markdown(self) -> str:
        return "\n"

    def render_plain_text(self) -> str:
        return " "

    def render_html(self) -> str:
        return "\n"


@dataclass(frozen=True)
class LineBreak(InlineNode):
    """Hard line break."""

    def render_markdown(self) -> str:
        return "\\\n"

    def render_plain_text(self) -> str:
        return "\n"

    def render_html(self) -> str:
        return "<br />\n"


@dataclass(frozen=True)
class InlineHTML(InlineNode):
    html: str

    def render_markdown(self) -> str:
        return self.html

    def render_plain_text(self) -> str:
        return ""

    def render_html(self) -> str:
        return self.html


@dataclass(frozen=True, init=False)
class _InlineContainer(InlineNode):
    content: tuple[InlineNode, ...]

    def __init__(self, *content: InlineLike):
        object.__setattr__(self, "content", _inlines(content))

    def render_plain_text(self) -> str:
        return _plain(self.content)


@dataclass(frozen=True, init=False)
class Emphasis(_InlineContainer):
    def render_markdown(self) -> str:
        return f"*{_md(self.content)}*"

    def render_html(self) -> str:
        return f"<em>{_html(self.content)}</em>"


@dataclass(frozen=True, init=False)
class Strong(_InlineContainer):
    def render_markdown(self) -> str:
        return f"**{_md(self.content)}**"

    def render_html(self) -> str:
        return f"<strong>{_html(self.content)}</strong>"


@dataclass(frozen=True, init=False)
class Strikethrough(_InlineContainer):
    def render_markdown(self) -> str:
        return f"~~{_md(self.content)}~~"

    def render_html(self) -> str:
        return f"<s>{_html(self.content)}</s>"


def _link_target(destination: str, title: Optional[str]) -> str:
    if " " in destination or not destination:
        destination = f"<{destination}>"
    if title:
        escaped = title.replace('"', '\\"')
        return f'({destination} "{escaped}")'
    return f"({destination})"


@dataclass(frozen=True, init=False)
class Link(InlineNode):
    destination: str
    content: tuple[InlineNode, ...]
    title: Optional[str]

    def __init__(self, destination: str, *content: InlineLike, title: Optional[str] = None):
        object.__setattr__(self, "destination", destination)
        object.__setattr__(self, "content", _inlines(content))
        object.__setattr__(self, "title", title)

    def render_markdown(self) -> str:
        return f"[{_md(self.content)}]{_link_target(self.destination, self.title)}"

    def render_plain_text(self) -> str:
        return _plain(self.content)

    def render_html(self) -> str:
        title = f' title="{escapeHtml(self.title)}"' if self.title else ""
        return f'<a href="{escapeHtml(self.destination)}"{title}>{_html(self.content)}</a>'


@dataclass(frozen=True, init=False)
class Image(InlineNode):
    source: str
    alt: tuple[InlineNode, ...]
    title: Optional[str]

    def __init__(self, source: str, *alt: InlineLike, title: Optional[str] = None):
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "alt", _inlines(alt))
        object.__setattr__(self, "title", title)

    def render_markdown(self) -> str:
        return f"![{_md(self.alt)}]{_link_target(self.source, self.title)}"

    def render_plain_text(self) -> str:
        return _plain(self.alt)

    def render_html(self) -> str:
        title = f' title="{escapeHtml(self.title)}"' if self.title else ""
        return f'<img src="{escapeHtml(self.source)}" alt="{escapeHtml(_plain(self.alt))}"{title} />'


class BlockNode:
    """A structural unit of a document."""

    @property
    def children(self) -> tuple["BlockNode", ...]:
        """Directly nested blocks; empty for leaf blocks."""
        return ()

    def render_markdown(self) -> str:
        raise NotImplementedError

    def render_plain_text(self) -> str:
        raise NotImplementedError

    def render_html(self) -> str:
        raise NotImplementedError


BlockLike = Union[str, BlockNode]


def _blocks(parts: Iterable[BlockLike]) -> tuple[BlockNode, ...]:
    """Coerce builder arguments into blocks; bare strings become paragraphs."""
    return tuple(Paragraph(p) if isinstance(p, str) else p for p in parts)


def join_markdown(blocks: Iterable[BlockNode], separator: str = "\n") -> str:
    """Render blocks as Markdown, separated by a blank line by default."""
    return separator.join(b.render_markdown() for b in blocks)


def _indent(text: str, first: str, rest: str) -> str:
    """Prefix the first line with `first` and every later non-empty line with `rest`."""
    lines = text.split("\n")
    out = [first + lines[0]]
    out.extend(rest + line if line else "" for line in lines[1:])
    return "\n".join(out)


@dataclass(frozen=True, init=False)
class Paragraph(BlockNode):
    content: tuple[InlineNode, ...]

    def __init__(self, *content: InlineLike):
        object.__setattr__(self, "content", _inlines(content))

    def render_markdown(self) -> str:
        return _escape_line_starts(_md(self.content)) + "\n"

    def render_plain_text(self) -> str:
        return _plain(self.content) + "\n"

    def render_html(self) -> str:
        return f"<p>{_html(self.content)}</p>\n"


@dataclass(frozen=True, init=False)
class Heading(BlockNode):
    level: int
    content: tuple[InlineNode, ...]

    def __init__(self, level: int, *content: InlineLike):
        if not 1 <= level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {level}")
        object.__setattr__(self, "level", level)
        object.__setattr__(self, "content", _inlines(content))

    def render_markdown(self) -> str:
        text = _escape_line_starts(_md(self.content))
        if text.endswith("#") and not text.endswith("\\#"):
            # a trailing run of # would read as a closing sequence
            text = text[:-1] + "\\#"
        return f"{'#' * self.level} {text}\n"

    def render_plain_text(self) -> str:
        return _plain(self.content) + "\n"

    def render_html(self) -> str:
        return f"<h{self.level}>{_html(self.content)}</h{self.level}>\n"


@dataclass(frozen=True, init=False)
class BlockQuote(BlockNode):
    blocks: tuple[BlockNode, ...]

    def __init__(self, *blocks: BlockLike):
        object.__setattr__(self, "blocks", _blocks(blocks))

    @property
    def children(self) -> tuple[BlockNode, ...]:
        return self.blocks

    def render_markdown(self) -> str:
        inner = join_markdown(self.blocks).rstrip("\n")
        lines = [f"> {line}" if line else ">" for line in inner.split("\n")]
        return "\n".join(lines) + "\n"

    def render_plain_text(self) -> str:
        return "".join(b.render_plain_text() for b in self.blocks)

    def render_html(self) -> str:
        return "<blockquote>\n" + "".join(b.render_html() for b in self.blocks) + "</blockquote>\n"


@dataclass(frozen=True, init=False)
class ListItem:
    """One entry of a bulleted or numbered list; holds blocks but is not a block itself."""
    blocks: tuple[BlockNode, ...]

    def __init__(self, *blocks: BlockLike):
        object.__setattr__(self, "blocks", _blocks(blocks))

    def render_markdown(self, marker: str, tight: bool) -> str:
        body = join_markdown(self.blocks, "" if tight else "\n").rstrip("\n")
        if not body:
            return marker.rstrip() + "\n"
        return _indent(body, marker, " " * len(marker)) + "\n"

    def render_plain_text(self, marker: str) -> str:
        body = "".join(b.render_plain_text() for b in self.blocks)
        return (marker + body) if body else marker.rstrip() + "\n"

    def render_html(self, tight: bool) -> str:
        if not tight:
            return "<li>\n" + "".join(b.render_html() for b in self.blocks) + "</li>\n"
        # tight items drop the <p> wrapper around their paragraphs
        parts = []
        for i, block in enumerate(self.blocks):
            if isinstance(block, Paragraph):
                parts.append(_html(block.content))
                if i + 1 < len(self.blocks):
                    parts.append("\n")
            else:
                parts.append(block.render_html())
        return "<li>" + "".join(parts) + "</li>\n"


def _items(parts: Iterable[Union[str, BlockNode, ListItem]]) -> tuple[ListItem, ...]:
    return tuple(p if isinstance(p, ListItem) else ListItem(p) for p in parts)


@dataclass(frozen=True, init=False)
class _ListBlock(BlockNode):
    items: tuple[ListItem, ...]
    tight: bool

    @property
    def children(self) -> tuple[BlockNode, ...]:
        return tuple(b for item in self.items for b in item.blocks)

    def markers(self) -> list[str]:
        raise NotImplementedError

    def render_markdown(self) -> str:
        separator = "" if self.tight else "\n"
        return separator.join(
            item.render_markdown(marker, self.tight)
            for item, marker in zip(self.items, self.markers())
        )

    def render_plain_text(self) -> str:
        return "".join(
            item.render_plain_text(marker)
            for item, marker in zip(self.items, self.plain_markers())
        )

    def plain_markers(self) -> list[str]:
        return self.markers()

    def _render_html(self, open_tag: str, close_tag: str) -> str:
        return open_tag + "".join(item.render_html(self.tight) for item in self.items) + close_tag


@dataclass(frozen=True, init=False)
class BulletedList(_ListBlock):
    def __init__(self, *items: Union[str, BlockNode, ListItem], tight: bool = True):
        object.__setattr__(self, "items", _items(items))
        object.__setattr__(self, "tight", tight)

    def markers(self) -> list[str]:
        return ["- "] * len(self.items)

    def plain_markers(self) -> list[str]:
        return [BULLET] * len(self.items)

    def render_html(self) -> str:
        return self._render_html("<ul>\n", "</ul>\n")


@dataclass(frozen=True, init=False)
class NumberedList(_ListBlock):
    start: int

    def __init__(self, *items: Union[str, BlockNode, ListItem], start: int = 1, tight: bool = True):
        object.__setattr__(self, "items", _items(items))
        object.__setattr__(self, "tight", tight)
        object.__setattr__(self, "start", start)

    def markers(self) -> list[str]:
        return [f"{self.start + i}. " for i in range(len(self.items))]

    def render_html(self) -> str:
        open_tag = "<ol>\n" if self.start == 1 else f'<ol start="{self.start}">\n'
        return self._render_html(open_tag, "</ol>\n")


def _with_newline(text: str) -> str:
    return text if not text or text.endswith("\n") else text + "\n"


@dataclass(frozen=True)
class CodeBlock(BlockNode):
    content: str
    fence_info: str = ""

    def render_markdown(self) -> str:
        longest = max((len(run) for run in re.findall(r'^`{3,}', self.content, re.MULTILINE)), default=2)
        fence = "`" * (longest + 1)
        return f"{fence}{self.fence_info}\n{_with_newline(self.content)}{fence}\n"

    def render_plain_text(self) -> str:
        return _with_newline(self.content)

    def render_html(self) -> str:
        lang = self.fence_info.split()[0] if self.fence_info.strip() else ""
        attr = f' class="language-{escapeHtml(lang)}"' if lang else ""
        return f"<pre><code{attr}>{escapeHtml(self.content)}</code></pre>\n"


@dataclass(frozen=True)
class HTMLBlock(BlockNode):
    html: str

    def render_markdown(self) -> str:
        return _with_newline(self.html)

    def render_plain_text(self) -> str:
        return ""

    def render_html(self) -> str:
        return _with_newline(self.html)


class TableAlignment(str, Enum):
    """Column alignment declared by a table's delimiter row"""
    none = "none"
    left = "left"
    center = "center"
    right = "right"


DELIMITERS = {
    TableAlignment.none: "---",
    TableAlignment.left: ":--",
    TableAlignment.center: ":-:",
    TableAlignment.right: "--:",
}


TableCell = tuple[InlineNode, ...]


@dataclass(frozen=True, init=False)
class Table(BlockNode):
    """A table whose first row is the header."""
    rows: tuple[tuple[TableCell, ...], ...]
    alignments: tuple[TableAlignment, ...]

    def __init__(self, rows: Iterable[Iterable], alignments: Iterable[TableAlignment] = ()):
        normalized = tuple(
            tuple(_inlines((cell,)) if isinstance(cell, (str, InlineNode)) else _inlines(cell) for cell in row)
            for row in rows
        )
        if not normalized:
            raise ValueError("Table requires at least a header row")
        width = len(normalized[0])
        aligns = tuple(TableAlignment(a) for a in alignments)
        aligns = (aligns + (TableAlignment.none,) * width)[:width]
        object.__setattr__(self, "rows", normalized)
        object.__setattr__(self, "alignments", aligns)

    @property
    def header(self) -> tuple[TableCell, ...]:
        return self.rows[0]

    @property
    def body(self) -> tuple[tuple[TableCell, ...], ...]:
        return self.rows[1:]

    def render_markdown(self) -> str:
        def row_md(row):
            return "| " + " | ".join(_md(cell).replace("|", "\\|") for cell in row) + " |"

        lines = [row_md(self.header), "| " + " | ".join(DELIMITERS[a] for a in self.alignments) + " |"]
        lines.extend(row_md(row) for row in self.body)
        return "\n".join(lines) + "\n"

    def render_plain_text(self) -> str:
        return "".join(" | ".join(_plain(cell) for cell in row) + "\n" for row in self.rows)

    def render_html(self) -> str:
        def row_html(row, tag):
            cells = []
            for cell, align in zip(row, self.alignments):
                style = "" if align == TableAlignment.none else f' style="text-align:{align.value}"'
                cells.append(f"<{tag}{style}>{_html(cell)}</{tag}>\n")
            return "<tr>\n" + "".join(cells) + "</tr>\n"

        html = "<table>\n<thead>\n" + row_html(self.header, "th") + "</thead>\n"
        if self.body:
            html += "<tbody>\n" + "".join(row_html(row, "td") for row in self.body) + "</tbody>\n"
        return html + "</table>\n"


@dataclass(frozen=True)
class ThematicBreak(BlockNode):
    def render_markdown(self) -> str:
        return "***\n"

    def render_plain_text(self) -> str:
        return ""

    def render_html(self) -> str:
        return "<hr />\n"
