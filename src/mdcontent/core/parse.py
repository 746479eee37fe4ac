"""Frontmatter extraction, markdown-it tokenization, and token-to-node conversion"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt

from mdcontent.core.models import ParsedDoc
from mdcontent.core.nodes import (
    BlockNode,
    BlockQuote,
    BulletedList,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    HTMLBlock,
    Image,
    InlineHTML,
    InlineNode,
    LineBreak,
    Link,
    ListItem,
    NumberedList,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    TableAlignment,
    Text,
    ThematicBreak,
)


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
DEFAULT_PARSER_CONFIG = 'gfm-like'

INLINE_CONTAINERS = {
    'em_open':     ('em_close', Emphasis),
    'strong_open': ('strong_close', Strong),
    's_open':      ('s_close', Strikethrough),
}


@lru_cache(maxsize=None)
def make_parser(preset: str = DEFAULT_PARSER_CONFIG) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def build_frontmatter(frontmatter: dict[str, Any]) -> str:
    """Return a YAML frontmatter block for prepending to a body, or "" when empty."""
    if not frontmatter:
        return ""
    header = yaml.dump(frontmatter, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n"


def _append_text(nodes: list[InlineNode], text: str) -> None:
    """Append text, merging with a preceding Text node."""
    if not text:
        return
    if nodes and isinstance(nodes[-1], Text):
        nodes[-1] = Text(nodes[-1].text + text)
    else:
        nodes.append(Text(text))


def _parse_inlines(tokens: list, i: int = 0, close_type: Optional[str] = None) -> tuple[list[InlineNode], int]:
    """Convert inline child tokens up to close_type; returns (nodes, index after close)."""
    nodes: list[InlineNode] = []
    while i < len(tokens):
        tok = tokens[i]
        if tok.type == close_type:
            return nodes, i + 1

        if tok.type in INLINE_CONTAINERS:
            close, node_type = INLINE_CONTAINERS[tok.type]
            content, i = _parse_inlines(tokens, i + 1, close)
            nodes.append(node_type(*content))
            continue
        if tok.type == 'link_open':
            content, i = _parse_inlines(tokens, i + 1, 'link_close')
            nodes.append(Link(tok.attrGet('href') or "", *content, title=tok.attrGet('title') or None))
            continue

        if tok.type == 'code_inline':
            nodes.append(Code(tok.content))
        elif tok.type == 'softbreak':
            nodes.append(SoftBreak())
        elif tok.type == 'hardbreak':
            nodes.append(LineBreak())
        elif tok.type == 'html_inline':
            nodes.append(InlineHTML(tok.content))
        elif tok.type == 'image':
            alt, _ = _parse_inlines(tok.children or [])
            nodes.append(Image(tok.attrGet('src') or "", *alt, title=tok.attrGet('title') or None))
        else:
            _append_text(nodes, tok.content)
        i += 1
    return nodes, i


def _inline_content(token) -> list[InlineNode]:
    nodes, _ = _parse_inlines(token.children or [])
    return nodes


def _heading_level(token) -> int:
    """Extract heading level (1-6) from a heading_open token tag."""
    return int(token.tag[1:])


def _alignment(token) -> TableAlignment:
    style = token.attrGet('style') or ""
    if style.startswith("text-align:"):
        return TableAlignment(style.split(":", 1)[1])
    return TableAlignment.none


def _is_tight(tokens: list, start: int, end: int) -> bool:
    """A list is tight when markdown-it hides the paragraphs of its items."""
    level = tokens[start].level
    for tok in tokens[start + 1:end]:
        if tok.type == 'paragraph_open' and tok.level == level + 2:
            return tok.hidden
    return True


def _parse_items(tokens: list, i: int, close_type: str) -> tuple[list[ListItem], int]:
    items: list[ListItem] = []
    while tokens[i].type != close_type:
        blocks, i = _parse_blocks(tokens, i + 1, 'list_item_close')
        items.append(ListItem(*blocks))
    return items, i + 1


def _parse_table(tokens: list, i: int) -> tuple[Table, int]:
    rows: list[list] = []
    alignments: list[TableAlignment] = []
    i += 1
    while tokens[i].type != 'table_close':
        tok = tokens[i]
        if tok.type == 'tr_open':
            rows.append([])
        elif tok.type in ('th_open', 'td_open'):
            rows[-1].append(_inline_content(tokens[i + 1]))
            if tok.type == 'th_open':
                alignments.append(_alignment(tok))
        i += 1
    return Table(rows, alignments), i + 1


def _parse_block(tokens: list, i: int) -> tuple[Optional[BlockNode], int]:
    """Convert the block starting at tokens[i]; returns (block, index after it)."""
    tok = tokens[i]

    if tok.type == 'paragraph_open':
        return Paragraph(*_inline_content(tokens[i + 1])), i + 3
    if tok.type == 'heading_open':
        return Heading(_heading_level(tok), *_inline_content(tokens[i + 1])), i + 3
    if tok.type == 'blockquote_open':
        children, end = _parse_blocks(tokens, i + 1, 'blockquote_close')
        return BlockQuote(*children), end
    if tok.type == 'bullet_list_open':
        items, end = _parse_items(tokens, i + 1, 'bullet_list_close')
        return BulletedList(*items, tight=_is_tight(tokens, i, end)), end
    if tok.type == 'ordered_list_open':
        items, end = _parse_items(tokens, i + 1, 'ordered_list_close')
        start = int(tok.attrGet('start') or 1)
        return NumberedList(*items, start=start, tight=_is_tight(tokens, i, end)), end
    if tok.type == 'fence':
        return CodeBlock(tok.content, tok.info.strip()), i + 1
    if tok.type == 'code_block':
        return CodeBlock(tok.content), i + 1
    if tok.type == 'html_block':
        return HTMLBlock(tok.content), i + 1
    if tok.type == 'hr':
        return ThematicBreak(), i + 1
    if tok.type == 'table_open':
        return _parse_table(tokens, i)

    logger.debug("skipping unsupported token %s", tok.type)
    return None, i + 1


def _parse_blocks(tokens: list, i: int, close_type: Optional[str] = None) -> tuple[list[BlockNode], int]:
    """Convert sibling blocks until close_type; returns (blocks, index after close)."""
    blocks: list[BlockNode] = []
    while i < len(tokens):
        if tokens[i].type == close_type:
            return blocks, i + 1
        block, i = _parse_block(tokens, i)
        if block is not None:
            blocks.append(block)
    return blocks, i


def blocks_from_tokens(tokens: list) -> tuple[BlockNode, ...]:
    """Convert a markdown-it block token stream into a tuple of block nodes."""
    blocks, _ = _parse_blocks(tokens, 0)
    return tuple(blocks)


def parse_markdown(text: str, parser_config: str = DEFAULT_PARSER_CONFIG) -> tuple[BlockNode, ...]:
    """Parse Markdown-formatted text into block nodes."""
    return blocks_from_tokens(make_parser(parser_config).parse(text))


def parse_file(path: Path, parser_config: str = DEFAULT_PARSER_CONFIG) -> ParsedDoc:
    """Parse a single markdown file into a ParsedDoc with token stream."""
    raw = path.read_text(encoding='utf-8')
    frontmatter, body = strip_frontmatter(raw)
    tokens = make_parser(parser_config).parse(body)
    logger.debug("parsed %s: %d token(s)", path, len(tokens))
    return ParsedDoc(path=path, frontmatter=frontmatter, tokens=tokens)
