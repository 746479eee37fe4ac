"""Markdown content model with multi-format rendering and snippet search"""

from mdcontent.core.content import MarkdownContent
from mdcontent.core.models import SearchResult
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
from mdcontent.core.search import CompareOptions
from mdcontent.core.sequence import RenderFormat
from mdcontent.core.utils.snippet import snippet


__all__ = [
    "BlockNode", "BlockQuote", "BulletedList", "Code", "CodeBlock", "CompareOptions",
    "Emphasis", "Heading", "HTMLBlock", "Image", "InlineHTML", "InlineNode", "LineBreak",
    "Link", "ListItem", "MarkdownContent", "NumberedList", "Paragraph", "RenderFormat",
    "SearchResult", "SoftBreak", "Strikethrough", "Strong", "Table", "TableAlignment",
    "Text", "ThematicBreak", "snippet",
]
