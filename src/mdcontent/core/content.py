"""The public Markdown content value: construction, rendering, and search"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from mdcontent.core.nodes import BlockNode
from mdcontent.core.parse import DEFAULT_PARSER_CONFIG, blocks_from_tokens, parse_file, parse_markdown
from mdcontent.core.search import CompareOptions, search_blocks
from mdcontent.core.sequence import BlockSequence, RenderFormat, flatten_children, render_blocks
from mdcontent.core.models import ParsedDoc, SearchResult
from mdcontent.core.utils.snippet import DEFAULT_CONTEXT_LENGTH


@dataclass(frozen=True)
class MarkdownContent:
    """An immutable document made of an ordered sequence of blocks.

    Build one from Markdown text with `from_markdown`, from a file with
    `from_file`, or from nodes, strings and other content values with `build`.
    Two values are equal when their blocks are equal.
    """
    blocks: BlockSequence = ()

    def __post_init__(self):
        object.__setattr__(self, "blocks", tuple(self.blocks))

    @classmethod
    def from_markdown(cls, markdown: str, parser_config: str = DEFAULT_PARSER_CONFIG) -> "MarkdownContent":
        """Parse Markdown-formatted text into a content value."""
        return cls(parse_markdown(markdown, parser_config))

    @classmethod
    def from_file(cls, path: Path, parser_config: str = DEFAULT_PARSER_CONFIG) -> "MarkdownContent":
        """Parse a Markdown file, ignoring any YAML frontmatter."""
        return cls.from_parsed(parse_file(Path(path), parser_config))

    @classmethod
    def from_parsed(cls, parsed: ParsedDoc) -> "MarkdownContent":
        """Build content from the token stream of a parsed file; frontmatter stays on `parsed`."""
        return cls(blocks_from_tokens(parsed.tokens))

    @classmethod
    def from_block(cls, block: BlockNode) -> "MarkdownContent":
        return cls((block,))

    @classmethod
    def from_components(cls, *components: Union["MarkdownContent", BlockNode]) -> "MarkdownContent":
        """Concatenate the blocks of content values and block nodes in argument order."""
        blocks: list[BlockNode] = []
        for component in components:
            if isinstance(component, MarkdownContent):
                blocks.extend(component.blocks)
            elif isinstance(component, BlockNode):
                blocks.append(component)
            else:
                raise TypeError(f"Expected MarkdownContent or BlockNode, got {type(component).__name__}")
        return cls(tuple(blocks))

    @classmethod
    def build(
        cls,
        *components: Union[str, "MarkdownContent", BlockNode],
        parser_config: str = DEFAULT_PARSER_CONFIG,
        ) -> "MarkdownContent":
        """Assemble content from a mix of Markdown strings, blocks, and content values."""
        return cls.from_components(*(
            cls.from_markdown(c, parser_config) if isinstance(c, str) else c
            for c in components
        ))

    def __len__(self) -> int:
        return len(self.blocks)

    def __add__(self, other: "MarkdownContent") -> "MarkdownContent":
        if not isinstance(other, MarkdownContent):
            return NotImplemented
        return MarkdownContent(self.blocks + other.blocks)

    @property
    def child_content(self) -> Optional["MarkdownContent"]:
        """Content made of the children of every container block, or None if there are none.

        Use it to step into blockquotes and lists.
        """
        children = flatten_children(self.blocks)
        return MarkdownContent(children) if children is not None else None

    def render(self, fmt: RenderFormat) -> str:
        return render_blocks(self.blocks, RenderFormat(fmt))

    def render_markdown(self) -> str:
        return self.render(RenderFormat.markdown)

    def render_plain_text(self) -> str:
        return self.render(RenderFormat.plain_text)

    def render_html(self) -> str:
        return self.render(RenderFormat.html)

    def search(
        self,
        text: str,
        options: CompareOptions = CompareOptions.CASE_INSENSITIVE,
        locale: Optional[str] = None,
        context_length: int = DEFAULT_CONTEXT_LENGTH,
        ) -> list[SearchResult]:
        """Find every occurrence of text, ordered by block and then by position.

        Empty or whitespace-only queries return no results. Each result's
        `scroll_id` identifies the block that contains the match.
        """
        return search_blocks(self.blocks, text, options, locale, context_length)
