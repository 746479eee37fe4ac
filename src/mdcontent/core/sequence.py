"""Render dispatch and container flattening over an ordered tuple of blocks"""

from enum import Enum
from typing import Iterable, Optional

from mdcontent.core.nodes import BlockNode


BlockSequence = tuple[BlockNode, ...]


class RenderFormat(str, Enum):
    """Output projections every block can produce"""
    markdown = "markdown"
    plain_text = "text"
    html = "html"


def _render_block(block: BlockNode, fmt: RenderFormat) -> str:
    if fmt == RenderFormat.markdown:
        return block.render_markdown()
    if fmt == RenderFormat.plain_text:
        return block.render_plain_text()
    return block.render_html()


def render_blocks(blocks: BlockSequence, fmt: RenderFormat) -> str:
    """Render blocks in order; markdown and plain text lose exactly one trailing newline."""
    if fmt == RenderFormat.markdown:
        # blank line between blocks
        result = "\n".join(_render_block(b, fmt) for b in blocks)
    else:
        result = "".join(_render_block(b, fmt) for b in blocks)
    if fmt != RenderFormat.html and result.endswith("\n"):
        result = result[:-1]
    return result


def flatten_children(blocks: Iterable[BlockNode]) -> Optional[BlockSequence]:
    """Concatenate the direct children of every block, or None if there are none."""
    children = tuple(child for block in blocks for child in block.children)
    return children or None
