"""Data models for parsed documents and search results"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from mdcontent.core.utils.text import codepoint_span


class SearchResult(BaseModel):
    """A single match found by searching a content value.

    `match_range` is a half-open (lower, upper) pair counted in grapheme
    clusters of `block_text`, not code points or bytes.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    block_index: int                # index of the block holding the match
    block_text: str                 # plain text of that block at search time
    match_range: tuple[int, int]
    snippet: str

    @property
    def scroll_id(self) -> int:
        """Handle for scrolling a view to the block that contains the match."""
        return self.block_index

    @property
    def range_in_block_text(self) -> Optional[tuple[int, int]]:
        """Code point bounds for slicing block_text, or None if match_range is out of range."""
        return codepoint_span(self.block_text, *self.match_range)

    @property
    def matched_text(self) -> str:
        span = self.range_in_block_text
        if span is None:
            return ""
        start, end = span
        return self.block_text[start:end]


@dataclass
class ParsedDoc:
    """Internal parse result carrying markdown-it tokens; not persisted."""
    path:        Path
    frontmatter: dict[str, Any]
    tokens:      list         # markdown-it Token objects
