"""Ordered, non-overlapping substring search over the plain text of each block

Text and query are compared one grapheme cluster at a time: every cluster is
NFC-normalized and, for case-insensitive searches, case folded. Matches must
start and end on cluster boundaries, so offsets reported back are cluster
counts into the block's plain text.
"""

import logging
import unicodedata
from enum import Flag, auto
from typing import Optional

from mdcontent.core.models import SearchResult
from mdcontent.core.nodes import BlockNode
from mdcontent.core.sequence import BlockSequence, RenderFormat, render_blocks
from mdcontent.core.utils.snippet import DEFAULT_CONTEXT_LENGTH, snippet
from mdcontent.core.utils.text import graphemes


logger = logging.getLogger(__name__)

TURKIC_LANGUAGES = {"tr", "az"}
TURKIC_CASE_MAP = str.maketrans({"I": "ı", "İ": "i"})


class CompareOptions(Flag):
    """How query and text are compared"""
    NONE = 0
    CASE_INSENSITIVE = auto()


def _is_turkic(locale: Optional[str]) -> bool:
    """True for locale identifiers like 'tr', 'tr_TR', or 'az-Latn-AZ'."""
    if not locale:
        return False
    return locale.replace("-", "_").split("_")[0].lower() in TURKIC_LANGUAGES


def _fold(cluster: str, options: CompareOptions, turkic: bool) -> str:
    if CompareOptions.CASE_INSENSITIVE in options:
        if turkic:
            cluster = cluster.translate(TURKIC_CASE_MAP)
        cluster = cluster.casefold()
    return unicodedata.normalize("NFC", cluster)


def _fold_text(text: str, options: CompareOptions, turkic: bool) -> tuple[str, dict[int, int]]:
    """Return the folded text and a map from folded offsets at cluster boundaries to cluster indices."""
    parts = []
    boundaries = {0: 0}
    offset = 0
    for index, cluster in enumerate(graphemes(text), start=1):
        part = _fold(cluster, options, turkic)
        parts.append(part)
        offset += len(part)
        boundaries[offset] = index
    return "".join(parts), boundaries


def block_plain_text(block: BlockNode) -> str:
    """Plain text of a single block, without its trailing newline."""
    return render_blocks((block,), RenderFormat.plain_text)


def search_block(
    query: str,
    block: BlockNode,
    index: int,
    options: CompareOptions = CompareOptions.CASE_INSENSITIVE,
    locale: Optional[str] = None,
    context_length: int = DEFAULT_CONTEXT_LENGTH,
    ) -> list[SearchResult]:
    """Find every non-overlapping occurrence of an already-trimmed query in one block."""
    block_text = block_plain_text(block)
    if not block_text or not query:
        return []

    turkic = _is_turkic(locale)
    folded, boundaries = _fold_text(block_text, options, turkic)
    needle = "".join(_fold(c, options, turkic) for c in graphemes(query))

    matches: list[SearchResult] = []
    cursor = 0
    while (start := folded.find(needle, cursor)) != -1:
        end = start + len(needle)
        if start not in boundaries or end not in boundaries:
            # candidate splits a grapheme cluster
            cursor = start + 1
            continue

        match_range = (boundaries[start], boundaries[end])
        matches.append(SearchResult(
            block_index=index,
            block_text=block_text,
            match_range=match_range,
            snippet=snippet(block_text, match_range, context_length),
        ))
        cursor = end

    return matches


def search_blocks(
    blocks: BlockSequence,
    text: str,
    options: CompareOptions = CompareOptions.CASE_INSENSITIVE,
    locale: Optional[str] = None,
    context_length: int = DEFAULT_CONTEXT_LENGTH,
    ) -> list[SearchResult]:
    """Search every block in document order; empty or whitespace-only queries match nothing."""
    query = text.strip()
    if not query:
        return []

    results = [
        result
        for index, block in enumerate(blocks)
        for result in search_block(query, block, index, options, locale, context_length)
    ]
    logger.debug("search %r: %d match(es) in %d block(s)", query, len(results), len(blocks))
    return results
