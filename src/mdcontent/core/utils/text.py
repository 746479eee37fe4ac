"""Grapheme cluster segmentation and offset conversion"""

import regex


GRAPHEME_RE = regex.compile(r'\X')


def graphemes(text: str) -> list[str]:
    """Split text into extended grapheme clusters."""
    return GRAPHEME_RE.findall(text)


def grapheme_boundaries(text: str) -> list[int]:
    """Return code point offsets of every cluster boundary, including 0 and len(text).

    The cluster index of a boundary is its position in the returned list.
    """
    return [0] + [m.end() for m in GRAPHEME_RE.finditer(text)]


def codepoint_span(text: str, lower: int, upper: int) -> tuple[int, int] | None:
    """Convert a cluster range into code point slice bounds, or None if out of range."""
    bounds = grapheme_boundaries(text)
    if lower < 0 or upper > len(bounds) - 1 or lower > upper:
        return None
    return bounds[lower], bounds[upper]
