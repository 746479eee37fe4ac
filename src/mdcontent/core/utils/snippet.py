"""Context window extraction around a match"""

from mdcontent.core.utils.text import graphemes


ELLIPSIS = "…"
DEFAULT_CONTEXT_LENGTH = 32


def snippet(full_text: str, match_range: tuple[int, int], context_length: int = DEFAULT_CONTEXT_LENGTH) -> str:
    """Return the text around match_range, marked with an ellipsis on each truncated side.

    match_range and context_length are counted in grapheme clusters. The window
    never reaches past either end of full_text.
    """
    if not full_text:
        return ""

    clusters = graphemes(full_text)
    context = max(0, context_length)
    lower = max(0, match_range[0] - context)
    upper = min(len(clusters), match_range[1] + context)

    result = "".join(clusters[lower:upper])
    if lower > 0:
        result = ELLIPSIS + result
    if upper < len(clusters):
        result += ELLIPSIS
    return result
