"""Textual repairs applied to the assembled Markdown body.

Each pass is a pure ``str -> str`` function that is idempotent on its
own. ``normalize`` runs them in the order of ``PASSES``, repeating the
sequence until the text is stable.
"""

import re
from typing import Callable, Iterable

MAX_MERGE_ITERATIONS = 10

# Bound on full rounds of PASSES; realistic bodies settle within three.
MAX_NORMALIZE_ROUNDS = 10

# Characters a closing bold marker may touch without a separating space.
CLOSING_PUNCTUATION = ".,;:!?)]"

TRAILING_CITATION_PATTERN = re.compile(r"(?<=\S)(?:[ \t]+\d+)+[ \t]*$", re.MULTILINE)
INLINE_CITATION_PATTERN = re.compile(r"(?<=\S)(?:[ \t]+\d+)+(?=[ \t])")
PERIOD_CITATION_PATTERN = re.compile(r"\.[ \t]+(?:\d+[ \t]+)+")
ADJACENT_BOLD_PATTERN = re.compile(r"\*\*([^*\n]+)\*\*[ \t]?\*\*([^*\n]+)\*\*")
BOLD_SPAN_PATTERN = re.compile(r"\*\*([^*\n]*?)\*\*")

Pass = Callable[[str], str]


def strip_trailing_citations(markdown: str) -> str:
    """Remove digit groups left dangling at the end of a line."""
    return TRAILING_CITATION_PATTERN.sub("", markdown)


def strip_inline_citations(markdown: str) -> str:
    """Remove standalone digit groups between words."""
    return INLINE_CITATION_PATTERN.sub("", markdown)


def strip_period_citations(markdown: str) -> str:
    """Remove footnote numbers that follow a sentence end."""
    return PERIOD_CITATION_PATTERN.sub(". ", markdown)


def merge_bold_spans(markdown: str) -> str:
    """Join bold spans separated by at most one space or tab.

    Args:
        markdown: Markdown text.

    Returns:
        Text with ``**a** **b**`` and ``**a****b**`` collapsed to ``**a b**``.
    """
    for _ in range(MAX_MERGE_ITERATIONS):
        merged = ADJACENT_BOLD_PATTERN.sub(r"**\1 \2**", markdown)
        if merged == markdown:
            break
        markdown = merged
    return markdown


def _pad_bold_span(match: re.Match) -> str:
    content = match.group(1).strip()
    if not content:
        # Whitespace-only spans are dropped by remove_empty_bold.
        return match.group(0)

    source = match.string
    start, end = match.span()
    span = f"**{content}**"
    if start > 0 and not source[start - 1].isspace() and source[start - 1] != "*":
        span = " " + span
    if end < len(source):
        following = source[end]
        if not following.isspace() and following != "*" and following not in CLOSING_PUNCTUATION:
            span = span + " "
    return span


def space_bold_markers(markdown: str) -> str:
    """Trim bold span contents and separate the markers from adjacent words.

    Args:
        markdown: Markdown text.

    Returns:
        Text where ``word**bold**word`` reads ``word **bold** word``.
    """
    return BOLD_SPAN_PATTERN.sub(_pad_bold_span, markdown)


def _drop_blank_span(match: re.Match) -> str:
    return match.group(0) if match.group(1).strip() else ""


def remove_empty_bold(markdown: str) -> str:
    """Drop bold spans with nothing but whitespace inside.

    Removing a span can pair up the markers around it into a new empty
    span, so the removal repeats until nothing changes. Every round
    shortens the text, which bounds the loop.

    Args:
        markdown: Markdown text.

    Returns:
        Text without ``****`` or ``** **`` spans.
    """
    while True:
        cleaned = BOLD_SPAN_PATTERN.sub(_drop_blank_span, markdown)
        if cleaned == markdown:
            return cleaned
        markdown = cleaned


def collapse_whitespace(markdown: str) -> str:
    """Collapse runs of spaces to one and runs of four or more newlines to two."""
    markdown = re.sub(r" {2,}", " ", markdown)
    return re.sub(r"\n{4,}", "\n\n", markdown)


CITATION_PASSES: tuple[Pass, ...] = (
    strip_trailing_citations,
    strip_inline_citations,
    strip_period_citations,
)

FORMATTING_PASSES: tuple[Pass, ...] = (
    merge_bold_spans,
    space_bold_markers,
    remove_empty_bold,
    collapse_whitespace,
)

PASSES: tuple[Pass, ...] = CITATION_PASSES + FORMATTING_PASSES


def normalize(markdown: str, passes: Iterable[Pass] = PASSES) -> str:
    """Apply the repair passes in order until the text stops changing.

    A later pass can expose work for an earlier one: spacing a bold
    marker away from ``5`` in ``**Table**5`` turns the digits into a
    standalone group for the citation passes. Rounds repeat, at most
    ``MAX_NORMALIZE_ROUNDS`` times, so the result is stable under
    another call.

    Args:
        markdown: Raw Markdown body.
        passes: Passes to run; defaults to all of them.

    Returns:
        Cleaned Markdown.
    """
    passes = tuple(passes)
    for _ in range(MAX_NORMALIZE_ROUNDS):
        repaired = markdown
        for repair in passes:
            repaired = repair(repaired)
        if repaired == markdown:
            break
        markdown = repaired
    return markdown
