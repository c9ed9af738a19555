"""Font classification, line assembly and per-line rendering of glyph runs."""

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

logger = logging.getLogger(__name__)

# Runs smaller than this that hold only digits are treated as footnote markers.
CITATION_MAX_FONT_SIZE = 10.0

BOLD_NAME_MARKERS = ("bold", "heavy", "black")

CITATION_PATTERN = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class GlyphRun:
    """A span of text sharing one font and one baseline position.

    Coordinates are in PDF user space: ``y`` grows upward, so the top of
    the page has the largest ``y``.
    """

    text: str
    x: float
    y: float
    font_size: float
    font_name: str = ""


@dataclass(frozen=True)
class AnnotatedRun:
    """A glyph run with its emphasis and citation flags."""

    run: GlyphRun
    is_bold: bool
    is_citation: bool

    @property
    def text(self) -> str:
        return self.run.text


@dataclass(frozen=True)
class Line:
    """Runs sharing a rounded baseline, ordered left to right."""

    y: int
    runs: tuple[GlyphRun, ...] = ()


@dataclass(frozen=True)
class FontProfile:
    """Occurrence count of every font name in a document."""

    counts: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_runs(cls, runs: Iterable[GlyphRun]) -> "FontProfile":
        """Count font names over all runs of a document.

        Args:
            runs: Glyph runs of every page, in page order.

        Returns:
            FontProfile whose counts keep first-seen order.
        """
        counts = Counter(run.font_name for run in runs)
        profile = cls(counts=dict(counts))
        if profile.counts:
            logger.debug(
                "Font analysis: %s",
                ", ".join(f"{name}: {count}" for name, count in profile.ranked()),
            )
            logger.debug("Regular font: %s", profile.regular_font)
        return profile

    def ranked(self) -> list[tuple[str, int]]:
        """Return fonts by descending count; ties keep first-seen order."""
        return sorted(self.counts.items(), key=lambda item: item[1], reverse=True)

    @property
    def regular_font(self) -> str:
        """The most frequent font name, or an empty string for no runs."""
        if not self.counts:
            return ""
        # max() returns the first maximal item, so ties go to the font seen first.
        return max(self.counts, key=self.counts.__getitem__)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def assemble_lines(runs: Iterable[GlyphRun]) -> tuple[Line, ...]:
    """Group the runs of one page into lines in reading order.

    Runs whose baselines round to the same integer share a line, which
    absorbs sub-pixel jitter between spans of one visual line. Two
    distinct lines that round to the same baseline are merged.

    Args:
        runs: Glyph runs of a single page, in any order.

    Returns:
        Lines sorted top to bottom, each with runs sorted left to right.
    """
    buckets: dict[int, list[GlyphRun]] = {}
    for run in runs:
        buckets.setdefault(round_half_away(run.y), []).append(run)

    return tuple(
        Line(y=y, runs=tuple(sorted(buckets[y], key=lambda run: run.x)))
        for y in sorted(buckets, reverse=True)
    )


def is_bold_font(font_name: str, regular_font: str) -> bool:
    """Check whether a font name marks emphasized text.

    Args:
        font_name: Font name of the run.
        regular_font: The document's most frequent font.

    Returns:
        True if the name signals weight or differs from the regular font.
    """
    lowered = font_name.lower()
    if any(marker in lowered for marker in BOLD_NAME_MARKERS):
        return True
    return font_name != "" and font_name != regular_font


def is_citation_run(run: GlyphRun) -> bool:
    """Check whether a run is a small, purely numeric footnote marker."""
    return bool(CITATION_PATTERN.match(run.text.strip())) and run.font_size < CITATION_MAX_FONT_SIZE


def annotate_run(run: GlyphRun, regular_font: str) -> AnnotatedRun:
    """Tag one run with its bold and citation flags."""
    return AnnotatedRun(
        run=run,
        is_bold=is_bold_font(run.font_name, regular_font),
        is_citation=is_citation_run(run),
    )


def annotate_line(line: Line, regular_font: str) -> tuple[AnnotatedRun, ...]:
    """Tag every run of a line with its bold and citation flags."""
    return tuple(annotate_run(run, regular_font) for run in line.runs)


def render_line(runs: Iterable[AnnotatedRun], emphasize: bool = True, skip_citations: bool = True) -> str:
    """Concatenate annotated runs into the text of one line.

    Adjacent bold runs are left as separate spans; merging them happens
    during normalization.

    Args:
        runs: Annotated runs in left-to-right order.
        emphasize: Wrap bold runs in ``**`` markers.
        skip_citations: Drop citation runs entirely.

    Returns:
        The rendered line text.
    """
    parts = []
    for annotated in runs:
        if skip_citations and annotated.is_citation:
            continue
        if emphasize and annotated.is_bold:
            parts.append(f"**{annotated.text}**")
        else:
            parts.append(annotated.text)
    return "".join(parts)
