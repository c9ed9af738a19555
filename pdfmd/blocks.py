"""Classification of rendered lines into Markdown blocks."""

import re
from dataclasses import dataclass
from typing import Iterable

# Glyphs that mark a bullet wherever they appear in a line.
INLINE_BULLETS = "•●○■□▪▫✓✗◆◇★☆➤➢⮞"

# Dashes only mark a bullet at the start of a line.
DASH_BULLETS = "-–—"

INLINE_BULLET_PATTERN = re.compile(f"([{INLINE_BULLETS}])")
BULLET_PATTERN = re.compile(f"^([{INLINE_BULLETS}]+|[{DASH_BULLETS}])\\s+(.+)$", re.DOTALL)
NUMBERED_PATTERN = re.compile(r"^(\d+[.)]\s+|[a-z][.)]\s+|[ivxlcdm]+[.)]\s+)(.+)$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class Block:
    """A classified unit of line text."""

    text: str = ""

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Paragraph(Block):
    pass


@dataclass(frozen=True)
class BulletItem(Block):
    def render(self) -> str:
        return f"- {self.text}"


@dataclass(frozen=True)
class NumberedItem(Block):
    # Items always render as "1."; Markdown renderers number them in order.
    def render(self) -> str:
        return f"1. {self.text}"


@dataclass(frozen=True)
class Blank(Block):
    def render(self) -> str:
        return ""


def _split_inline_bullets(text: str, in_list: bool) -> tuple[list[Block], bool]:
    """Split a line that holds bullet glyphs into a paragraph and items.

    Args:
        text: Stripped line text containing at least one inline bullet.
        in_list: Whether a list is open before this line.

    Returns:
        Tuple of emitted blocks and the updated list flag.
    """
    # re.split with a capturing group alternates text and glyphs.
    parts = INLINE_BULLET_PATTERN.split(text)
    blocks: list[Block] = []

    leading = parts[0].strip()
    if leading:
        if in_list:
            blocks.append(Blank())
            in_list = False
        blocks.append(Paragraph(leading))

    for part in parts[2::2]:
        item = part.strip()
        if item:
            blocks.append(BulletItem(item))
            in_list = True

    return blocks, in_list


def segment_line(text: str, in_list: bool) -> tuple[list[Block], bool]:
    """Classify one rendered line.

    Args:
        text: Rendered line text.
        in_list: Whether the previous lines left a list open.

    Returns:
        Tuple of the blocks for this line and the updated list flag.
    """
    stripped = text.strip()

    if not stripped:
        if in_list:
            return [Blank(), Blank()], False
        return [Blank()], False

    if INLINE_BULLET_PATTERN.search(stripped):
        return _split_inline_bullets(stripped, in_list)

    bullet_match = BULLET_PATTERN.match(stripped)
    if bullet_match:
        return [BulletItem(bullet_match.group(2))], True

    numbered_match = NUMBERED_PATTERN.match(stripped)
    if numbered_match:
        return [NumberedItem(numbered_match.group(2))], True

    if in_list:
        return [Blank(), Paragraph(stripped)], False
    return [Paragraph(stripped)], False


def segment_lines(lines: Iterable[str]) -> list[Block]:
    """Classify a sequence of rendered lines, threading the list state."""
    blocks: list[Block] = []
    in_list = False
    for line in lines:
        line_blocks, in_list = segment_line(line, in_list)
        blocks.extend(line_blocks)
    return blocks


def plain_blocks(lines: Iterable[str]) -> list[Block]:
    """Map lines to paragraphs and blanks without list detection."""
    return [Paragraph(line.strip()) if line.strip() else Blank() for line in lines]


def render_blocks(blocks: Iterable[Block]) -> str:
    """Render blocks one per line, collapsing long runs of blank lines.

    Args:
        blocks: Blocks in document order.

    Returns:
        Markdown text ending with a newline.
    """
    markdown = "".join(block.render() + "\n" for block in blocks)
    return re.sub(r"\n{4,}", "\n\n", markdown)
