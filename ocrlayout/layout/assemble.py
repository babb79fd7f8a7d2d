"""Turn paragraph groups (or rows) into ordered paragraph strings."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .bounds import BoundsResolver
from .model import (
    COULD_NOT_ASSEMBLE,
    NO_TEXT_RECOGNIZED,
    ParagraphGroup,
)


def _finish(paragraphs: List[str], had_input: bool) -> List[str]:
    if not had_input:
        return [NO_TEXT_RECOGNIZED]
    if not paragraphs:
        return [COULD_NOT_ASSEMBLE]
    return paragraphs


def assemble_paragraphs(
    groups: Sequence[ParagraphGroup],
    resolver: Optional[BoundsResolver] = None,
) -> List[str]:
    """Join each group's texts into one paragraph string.

    Members are ordered by Y-center, then X-center, and joined with a single
    space. Groups that produce only whitespace are dropped.

    Doxygen:
    - @param groups: Groups from `group_paragraphs`, in output order.
    - @param resolver: Resolver of the pass that built the groups. When
      omitted, bounds are computed from each group's own regions.
    - @return: Paragraph strings, or a single sentinel string.
    """
    paragraphs: List[str] = []
    for group in groups:
        if resolver is not None:
            res, members = resolver, list(group.indices)
        else:
            res, members = BoundsResolver(group.regions), list(range(len(group.regions)))
        ordered = sorted(members, key=lambda i: (res.center_y(i), res.center_x(i)))
        text = " ".join(res.regions[i].text for i in ordered)
        if text.strip():
            paragraphs.append(text)
    return _finish(paragraphs, bool(groups))


def join_rows(rows: Sequence[Sequence[int]], resolver: BoundsResolver) -> List[str]:
    """One string per row; row members are expected in left-to-right order."""
    lines: List[str] = []
    for row in rows:
        text = " ".join(resolver.regions[i].text for i in row)
        if text.strip():
            lines.append(text)
    return _finish(lines, bool(rows))
