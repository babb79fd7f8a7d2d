"""Greedy paragraph grouping of detected regions.

Every region is compared against the members of the groups built so far. It
joins the first group that has at least one member it is compatible with,
where compatible means:

- the Y-centers are close relative to the pair's average height,
- the heights are similar (no font-size jump),
- the horizontal extents overlap enough, measured against the narrower one.

Otherwise the region starts a new group. The result depends on the order in
which regions are fed in; the pipeline feeds them sorted by center.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ocrlayout.config import LayoutConfig

from .bounds import BoundsResolver
from .model import Bounds, ParagraphGroup, TextRegion


logger = logging.getLogger(__name__)


def vertical_gap(a: Bounds, b: Bounds) -> float:
    return abs(a.center_y - b.center_y)


def vertical_gap_exceeds(a: Bounds, b: Bounds, multiplier: float) -> bool:
    """Check whether two boxes are too far apart vertically to share a paragraph.

    Doxygen:
    - @param a: Bounds of the first region.
    - @param b: Bounds of the second region.
    - @param multiplier: Allowed gap as a multiple of the pair's average height.
    - @return: True when the Y-center distance exceeds the allowed gap.
    """
    avg_height = (a.height + b.height) / 2.0
    return vertical_gap(a, b) > avg_height * multiplier


def height_mismatch(a: Bounds, b: Bounds, multiplier: float) -> bool:
    """Check whether two boxes differ too much in height (font size).

    Doxygen:
    - @param a: Bounds of the first region.
    - @param b: Bounds of the second region.
    - @param multiplier: Max allowed ratio of the taller to the shorter height.
    - @return: True for a mismatch. One positive and one non-positive height
      is a mismatch; two non-positive heights are not.
    """
    ha, hb = a.height, b.height
    if ha > 0 and hb > 0:
        return max(ha, hb) > min(ha, hb) * multiplier
    return (ha > 0) != (hb > 0)


def horizontal_overlap_ratio(a: Bounds, b: Bounds) -> float:
    """Horizontal overlap of two boxes relative to the narrower one.

    A short line lying fully under a long one scores 1.0.

    Doxygen:
    - @param a: Bounds of the first region.
    - @param b: Bounds of the second region.
    - @return: Ratio in [0, 1]; 0 when the boxes do not overlap.
    """
    overlap = max(0.0, min(a.right, b.right) - max(a.left, b.left))
    if overlap <= 0:
        return 0.0
    narrower = min(a.width, b.width)
    return overlap / narrower if narrower > 0 else 0.0


def regions_compatible(a: Bounds, b: Bounds, config: LayoutConfig) -> bool:
    if vertical_gap_exceeds(a, b, config.vertical_break_multiplier):
        return False
    if height_mismatch(a, b, config.height_difference_multiplier):
        return False
    return horizontal_overlap_ratio(a, b) >= config.horizontal_overlap_threshold


def can_merge_with_group(
    index: int,
    group: Sequence[int],
    resolver: BoundsResolver,
    config: LayoutConfig,
) -> bool:
    """Return True if region `index` is compatible with any member of `group`."""
    bounds = resolver.resolve(index)
    text = resolver.regions[index].text
    for member in group:
        other = resolver.resolve(member)
        other_text = resolver.regions[member].text
        if vertical_gap_exceeds(bounds, other, config.vertical_break_multiplier):
            logger.debug("'%s' vs '%s': vertical gap %.1f too large", text, other_text, vertical_gap(bounds, other))
            continue
        if height_mismatch(bounds, other, config.height_difference_multiplier):
            logger.debug("'%s' (h=%.1f) vs '%s' (h=%.1f): height mismatch", text, bounds.height, other_text, other.height)
            continue
        ratio = horizontal_overlap_ratio(bounds, other)
        if ratio >= config.horizontal_overlap_threshold:
            logger.debug("'%s' merges with '%s' (overlap %.3f)", text, other_text, ratio)
            return True
        logger.debug("'%s' vs '%s': overlap %.3f below %.3f", text, other_text, ratio, config.horizontal_overlap_threshold)
    return False


def group_paragraphs(
    regions: Sequence[TextRegion],
    config: Optional[LayoutConfig] = None,
    resolver: Optional[BoundsResolver] = None,
    order: Optional[Iterable[int]] = None,
) -> List[ParagraphGroup]:
    """Cluster regions into paragraph groups.

    Doxygen:
    - @param regions: Regions of the current pass.
    - @param config: Thresholds; defaults to LayoutConfig().
    - @param resolver: Bounds resolver of the pass (created if omitted).
    - @param order: Indices into `regions` giving the processing order
      (default: input order).
    - @return: Groups in creation order; every region lands in exactly one.
    """
    cfg = config or LayoutConfig()
    res = resolver if resolver is not None else BoundsResolver(regions)
    sequence = list(order) if order is not None else list(range(len(res)))

    logger.debug(
        "Grouping %d regions (vertical=%s, overlap=%s, height=%s)",
        len(sequence),
        cfg.vertical_break_multiplier,
        cfg.horizontal_overlap_threshold,
        cfg.height_difference_multiplier,
    )

    groups: List[List[int]] = []
    for idx in sequence:
        for group in groups:
            if can_merge_with_group(idx, group, res, cfg):
                group.append(idx)
                break
        else:
            groups.append([idx])

    logger.debug("Built %d paragraph groups", len(groups))
    return [
        ParagraphGroup(indices=tuple(g), regions=tuple(res.regions[i] for i in g))
        for g in groups
    ]
