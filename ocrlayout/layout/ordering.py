"""Reading-order helpers: row clustering and center-based sorting."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .bounds import BoundsResolver
from .model import TextRegion


ROW_THRESHOLD_FACTOR = 0.5


def _resolver_for(regions: Sequence[TextRegion], resolver: Optional[BoundsResolver]) -> BoundsResolver:
    return resolver if resolver is not None else BoundsResolver(regions)


def sort_by_center(
    regions: Sequence[TextRegion],
    resolver: Optional[BoundsResolver] = None,
) -> List[int]:
    """Return region indices sorted by (Y-center, X-center).

    Doxygen:
    - @param regions: Regions of the current pass.
    - @param resolver: Bounds resolver of the pass (created if omitted).
    - @return: Indices into `regions`; ties keep input order.
    """
    res = _resolver_for(regions, resolver)
    return sorted(range(len(res)), key=lambda i: (res.center_y(i), res.center_x(i)))


def cluster_rows(
    regions: Sequence[TextRegion],
    resolver: Optional[BoundsResolver] = None,
) -> List[List[int]]:
    """Cluster regions into text rows by Y-center proximity.

    A row is anchored on the highest unassigned region and collects every
    unassigned region whose Y-center lies within half the average region
    height of the anchor. Members of each row are ordered left to right.

    Doxygen:
    - @param regions: Regions of the current pass.
    - @param resolver: Bounds resolver of the pass (created if omitted).
    - @return: Rows top to bottom, each a list of indices into `regions`.
    """
    res = _resolver_for(regions, resolver)
    n = len(res)
    if n == 0:
        return []

    avg_height = sum(res.resolve(i).height for i in range(n)) / n
    row_threshold = avg_height * ROW_THRESHOLD_FACTOR

    by_y = sorted(range(n), key=res.center_y)
    assigned = [False] * n
    rows: List[List[int]] = []
    for anchor in by_y:
        if assigned[anchor]:
            continue
        anchor_y = res.center_y(anchor)
        row = []
        for idx in by_y:
            if assigned[idx]:
                continue
            if idx == anchor or abs(res.center_y(idx) - anchor_y) <= row_threshold:
                row.append(idx)
        for idx in row:
            assigned[idx] = True
        rows.append(sorted(row, key=res.center_x))
    return rows


def reading_order_indices(
    regions: Sequence[TextRegion],
    resolver: Optional[BoundsResolver] = None,
) -> List[int]:
    return [idx for row in cluster_rows(regions, resolver) for idx in row]


def sort_reading_order(
    regions: Sequence[TextRegion],
    resolver: Optional[BoundsResolver] = None,
) -> List[TextRegion]:
    """Return the regions in document reading order (rows top to bottom, left to right)."""
    res = _resolver_for(regions, resolver)
    return [res.regions[i] for i in reading_order_indices(regions, res)]
