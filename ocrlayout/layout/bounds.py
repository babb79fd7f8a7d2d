"""Axis-aligned bounds for detected regions.

Detectors that report rotated rectangles sometimes give a width/height that
does not match the extent of the four corner points. Bounds are therefore
derived from the corner points whenever they are usable, and from the rotated
box center/size otherwise.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import numpy as np

from .model import Bounds, TextRegion


logger = logging.getLogger(__name__)


def _bounds_from_box(region: TextRegion) -> Bounds:
    box = region.box
    half_w = abs(box.width) / 2.0
    half_h = abs(box.height) / 2.0
    left = box.center_x - half_w
    right = box.center_x + half_w
    top = box.center_y - half_h
    bottom = box.center_y + half_h
    return Bounds(left, right, top, bottom, right - left, bottom - top)


def _bounds_from_points(points) -> Bounds:
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"Corner points must be (x, y) pairs, got shape {pts.shape}")
    if not np.isfinite(pts).all():
        raise ValueError("Corner points contain non-finite values")
    left = float(pts[:, 0].min())
    right = float(pts[:, 0].max())
    top = float(pts[:, 1].min())
    bottom = float(pts[:, 1].max())
    if right - left <= 0 or bottom - top <= 0:
        raise ValueError("Corner points span no area")
    return Bounds(left, right, top, bottom, right - left, bottom - top)


def compute_bounds(region: TextRegion) -> Bounds:
    """Return the axis-aligned envelope of a region.

    Doxygen:
    - @param region: Detected text region.
    - @return: Bounds from the corner points when at least four usable points
      exist, otherwise from the rotated box center and size. Never raises on
      malformed geometry.
    """
    points = region.corner_points
    if points is None or len(points) < 4:
        return _bounds_from_box(region)
    try:
        return _bounds_from_points(points)
    except (TypeError, ValueError) as exc:
        logger.debug("Falling back to box geometry for %r: %s", region.text, exc)
        return _bounds_from_box(region)


class BoundsResolver:
    """Per-pass bounds lookup keyed by position in the pass's region list.

    Create one per pipeline invocation; do not share between passes.
    """

    def __init__(self, regions: Sequence[TextRegion]):
        self.regions: List[TextRegion] = list(regions)
        self._cache: Dict[int, Bounds] = {}

    def __len__(self) -> int:
        return len(self.regions)

    def resolve(self, index: int) -> Bounds:
        cached = self._cache.get(index)
        if cached is not None:
            return cached
        bounds = compute_bounds(self.regions[index])
        self._cache[index] = bounds
        return bounds

    def center_x(self, index: int) -> float:
        return self.resolve(index).center_x

    def center_y(self, index: int) -> float:
        return self.resolve(index).center_y

    def clear(self) -> None:
        self._cache.clear()
