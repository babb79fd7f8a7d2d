"""Adapters for detectors that report rotated rectangles.

Detectors in the PaddleOCR family return, per region, the recognized text, a
score and an OpenCV-style rotated rectangle `((cx, cy), (w, h), angle)`. This
module converts that output, or a JSON dump of it, into TextRegion values.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import cv2

from ocrlayout.layout.model import Point, RotatedBox, TextRegion

from .base import OcrEngine


RotatedRect = Tuple[Tuple[float, float], Tuple[float, float], float]


def corner_points_of(rect: RotatedRect) -> Tuple[Point, ...]:
    """Return the four corners of an OpenCV rotated rectangle."""
    pts = cv2.boxPoints(((float(rect[0][0]), float(rect[0][1])),
                         (float(rect[1][0]), float(rect[1][1])),
                         float(rect[2])))
    return tuple((float(x), float(y)) for x, y in pts)


def _as_points(points: Any) -> Tuple[Any, ...]:
    """Freeze reported corner points; malformed entries are kept as reported.

    Bounds resolution falls back to the rotated box when the points are unusable.
    """
    try:
        return tuple(tuple(p) for p in points)
    except TypeError:
        pass
    try:
        return tuple(points)
    except TypeError as exc:
        raise ValueError(f"Corner points must be a list of (x, y) pairs, got {points!r}") from exc


def region_from_rotated_rect(
    text: str,
    score: float,
    rect: RotatedRect,
    points: Optional[Sequence[Sequence[float]]] = None,
) -> TextRegion:
    """Build a region from detector output.

    Doxygen:
    - @param text: Recognized text.
    - @param score: Recognition confidence in [0, 1].
    - @param rect: Rotated rectangle `((cx, cy), (w, h), angle)`.
    - @param points: Corner points reported by the detector; derived from
      `rect` with cv2.boxPoints when omitted.
    - @return: TextRegion keeping the reported box next to the corner points.
    """
    (cx, cy), (w, h), angle = rect
    if points is None:
        corners = corner_points_of(rect)
    else:
        corners = _as_points(points)
    return TextRegion(
        text=str(text),
        confidence=float(score),
        box=RotatedBox(float(cx), float(cy), float(w), float(h), float(angle)),
        corner_points=corners,
    )


def region_from_record(record: Dict[str, Any]) -> TextRegion:
    """Parse one JSON record.

    Accepted shapes:
    - {"text", "confidence", "rect": [[cx, cy], [w, h], angle], "points"?}
    - {"text", "confidence", "box": {"center_x", "center_y", "width", "height", "angle"?}, "points"?}

    Records without points and without "rect" stay axis-aligned (no corner points).
    """
    text = str(record.get("text", ""))
    confidence = float(record.get("confidence", record.get("score", 1.0)))
    points = record.get("points")
    if "rect" in record:
        return region_from_rotated_rect(text, confidence, record["rect"], points=points)
    box = record.get("box")
    if not isinstance(box, dict):
        raise ValueError(f"Region record needs 'rect' or 'box': {record!r}")
    rotated = RotatedBox(
        float(box["center_x"]),
        float(box["center_y"]),
        float(box["width"]),
        float(box["height"]),
        float(box.get("angle", 0.0)),
    )
    corners = _as_points(points) if points else None
    return TextRegion(text=text, confidence=confidence, box=rotated, corner_points=corners)


def regions_from_records(records: Iterable[Dict[str, Any]]) -> List[TextRegion]:
    return [region_from_record(r) for r in records]


def load_regions_json(path: str) -> List[TextRegion]:
    """Load detector output saved as a JSON list (or {"regions": [...]})."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Regions file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("regions", [])
    if not isinstance(data, list):
        raise ValueError(f"Regions file must contain a JSON list: {path}")
    return regions_from_records(data)


class DetectionFileEngine(OcrEngine):
    """Engine that replays detector output stored as JSON next to an image."""

    name = "detections"

    def recognize(self, image: Any) -> List[TextRegion]:
        path = str(image)
        if not path.lower().endswith(".json"):
            path = os.path.splitext(path)[0] + ".json"
        return load_regions_json(path)
