from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


NO_TEXT_RECOGNIZED = "No text recognized"
NO_TEXT_MEETING_CONFIDENCE = "No text meeting confidence threshold"
COULD_NOT_ASSEMBLE = "Could not assemble text into paragraphs"

SENTINELS = frozenset({
    NO_TEXT_RECOGNIZED,
    NO_TEXT_MEETING_CONFIDENCE,
    COULD_NOT_ASSEMBLE,
})


def is_sentinel(text: str) -> bool:
    return text in SENTINELS


Point = Tuple[float, float]


@dataclass(frozen=True)
class RotatedBox:
    center_x: float
    center_y: float
    width: float
    height: float
    angle: float = 0.0


@dataclass(frozen=True)
class TextRegion:
    """One detected text fragment as reported by an OCR engine.

    `corner_points` is None for sources that only report axis-aligned boxes.
    """

    text: str
    confidence: float
    box: RotatedBox
    corner_points: Optional[Tuple[Point, ...]] = None


@dataclass(frozen=True)
class Bounds:
    left: float
    right: float
    top: float
    bottom: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0


@dataclass(frozen=True)
class ParagraphGroup:
    """Regions judged to belong to one paragraph, in insertion order.

    `indices` are positions in the region sequence of the pass that built the
    group; `regions` holds the matching TextRegion objects.
    """

    indices: Tuple[int, ...]
    regions: Tuple[TextRegion, ...]

    def __len__(self) -> int:
        return len(self.indices)

    @property
    def texts(self) -> Tuple[str, ...]:
        return tuple(r.text for r in self.regions)
