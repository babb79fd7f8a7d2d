from __future__ import annotations

from typing import Iterable, List

from .model import TextRegion


DEFAULT_CONFIDENCE_THRESHOLD = 0.90


def filter_by_confidence(
    regions: Iterable[TextRegion],
    threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> List[TextRegion]:
    """Keep regions whose confidence is at least `threshold`, in input order."""
    return [r for r in regions if r.confidence >= threshold]
