from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List

from ocrlayout.layout.model import TextRegion


class OcrEngine(ABC):
    """Source of text regions for one image.

    Engines only detect and recognize; ordering and paragraph grouping are
    done by the layout pipeline regardless of which engine produced the regions.
    """

    name = "engine"

    def initialize(self) -> bool:
        """Prepare the engine; return False if it cannot be used."""
        return True

    @abstractmethod
    def recognize(self, image: Any) -> List[TextRegion]:
        raise NotImplementedError
