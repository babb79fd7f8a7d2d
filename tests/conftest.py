import pytest

from ocrlayout.layout.model import RotatedBox, TextRegion


def _make_region(text, left, right, center_y, height=10.0, confidence=0.99, points=None):
    width = right - left
    box = RotatedBox((left + right) / 2.0, center_y, width, height, 0.0)
    return TextRegion(text=text, confidence=confidence, box=box, corner_points=points)


@pytest.fixture
def make_region():
    """Axis-aligned region factory: text, x-range, Y-center and height."""
    return _make_region
