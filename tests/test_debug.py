from ocrlayout.layout.debug import generate_debug_info
from ocrlayout.layout.model import RotatedBox, TextRegion


def test_report_counts_and_bounds(make_region):
    regions = [
        make_region("kept", 0, 100, 10, confidence=0.95),
        make_region("dropped", 0, 100, 40, confidence=0.3),
    ]
    report = generate_debug_info(regions, 0.9)
    assert "Total regions: 2" in report
    assert "Regions meeting threshold: 1" in report
    assert "Filtered as low confidence: 1" in report
    assert 'Text: "kept"' in report
    assert "dropped" not in report
    assert "Bounds: left=0.0, right=100.0, top=5.0, bottom=15.0" in report


def test_report_flags_size_mismatch():
    region = TextRegion("skewed", 0.99, RotatedBox(50, 10, 10, 100, 90.0),
                        ((0, 5), (100, 5), (100, 15), (0, 15)))
    report = generate_debug_info([region])
    assert "Corner points:" in report
    assert "differs from corner extent 100.0x10.0" in report


def test_report_without_result():
    assert "No recognition result" in generate_debug_info(None)
