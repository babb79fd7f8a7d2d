from ocrlayout.layout.filtering import filter_by_confidence


def test_filter_keeps_confident_regions_in_order(make_region):
    regions = [
        make_region("a", 0, 10, 5, confidence=0.95),
        make_region("b", 0, 10, 20, confidence=0.5),
        make_region("c", 0, 10, 35, confidence=0.90),
        make_region("d", 0, 10, 50, confidence=0.99),
    ]
    kept = filter_by_confidence(regions)
    assert [r.text for r in kept] == ["a", "c", "d"]
    assert all(r.confidence >= 0.9 for r in kept)
    assert len(kept) <= len(regions)


def test_filter_custom_threshold(make_region):
    regions = [make_region("low", 0, 10, 5, confidence=0.4), make_region("mid", 0, 10, 5, confidence=0.6)]
    assert [r.text for r in filter_by_confidence(regions, 0.5)] == ["mid"]
    assert filter_by_confidence(regions, 0.9) == []
