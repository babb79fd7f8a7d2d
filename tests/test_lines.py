from ocrlayout.layout.bounds import compute_bounds
from ocrlayout.layout.lines import expand_lines, region_from_words, split_line_on_gaps


def _word(text, x, width=10, y=0, height=10, confidence=0.9):
    return {'text': text, 'x': x, 'y': y, 'width': width, 'height': height, 'confidence': confidence}


def test_wide_gap_splits_line():
    words = [_word("A", 0), _word("B", 15), _word("C", 60)]
    segments = split_line_on_gaps(words)
    assert [[w['text'] for w in s] for s in segments] == [["A", "B"], ["C"]]


def test_gap_equal_to_height_does_not_split():
    words = [_word("A", 0), _word("B", 20)]
    assert len(split_line_on_gaps(words)) == 1


def test_small_text_is_never_split():
    words = [_word("a", 0, height=4), _word("b", 200, height=4)]
    assert len(split_line_on_gaps(words)) == 1


def test_single_and_empty_lines():
    assert split_line_on_gaps([]) == []
    assert len(split_line_on_gaps([_word("solo", 0)])) == 1


def test_region_from_words_covers_the_run():
    region = region_from_words([_word("Hello", 10, width=40, y=5, confidence=0.8),
                                _word("there", 55, width=30, y=7, height=12, confidence=1.0)])
    assert region.text == "Hello there"
    assert abs(region.confidence - 0.9) < 1e-9
    assert region.corner_points is None
    b = compute_bounds(region)
    assert (b.left, b.right, b.top, b.bottom) == (10.0, 85.0, 5.0, 19.0)


def test_expand_lines_splits_merged_columns():
    lines = [
        {'text': 'Left col Right col', 'words': [_word("Left", 0, 30), _word("col", 35, 20),
                                                 _word("Right", 300, 40), _word("col", 345, 20)]},
        {'text': 'Next', 'words': [_word("Next", 0, 30, y=20)]},
        {'text': '', 'words': []},
    ]
    regions = expand_lines(lines)
    assert [r.text for r in regions] == ["Left col", "Right col", "Next"]
