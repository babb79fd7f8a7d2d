"""Re-segmentation of engine-reported lines into independent regions.

Some engines (Tesseract, platform OCR) report axis-aligned word boxes already
grouped into lines, and occasionally merge two visually separate columns into
one line. Such lines are split wherever the horizontal gap between consecutive
words is larger than the line's average word height.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

from .model import RotatedBox, TextRegion


GAP_THRESHOLD_FACTOR = 1.0
MIN_AVG_WORD_HEIGHT_FOR_SPLIT = 5.0


def average_word_height(words: Sequence[Dict[str, Any]]) -> float:
    heights = [float(w['height']) for w in words if float(w['height']) > 0]
    if not heights:
        return 0.0
    return sum(heights) / len(heights)


def split_line_on_gaps(words: Sequence[Dict[str, Any]]) -> List[List[Dict[str, Any]]]:
    """Split one line's words where the horizontal gap is too wide.

    Doxygen:
    - @param words: Word dicts with x, y, width, height, in reading order.
    - @return: Consecutive word segments. Lines with fewer than two words, or
      with an average word height below 5.0, are returned unsplit.
    """
    if not words:
        return []
    if len(words) == 1:
        return [list(words)]

    avg_height = average_word_height(words)
    split_threshold = 0.0
    if avg_height >= MIN_AVG_WORD_HEIGHT_FOR_SPLIT:
        split_threshold = GAP_THRESHOLD_FACTOR * avg_height

    segments: List[List[Dict[str, Any]]] = [[words[0]]]
    for prev, word in zip(words, words[1:]):
        gap = float(word['x']) - (float(prev['x']) + float(prev['width']))
        if split_threshold > 0 and gap > split_threshold:
            segments.append([word])
        else:
            segments[-1].append(word)
    return segments


def region_from_words(words: Sequence[Dict[str, Any]]) -> TextRegion:
    """Build an axis-aligned TextRegion covering a run of words.

    Confidence is the mean of the words' `confidence` values (1.0 when absent).
    """
    left = min(float(w['x']) for w in words)
    top = min(float(w['y']) for w in words)
    right = max(float(w['x']) + float(w['width']) for w in words)
    bottom = max(float(w['y']) + float(w['height']) for w in words)
    width = max(0.0, right - left)
    height = max(0.0, bottom - top)
    confs = [float(w.get('confidence', 1.0)) for w in words]
    return TextRegion(
        text=" ".join(str(w['text']) for w in words),
        confidence=sum(confs) / len(confs),
        box=RotatedBox(left + width / 2.0, top + height / 2.0, width, height, 0.0),
    )


def expand_lines(lines: Iterable[Dict[str, Any]]) -> List[TextRegion]:
    """Convert engine lines (dicts with a 'words' list) into regions.

    Doxygen:
    - @param lines: Line dicts as produced by `group_words_to_lines`.
    - @return: One region per gap-separated word run, in line order.
    """
    regions: List[TextRegion] = []
    for line in lines:
        words = line.get('words') or []
        for segment in split_line_on_gaps(words):
            regions.append(region_from_words(segment))
    return regions
