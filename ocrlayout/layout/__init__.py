"""Layout reconstruction from OCR geometry.

This package turns detected text regions into reading order and paragraphs:
bounds resolution, confidence filtering, row ordering, paragraph grouping and
assembly, plus line re-segmentation for word-box engines.
"""

from .model import (
    NO_TEXT_RECOGNIZED,
    NO_TEXT_MEETING_CONFIDENCE,
    COULD_NOT_ASSEMBLE,
    SENTINELS,
    is_sentinel,
    RotatedBox,
    TextRegion,
    Bounds,
    ParagraphGroup,
)
from .bounds import compute_bounds, BoundsResolver
from .filtering import DEFAULT_CONFIDENCE_THRESHOLD, filter_by_confidence
from .ordering import (
    sort_by_center,
    cluster_rows,
    reading_order_indices,
    sort_reading_order,
)
from .grouping import (
    vertical_gap_exceeds,
    height_mismatch,
    horizontal_overlap_ratio,
    regions_compatible,
    can_merge_with_group,
    group_paragraphs,
)
from .assemble import assemble_paragraphs, join_rows
from .lines import split_line_on_gaps, region_from_words, expand_lines
from .debug import generate_debug_info

__all__ = [
    "NO_TEXT_RECOGNIZED",
    "NO_TEXT_MEETING_CONFIDENCE",
    "COULD_NOT_ASSEMBLE",
    "SENTINELS",
    "is_sentinel",
    "RotatedBox",
    "TextRegion",
    "Bounds",
    "ParagraphGroup",
    "compute_bounds",
    "BoundsResolver",
    "DEFAULT_CONFIDENCE_THRESHOLD",
    "filter_by_confidence",
    "sort_by_center",
    "cluster_rows",
    "reading_order_indices",
    "sort_reading_order",
    "vertical_gap_exceeds",
    "height_mismatch",
    "horizontal_overlap_ratio",
    "regions_compatible",
    "can_merge_with_group",
    "group_paragraphs",
    "assemble_paragraphs",
    "join_rows",
    "split_line_on_gaps",
    "region_from_words",
    "expand_lines",
    "generate_debug_info",
]
