"""OCR engines that produce text regions for the layout pipeline."""

from .base import OcrEngine
from .detections import (
    DetectionFileEngine,
    corner_points_of,
    load_regions_json,
    region_from_record,
    region_from_rotated_rect,
    regions_from_records,
)
from .tesseract import (
    TesseractEngine,
    build_dataframe_from_tesseract,
    group_words_to_lines,
    load_image,
    preprocess_image_for_ocr,
)

__all__ = [
    "OcrEngine",
    "DetectionFileEngine",
    "corner_points_of",
    "load_regions_json",
    "region_from_record",
    "region_from_rotated_rect",
    "regions_from_records",
    "TesseractEngine",
    "build_dataframe_from_tesseract",
    "group_words_to_lines",
    "load_image",
    "preprocess_image_for_ocr",
]
