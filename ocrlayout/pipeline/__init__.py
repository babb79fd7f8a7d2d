"""High-level orchestration: OCR engine → layout pass → optional translation."""

from .process import (
    ParagraphPipeline,
    process_image,
    recognize_paragraphs,
)

__all__ = [
    "ParagraphPipeline",
    "process_image",
    "recognize_paragraphs",
]
