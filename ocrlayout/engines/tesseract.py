"""Tesseract engine adapter built on top of pytesseract and OpenCV.

This module provides:
- Building a cleaned DataFrame from pytesseract output.
- Grouping words to engine-reported lines.
- Preprocessing images for OCR.
- A `TesseractEngine` that turns an image into gap-split text regions.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List

import cv2
import numpy as np
import pandas as pd
import pytesseract

from ocrlayout.layout.lines import expand_lines
from ocrlayout.layout.model import TextRegion

from .base import OcrEngine


def build_dataframe_from_tesseract(data: Dict[str, Any]) -> pd.DataFrame:
    """Create and clean a DataFrame from pytesseract.image_to_data output.

    Doxygen:
    - @param data: Dict returned by `pytesseract.image_to_data(..., output_type=Output.DICT)`.
    - @return: Rows with positive confidence and non-empty text.
    """
    df = pd.DataFrame(data)
    df['conf'] = pd.to_numeric(df['conf'], errors='coerce').fillna(-1)
    df = df[df['conf'] > 0].copy()
    df['text'] = df['text'].fillna('').astype(str).str.strip()
    df = df[df['text'] != '']
    return df


def group_words_to_lines(df: pd.DataFrame, min_conf: float = 0.0) -> List[Dict[str, Any]]:
    """Group OCR words into the lines Tesseract reported.

    Doxygen:
    - @param df: DataFrame produced by `build_dataframe_from_tesseract`.
    - @param min_conf: Words below this Tesseract confidence (0-100) are dropped.
    - @return: Line dicts with text and a 'words' list; word confidence is
      normalised to [0, 1].
    """
    if df.empty:
        return []
    lines: List[Dict[str, Any]] = []
    group_cols = ['block_num', 'par_num', 'line_num']
    for _, g in df.groupby(group_cols, sort=True):
        g_sorted = g[g['conf'] >= min_conf].sort_values('left', kind='stable')
        if g_sorted.empty:
            continue
        words = [
            {
                'text': str(t),
                'x': int(l),
                'y': int(tp),
                'width': int(wd),
                'height': int(ht),
                'confidence': float(c) / 100.0,
            }
            for t, l, tp, wd, ht, c in zip(
                g_sorted['text'].tolist(),
                g_sorted['left'].tolist(),
                g_sorted['top'].tolist(),
                g_sorted['width'].tolist(),
                g_sorted['height'].tolist(),
                g_sorted['conf'].tolist(),
            )
        ]
        lines.append({
            'text': ' '.join(w['text'] for w in words),
            'words': words,
        })
    return lines


def preprocess_image_for_ocr(img_bgr: np.ndarray) -> np.ndarray:
    """Preprocess a BGR image to improve OCR accuracy.

    Doxygen:
    - @param img_bgr: Input image in BGR format.
    - @return: Preprocessed BGR image.
    """
    gray = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2GRAY)
    gray = cv2.bilateralFilter(gray, d=7, sigmaColor=50, sigmaSpace=50)
    th = cv2.adaptiveThreshold(gray, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
                               cv2.THRESH_BINARY, 31, 10)
    th = cv2.medianBlur(th, 3)
    # back to 3 channels for pytesseract/cv2 callers expecting BGR
    return cv2.cvtColor(th, cv2.COLOR_GRAY2BGR)


def load_image(image_path: str) -> np.ndarray:
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Image file not found: {image_path}")
    img_bgr = cv2.imread(image_path)
    if img_bgr is None:
        raise RuntimeError(f"Failed to load image: {image_path}")
    return img_bgr


class TesseractEngine(OcrEngine):
    """Word-box engine: Tesseract lines re-segmented on wide horizontal gaps."""

    name = "tesseract"

    def __init__(self, lang: str = 'eng', preprocess: bool = True, min_word_conf: float = 0.0):
        self.lang = lang
        self.preprocess = preprocess
        self.min_word_conf = min_word_conf

    def initialize(self) -> bool:
        try:
            pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, OSError) as exc:
            print(f"Warning: Tesseract is not available: {exc}")
            return False
        return True

    def regions_from_data(self, data: Dict[str, Any]) -> List[TextRegion]:
        """Convert a raw `image_to_data` dict into text regions."""
        df = build_dataframe_from_tesseract(data)
        return expand_lines(group_words_to_lines(df, min_conf=self.min_word_conf))

    def recognize(self, image: Any) -> List[TextRegion]:
        """Run OCR on a BGR array or an image path."""
        img_bgr = load_image(image) if isinstance(image, str) else image
        if self.preprocess:
            img_bgr = preprocess_image_for_ocr(img_bgr)
        rgb = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)
        data = pytesseract.image_to_data(rgb, lang=self.lang, output_type=pytesseract.Output.DICT)
        return self.regions_from_data(data)
