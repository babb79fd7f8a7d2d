from __future__ import annotations

from typing import Iterable, List, Tuple

from langdetect import DetectorFactory, LangDetectException, detect_langs

from ocrlayout.layout.model import is_sentinel

DetectorFactory.seed = 0

MAX_SAMPLE_CHARS = 4000

_LANG_CODE_TO_ENGLISH = {
    "en": "english",
    "ru": "russian",
    "uk": "ukrainian",
    "de": "german",
    "fr": "french",
    "es": "spanish",
    "it": "italian",
    "pt": "portuguese",
    "ja": "japanese",
    "ko": "korean",
    "zh-cn": "chinese",
    "zh-tw": "chinese",
}

_ALLOWED_TARGET_LANGUAGES = frozenset(_LANG_CODE_TO_ENGLISH.values())


def _sample_paragraphs(paragraphs: Iterable[str]) -> str:
    chunks: List[str] = []
    total_len = 0
    for p in paragraphs:
        s = str(p or "").strip()
        if not s or is_sentinel(s):
            continue
        chunks.append(s)
        total_len += len(s)
        if total_len >= MAX_SAMPLE_CHARS:
            break
    return "\n".join(chunks)


def detect_source_language(paragraphs: Iterable[str]) -> Tuple[str | None, float | None]:
    """Detect the dominant language of recognized paragraphs.

    Sentinel strings are ignored. Returns (code, probability) or (None, None).
    """
    sample = _sample_paragraphs(paragraphs)
    if not sample:
        return None, None
    try:
        candidates = detect_langs(sample)
    except LangDetectException:
        return None, None
    if not candidates:
        return None, None
    best = max(candidates, key=lambda c: c.prob)
    code = best.lang if best.lang in ("zh-cn", "zh-tw") else best.lang.split("-")[0]
    return code, float(best.prob)


def map_lang_code_to_english_name(code: str | None) -> str | None:
    if not code:
        return None
    code = code.lower()
    if code in _LANG_CODE_TO_ENGLISH:
        return _LANG_CODE_TO_ENGLISH[code]
    return _LANG_CODE_TO_ENGLISH.get(code.split("-")[0])


def normalize_and_validate_target_language(name: str) -> str:
    norm = str(name or "").strip().lower()
    if norm not in _ALLOWED_TARGET_LANGUAGES:
        allowed = ", ".join(sorted(_ALLOWED_TARGET_LANGUAGES))
        raise ValueError(
            f"Target language must be an English language name. Got: '{name}'. "
            f"Allowed values: {allowed}."
        )
    return norm


__all__ = [
    "detect_source_language",
    "map_lang_code_to_english_name",
    "normalize_and_validate_target_language",
]
