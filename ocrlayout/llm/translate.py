"""Translation of assembled paragraphs through an OpenRouter-compatible model.

Paragraphs are sent in word-count bounded batches as a JSON item list; the
model answers with `{"items": [{"id": n, "translated": "..."}]}`. Anything
that cannot be parsed keeps its original text, and sentinel strings are never
sent to the model.
"""

from __future__ import annotations

import json
import os
from typing import Dict, List, Optional, Sequence, Tuple

from openai import OpenAI

from ocrlayout.config import CONFIG_DIR
from ocrlayout.layout.model import is_sentinel

from .client import chat_completion
from .language_detector import detect_source_language, map_lang_code_to_english_name


PROMPTS_PATH = os.path.join(CONFIG_DIR, "prompts.json")
MAX_WORDS_PER_REQUEST = 350

_DEFAULT_PROMPTS = {
    "batch_translate": (
        "You are a professional translator. Translate the following array of paragraphs recognized from a screen "
        "from {source_language} to {target_language}. Keep OCR artifacts out of the translation where the intended "
        "word is obvious. Return JSON with an 'items' array of objects like: [{id: number, translated: string}] "
        "in the input order. Do not include explanations.\n\nInput items:\n{items_json}"
    ),
}


def _load_prompts(path: str = PROMPTS_PATH) -> Dict[str, str]:
    prompts = dict(_DEFAULT_PROMPTS)
    if not os.path.exists(path):
        return prompts
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Warning: Could not read prompts from {path}: {exc}")
        return prompts
    if isinstance(data, dict):
        prompts.update({str(k): v for k, v in data.items() if isinstance(v, str)})
    return prompts


def _fill_prompt_template(tmpl: str, **values: str) -> str:
    """Fill a template whose examples may contain literal braces.

    All braces are escaped first, then only the placeholders named in `values`
    are restored before `str.format`.
    """
    safe = tmpl.replace("{", "{{").replace("}", "}}")
    for key in values:
        safe = safe.replace("{{" + key + "}}", "{" + key + "}")
    return safe.format(**values)


def _strip_code_fence(text: str) -> str:
    s = text.strip()
    if s.startswith("```"):
        parts = s.split("```")
        if len(parts) >= 3:
            s = parts[1]
            if "\n" in s:
                first_line, rest = s.split("\n", 1)
                if first_line.strip().lower() in ("json", "javascript"):
                    s = rest
    return s


def parse_batch_translations(response_text: str) -> List[Tuple[int, str]]:
    """Parse a batch response into (id, translated_text) pairs.

    Doxygen:
    - @param response_text: Raw model output, optionally inside a code fence.
    - @return: Parsed pairs; empty when nothing usable was found.
    """
    if not response_text:
        return []
    s = _strip_code_fence(response_text)
    start = s.find("{")
    end = s.rfind("}")
    if start == -1 or end <= start:
        return []
    try:
        obj = json.loads(s[start:end + 1])
    except json.JSONDecodeError:
        return []
    if not isinstance(obj, dict):
        return []
    items = None
    for key in ("items", "result", "results"):
        if isinstance(obj.get(key), list):
            items = obj[key]
            break
    if items is None:
        return []
    out: List[Tuple[int, str]] = []
    for it in items:
        if not isinstance(it, dict) or not isinstance(it.get("id"), int):
            continue
        txt = it.get("translated") or it.get("text")
        if isinstance(txt, str):
            out.append((it["id"], txt))
    return out


def _translate_batch(
    client: OpenAI,
    model: str,
    texts: Sequence[str],
    source_language: str,
    target_language: str,
    timeout: float | None,
    prompts: Dict[str, str],
) -> List[str]:
    pairs = [{"id": i, "text": t} for i, t in enumerate(texts)]
    prompt = _fill_prompt_template(
        prompts["batch_translate"],
        source_language=source_language,
        target_language=target_language,
        items_json=json.dumps(pairs, ensure_ascii=False),
    )
    try:
        out = chat_completion(client, model, messages=[{"role": "user", "content": prompt}], timeout=timeout)
    except Exception as e:
        print(f"Warning: translation request failed; keeping original text: {e}")
        return list(texts)
    result_map = dict(parse_batch_translations(out))
    if not result_map:
        print("Warning: translation response could not be parsed; keeping original text.")
    return [result_map.get(i) or texts[i] for i in range(len(texts))]


def _chunk_by_words(indices: Sequence[int], texts: Sequence[str], max_words: int) -> List[List[int]]:
    chunks: List[List[int]] = []
    current: List[int] = []
    words = 0
    for i in indices:
        n = len(texts[i].split())
        if current and words + n > max_words:
            chunks.append(current)
            current, words = [], 0
        current.append(i)
        words += n
    if current:
        chunks.append(current)
    return chunks


def translate_paragraphs(
    client: OpenAI,
    model: str,
    paragraphs: Sequence[str],
    target_language: str = "english",
    timeout: float | None = 60.0,
    source_language: Optional[str] = None,
    max_words_per_request: int = MAX_WORDS_PER_REQUEST,
    prompts: Optional[Dict[str, str]] = None,
) -> List[str]:
    """Translate paragraph strings, preserving order and sentinels.

    Doxygen:
    - @param client: OpenAI-compatible client.
    - @param model: Model id.
    - @param paragraphs: Output of the layout pipeline.
    - @param target_language: Target language name in English.
    - @param timeout: Per-request timeout in seconds; None disables it.
    - @param source_language: Source language name; detected when omitted.
    - @param max_words_per_request: Word budget of one request.
    - @param prompts: Prompt templates; loaded from config/prompts.json when omitted.
    - @return: Translations aligned with `paragraphs`.
    """
    result = list(paragraphs)
    todo = [i for i, p in enumerate(result) if p.strip() and not is_sentinel(p)]
    if not todo:
        return result

    if source_language is None:
        code, _prob = detect_source_language(result[i] for i in todo)
        source_language = map_lang_code_to_english_name(code) or "auto-detected source language"
    templates = {**_DEFAULT_PROMPTS, **prompts} if prompts is not None else _load_prompts()

    for chunk in _chunk_by_words(todo, result, max_words_per_request):
        print(f"Translating {len(chunk)} paragraph(s)...")
        translated = _translate_batch(
            client, model, [paragraphs[i] for i in chunk],
            source_language, target_language, timeout, templates,
        )
        for i, text in zip(chunk, translated):
            result[i] = text
    return result
