"""OpenRouter-compatible chat client used for optional paragraph translation.

Model selection lives in config/models.json:

    {"model_number_picked": 0,
     "models": [{"provider": "openrouter", "model": "openai/gpt-4o-mini", "api_key": "..."}]}
"""

from __future__ import annotations

import json
import os
from typing import Dict, List, Tuple

from openai import OpenAI

from ocrlayout.config import CONFIG_DIR


CONFIG_PATH = os.path.join(CONFIG_DIR, "models.json")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


def get_picked_model(path: str = CONFIG_PATH) -> Tuple[str, str]:
    """Return (model, api_key) of the selected entry in models.json.

    Doxygen:
    - @param path: Path to the models JSON file.
    - @return: (model, api_key) pair.
    - @throws FileNotFoundError: If the file is missing.
    - @throws ValueError: If the index is invalid or fields are missing.
    """
    with open(path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    models: List[Dict] = cfg.get("models", [])
    idx = cfg.get("model_number_picked")

    if not isinstance(idx, int):
        raise ValueError("Config must include integer 'model_number_picked'.")
    if idx < 0 or idx >= len(models):
        raise ValueError("'model_number_picked' is out of range for available models.")

    item = models[idx]
    model = item.get("model")
    api_key = item.get("api_key")
    if not model or not api_key:
        raise ValueError("Selected model entry must include both 'model' and 'api_key'.")
    return model, api_key


def get_openrouter_client(api_key: str, base_url: str = OPENROUTER_BASE_URL) -> OpenAI:
    return OpenAI(base_url=base_url, api_key=api_key)


def chat_completion(
    client: OpenAI,
    model: str,
    messages: List[Dict[str, str]],
    timeout: float | None = 60.0,
) -> str:
    """Send a chat completion request and return the first choice's text."""
    completion = client.chat.completions.create(
        model=model,
        messages=messages,
        timeout=timeout,
    )
    return completion.choices[0].message.content or ""


def check_model_health(client: OpenAI, model: str, timeout: float | None = 10.0) -> None:
    """Raise RuntimeError if the model does not answer a trivial request."""
    try:
        chat_completion(client, model, messages=[{"role": "user", "content": "ping"}], timeout=timeout)
    except Exception as e:
        raise RuntimeError(f"Model health check failed: {e}") from e
