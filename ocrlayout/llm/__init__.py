"""Optional translation of recognized paragraphs via OpenRouter-compatible LLMs."""

from .client import (
    CONFIG_PATH,
    get_picked_model,
    get_openrouter_client,
    chat_completion,
    check_model_health,
)
from .translate import parse_batch_translations, translate_paragraphs

__all__ = [
    "CONFIG_PATH",
    "get_picked_model",
    "get_openrouter_client",
    "chat_completion",
    "check_model_health",
    "parse_batch_translations",
    "translate_paragraphs",
]
