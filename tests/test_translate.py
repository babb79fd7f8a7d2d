import json
from types import SimpleNamespace

from ocrlayout.llm.translate import parse_batch_translations, translate_paragraphs


class _FakeClient:
    """Mimics the part of the OpenAI client used by chat_completion."""

    def __init__(self, responder):
        self.responder = responder
        self.prompts = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, model, messages, timeout):
        prompt = messages[0]["content"]
        self.prompts.append(prompt)
        content = self.responder(prompt)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _upper_responder(prompt):
    items = json.loads(prompt.split("Input items:\n", 1)[1])
    return json.dumps({"items": [{"id": it["id"], "translated": it["text"].upper()} for it in items]})


def test_parse_batch_translations_from_fenced_block():
    text = '```json\n{"items": [{"id": 0, "translated": "hola"}, {"id": "x", "translated": "bad"}]}\n```'
    assert parse_batch_translations(text) == [(0, "hola")]
    assert parse_batch_translations("no json here") == []


def test_translate_paragraphs_keeps_order():
    client = _FakeClient(_upper_responder)
    out = translate_paragraphs(client, "m", ["first block", "second block"], "german",
                               source_language="english", prompts={})
    assert out == ["FIRST BLOCK", "SECOND BLOCK"]
    assert len(client.prompts) == 1
    assert "to german" in client.prompts[0]


def test_sentinels_are_not_translated():
    client = _FakeClient(_upper_responder)
    assert translate_paragraphs(client, "m", ["No text recognized"], source_language="english", prompts={}) == [
        "No text recognized"
    ]
    assert client.prompts == []


def test_unparseable_response_keeps_original():
    client = _FakeClient(lambda prompt: "sorry, cannot help")
    assert translate_paragraphs(client, "m", ["keep me"], source_language="english", prompts={}) == ["keep me"]


def test_request_failure_keeps_original():
    def boom(prompt):
        raise ConnectionError("offline")

    client = _FakeClient(boom)
    assert translate_paragraphs(client, "m", ["still here"], source_language="english", prompts={}) == ["still here"]


def test_long_input_is_split_into_requests():
    client = _FakeClient(_upper_responder)
    paragraphs = ["one two three", "four five", "six"]
    out = translate_paragraphs(client, "m", paragraphs, source_language="english",
                               max_words_per_request=4, prompts={})
    assert out == ["ONE TWO THREE", "FOUR FIVE", "SIX"]
    assert len(client.prompts) == 2
