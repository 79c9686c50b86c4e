import unittest
from types import SimpleNamespace

from smartpantry_backend.services.extraction import (
    VoiceActionExtractor,
    VoiceExtractionError,
)
from smartpantry_backend.services.llm import (
    LLMResult,
    TextLLMClient,
    TextLLMSettings,
    attempt_json_parse,
)


class _StubLLMClient:
    def __init__(self, raw_text: str = "", error: Exception | None = None):
        self.raw_text = raw_text
        self.error = error
        self.prompts: list[str] = []
        self.system_prompts: list[str | None] = []

    def run_prompt(self, *, prompt: str, system_prompt: str | None = None) -> LLMResult:
        self.prompts.append(prompt)
        self.system_prompts.append(system_prompt)
        if self.error is not None:
            raise self.error
        return LLMResult(raw_text=self.raw_text, parsed_json=attempt_json_parse(self.raw_text))


class VoiceActionExtractorTests(unittest.TestCase):
    def test_extracts_action_from_fenced_json(self):
        client = _StubLLMClient(
            '```json\n{"intent": "add", "product_name": "banana", "quantity": 6, '
            '"unit": "un", "category": "frutas", "message": "ok"}\n```'
        )
        action = VoiceActionExtractor(client).extract("Adicionar seis bananas")

        self.assertIsNotNone(action)
        self.assertEqual(action.intent, "add")
        self.assertEqual(action.product_name, "banana")
        self.assertEqual(action.amount, 6)
        self.assertEqual(action.unit, "un")
        self.assertEqual(action.category, "frutas")
        self.assertEqual(client.prompts, ["Transcription: adicionar seis banana"])
        self.assertIn("Extraia", client.system_prompts[0])

    def test_uses_english_prompt(self):
        client = _StubLLMClient('{"intent": "consume", "product_name": "milk", "quantity": 1}')
        action = VoiceActionExtractor(client).extract("I used one milk", lang="en")
        self.assertEqual(action.intent, "consume")
        self.assertIn("Extract the inventory action", client.system_prompts[0])
        self.assertEqual(client.prompts, ["Transcription: i used one milk"])

    def test_unknown_lang_falls_back_to_portuguese_instructions(self):
        client = _StubLLMClient('{"intent": "add", "product_name": "leite", "quantity": 1}')
        VoiceActionExtractor(client).extract("adicionar leite", lang="fr")
        self.assertIn("Extraia", client.system_prompts[0])

    def test_none_intent_or_missing_product_yields_none(self):
        for raw in [
            '{"intent": "none", "product_name": "", "quantity": 0}',
            '{"intent": "add", "product_name": "  ", "quantity": 1}',
        ]:
            with self.subTest(raw=raw):
                self.assertIsNone(VoiceActionExtractor(_StubLLMClient(raw)).extract("hmm"))

    def test_empty_transcript_skips_llm(self):
        client = _StubLLMClient()
        self.assertIsNone(VoiceActionExtractor(client).extract("  ...  "))
        self.assertEqual(client.prompts, [])

    def test_invalid_outputs_raise(self):
        for raw in [
            "",
            "sorry, I cannot help",
            '{"intent": "dance", "product_name": "x", "quantity": 1}',
            '{"intent": "add", "product_name": "x", "quantity": "many"}',
        ]:
            with self.subTest(raw=raw):
                with self.assertRaises(VoiceExtractionError):
                    VoiceActionExtractor(_StubLLMClient(raw)).extract("adicionar leite")

    def test_transport_failure_is_wrapped(self):
        client = _StubLLMClient(error=RuntimeError("boom"))
        with self.assertLogs("smartpantry_backend.services.extraction", level="ERROR"):
            with self.assertRaises(VoiceExtractionError) as ctx:
                VoiceActionExtractor(client).extract("adicionar leite")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)


class _StubResponses:
    def __init__(self, output_text: str):
        self.output_text = output_text
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(output_text=self.output_text)


class TextLLMClientTests(unittest.TestCase):
    def test_system_prompt_is_sent_as_system_role(self):
        client = TextLLMClient(TextLLMSettings(api_key="test-key", model="test-model"))
        responses = _StubResponses('{"intent": "none"}')
        client._client = SimpleNamespace(responses=responses)  # type: ignore[assignment]

        result = client.run_prompt(
            prompt="Transcription: adicionar leite", system_prompt="Extraia a ação"
        )

        self.assertEqual(result.parsed_json, {"intent": "none"})
        call = responses.calls[0]
        self.assertEqual(call["model"], "test-model")
        self.assertEqual([entry["role"] for entry in call["input"]], ["system", "user"])
        self.assertEqual(call["input"][0]["content"][0]["text"], "Extraia a ação")
        self.assertEqual(
            call["input"][1]["content"][0]["text"], "Transcription: adicionar leite"
        )

    def test_blank_prompt_is_rejected(self):
        client = TextLLMClient(TextLLMSettings(api_key="test-key"))
        with self.assertRaises(ValueError):
            client.run_prompt(prompt="   ")


class AttemptJsonParseTests(unittest.TestCase):
    def test_extracts_object_from_surrounding_text(self):
        self.assertEqual(attempt_json_parse('Sure! {"a": 1} done'), {"a": 1})

    def test_invalid_json(self):
        self.assertIsNone(attempt_json_parse("{not json}"))
        self.assertIsNone(attempt_json_parse(None))


if __name__ == "__main__":
    unittest.main()
