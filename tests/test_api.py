import os
import unittest
from unittest import mock

from smartpantry_backend import create_app
from smartpantry_backend.services.extraction import VoiceActionExtractor
from smartpantry_backend.services.llm import LLMResult, attempt_json_parse

ITEMS = [
    {"id": "1", "name": "Leite Integral", "category": "dairy", "currentQuantity": 2, "minQuantity": 1, "unit": "l", "updatedAt": 1718000000000},
    {"id": "2", "name": "Arroz Branco", "category": "cereals_grains", "currentQuantity": 0, "minQuantity": 1, "unit": "kg", "updatedAt": "2024-06-10T08:00:00Z"},
]


class _StubLLMClient:
    def __init__(self, raw_text: str = "", error: Exception | None = None):
        self.raw_text = raw_text
        self.error = error

    def run_prompt(self, *, prompt: str, system_prompt: str | None = None) -> LLMResult:
        if self.error is not None:
            raise self.error
        return LLMResult(raw_text=self.raw_text, parsed_json=attempt_json_parse(self.raw_text))


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.app = create_app()
        self.app.extensions.pop("voice_action_extractor", None)
        self.client = self.app.test_client()

    def _use_llm_output(self, raw_text: str = "", error: Exception | None = None):
        self.app.extensions["voice_action_extractor"] = VoiceActionExtractor(
            _StubLLMClient(raw_text, error)
        )


class HealthcheckTests(ApiTestCase):
    def test_healthz(self):
        for path in ["/healthz", "/api/healthz"]:
            with self.subTest(path=path):
                response = self.client.get(path)
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.get_json(), {"status": "ok"})


class ResolveEndpointTests(ApiTestCase):
    def test_update_existing_item(self):
        response = self.client.post(
            "/api/voice/resolve",
            json={"items": ITEMS, "action": {"intent": "consumi", "productName": "leites", "amount": 1}},
        )
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["decision"]["status"], "update")
        self.assertEqual(body["decision"]["itemId"], "1")
        self.assertEqual(body["decision"]["quantity"], 1)
        self.assertEqual(body["message"], "Quantidade de Leite Integral atualizada.")

    def test_create_message_in_english(self):
        response = self.client.post(
            "/api/voice/resolve",
            json={
                "lang": "en",
                "items": ITEMS,
                "action": {"action": "bought", "productName": "Bananas", "amount": 6, "category": "fruits"},
            },
        )
        body = response.get_json()
        self.assertEqual(body["decision"]["status"], "create")
        self.assertEqual(body["decision"]["category"], "fruits_vegetables")
        self.assertEqual(body["decision"]["unit"], "un")
        self.assertEqual(body["message"], "Bananas added to your pantry.")

    def test_reject_not_found(self):
        response = self.client.post(
            "/api/voice/resolve",
            json={"items": ITEMS, "action": {"intent": "usar", "productName": "shampoo", "amount": 1}},
        )
        body = response.get_json()
        self.assertEqual(body["decision"]["status"], "reject")
        self.assertEqual(body["decision"]["reason"], "not_found")
        self.assertEqual(body["message"], "Não encontrei shampoo na sua despensa.")

    def test_malformed_payloads(self):
        cases = [
            {"items": "nope", "action": {}},
            {"items": [{"name": "no id"}], "action": {}},
            {"items": [{"id": "1", "currentQuantity": "lots"}], "action": {}},
            {"items": [{"id": "1", "updatedAt": 1e22}], "action": {}},
            {"items": [{"id": "1", "updatedAt": float("inf")}], "action": {}},
            {"items": ITEMS, "action": "add leite"},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                response = self.client.post("/api/voice/resolve", json=payload)
                self.assertEqual(response.status_code, 400)
                self.assertIn("error", response.get_json())


class TranscriptEndpointTests(ApiTestCase):
    def test_requires_transcript(self):
        response = self.client.post("/api/voice/transcript", json={"items": ITEMS})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Transcrição de voz vazia"})

    def test_disabled_without_llm(self):
        response = self.client.post(
            "/api/voice/transcript", json={"transcript": "adicionar leite", "items": ITEMS}
        )
        self.assertEqual(response.status_code, 503)

    def test_extracts_and_resolves(self):
        self._use_llm_output('{"intent": "add", "product_name": "arroz", "quantity": 2, "unit": "quilos"}')
        response = self.client.post(
            "/api/voice/transcript",
            json={"transcript": "Comprei dois arrozes", "items": ITEMS},
        )
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["action"]["productName"], "arroz")
        self.assertEqual(body["decision"]["status"], "update")
        self.assertEqual(body["decision"]["itemId"], "2")
        self.assertEqual(body["decision"]["quantity"], 2)

    def test_not_understood(self):
        self._use_llm_output('{"intent": "none", "product_name": "", "quantity": 0}')
        response = self.client.post(
            "/api/voice/transcript",
            json={"transcript": "bom dia", "items": ITEMS, "lang": "en"},
        )
        body = response.get_json()
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(body["decision"])
        self.assertEqual(body["message"], "I could not understand your command. Please try again.")

    def test_llm_failure_returns_bad_gateway(self):
        self._use_llm_output("no json here")
        response = self.client.post(
            "/api/voice/transcript", json={"transcript": "adicionar leite", "items": ITEMS}
        )
        self.assertEqual(response.status_code, 502)


class ShoppingListEndpointTests(ApiTestCase):
    def test_groups_items_below_minimum(self):
        response = self.client.post("/api/shopping-list", json={"items": ITEMS, "lang": "en"})
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["itemCount"], 1)
        self.assertEqual(body["groups"][0]["categoryId"], "cereals_grains")
        self.assertEqual(body["groups"][0]["categoryLabel"], "Grains & Cereals")
        self.assertEqual(body["groups"][0]["items"][0]["neededLabel"], "1 kg")

    def test_empty_body(self):
        response = self.client.post("/api/shopping-list")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {"groups": [], "itemCount": 0})

    def test_out_of_range_timestamp_is_rejected(self):
        for updated_at in [1e22, -1e22, float("inf")]:
            with self.subTest(updated_at=updated_at):
                response = self.client.post(
                    "/api/shopping-list",
                    json={"items": [{"id": "1", "name": "Leite", "updatedAt": updated_at}]},
                )
                self.assertEqual(response.status_code, 400)
                self.assertIn("error", response.get_json())


class DefaultLanguageTests(ApiTestCase):
    def test_unsupported_configured_default_falls_back_to_portuguese(self):
        self.app.config["DEFAULT_LANG"] = "fr"
        response = self.client.post(
            "/api/voice/resolve",
            json={"items": ITEMS, "action": {"intent": "usar", "productName": "shampoo", "amount": 1}},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["message"], "Não encontrei shampoo na sua despensa.")

    def test_create_app_ignores_unsupported_env_default(self):
        cases = [("fr", "pt"), (" EN ", "en"), ("", "pt")]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                with mock.patch.dict(os.environ, {"SMARTPANTRY_DEFAULT_LANG": raw}):
                    app = create_app()
                self.assertEqual(app.config["DEFAULT_LANG"], expected)

    def test_english_env_default_is_used_without_lang(self):
        with mock.patch.dict(os.environ, {"SMARTPANTRY_DEFAULT_LANG": "en"}):
            app = create_app()
        app.extensions.pop("voice_action_extractor", None)
        response = app.test_client().post("/api/voice/transcript", json={"items": ITEMS})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Voice transcript is empty"})


if __name__ == "__main__":
    unittest.main()
