"""Shared API dependencies and helpers."""

from flask import current_app, request

from smartpantry_backend.config import DEFAULT_LANG
from smartpantry_backend.models import InventoryRecord, parse_inventory_records
from smartpantry_backend.services.extraction import VoiceActionExtractor

SUPPORTED_LANGS = {"pt", "en"}


def get_voice_extractor() -> VoiceActionExtractor:
    """Return the configured transcript extractor."""

    extractor: VoiceActionExtractor | None = current_app.extensions.get(
        "voice_action_extractor"
    )
    if extractor is None:
        raise RuntimeError("voice extraction LLM client is not configured")
    return extractor


def get_json_payload() -> dict:
    """Return the request body as a JSON object, or an empty dict."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def get_request_lang(payload: dict) -> str:
    """Return the response language requested by the client."""

    default = current_app.config.get("DEFAULT_LANG", DEFAULT_LANG)
    if default not in SUPPORTED_LANGS:
        default = DEFAULT_LANG
    lang = str(payload.get("lang") or default).strip().lower()
    return lang if lang in SUPPORTED_LANGS else default


def get_inventory_records(payload: dict) -> list[InventoryRecord]:
    """Parse the ``items`` list of the request body, raising ``ValueError``."""

    return parse_inventory_records(payload.get("items"))
