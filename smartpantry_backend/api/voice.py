"""Endpoints that resolve voice commands against the caller's pantry."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from smartpantry_backend.api.deps import (
    get_inventory_records,
    get_json_payload,
    get_request_lang,
    get_voice_extractor,
)
from smartpantry_backend.models import CandidateAction
from smartpantry_backend.services.extraction import VoiceExtractionError
from smartpantry_backend.services.voice_commands import (
    VoiceDecision,
    resolve_voice_command,
)

bp = Blueprint("voice", __name__, url_prefix="/api/voice")

_MESSAGES = {
    "pt": {
        "invalid_command": "Comando de voz inválido.",
        "not_found": "Não encontrei {name} na sua despensa.",
        "created": "{name} adicionado à despensa.",
        "updated": "Quantidade de {name} atualizada.",
        "not_understood": "Não consegui entender seu comando. Tente novamente.",
        "empty_transcript": "Transcrição de voz vazia",
    },
    "en": {
        "invalid_command": "Invalid voice command.",
        "not_found": "I couldn't find {name} in your pantry.",
        "created": "{name} added to your pantry.",
        "updated": "{name} quantity updated.",
        "not_understood": "I could not understand your command. Please try again.",
        "empty_transcript": "Voice transcript is empty",
    },
}


def _describe(decision: VoiceDecision, lang: str) -> str:
    messages = _MESSAGES[lang]
    if decision.status == "update":
        key = "updated"
    elif decision.status == "create":
        key = "created"
    else:
        key = decision.reason or "invalid_command"
    return messages[key].format(name=decision.name or "")


@bp.post("/resolve")
def resolve_command():
    """Resolve an already-extracted voice action against the given items."""

    payload = get_json_payload()
    lang = get_request_lang(payload)

    try:
        items = get_inventory_records(payload)
        action = CandidateAction.from_payload(payload.get("action"))
    except ValueError as exc:
        return jsonify(error=str(exc)), 400

    decision = resolve_voice_command(items, action)
    current_app.logger.info(
        "voice command resolved",
        extra={"status": decision.status, "item_count": len(items)},
    )
    return jsonify(decision=decision.to_dict(), message=_describe(decision, lang))


@bp.post("/transcript")
def resolve_transcript():
    """Extract an action from a spoken transcript and resolve it."""

    payload = get_json_payload()
    lang = get_request_lang(payload)

    transcript = str(payload.get("transcript") or "").strip()
    if not transcript:
        return jsonify(error=_MESSAGES[lang]["empty_transcript"]), 400

    try:
        items = get_inventory_records(payload)
    except ValueError as exc:
        return jsonify(error=str(exc)), 400

    try:
        extractor = get_voice_extractor()
    except RuntimeError as exc:
        return jsonify(error=str(exc)), 503

    try:
        action = extractor.extract(transcript, lang)
    except VoiceExtractionError as exc:
        current_app.logger.warning("voice extraction failure: %s", exc)
        return jsonify(error=str(exc)), 502

    if action is None:
        return jsonify(
            decision=None,
            action=None,
            message=_MESSAGES[lang]["not_understood"],
        )

    decision = resolve_voice_command(items, action)
    return jsonify(
        decision=decision.to_dict(),
        action={
            "intent": action.intent,
            "productName": action.product_name,
            "amount": action.amount,
            "unit": action.unit,
            "category": action.category,
        },
        message=_describe(decision, lang),
    )
