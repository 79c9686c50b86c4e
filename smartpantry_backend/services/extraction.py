"""LLM-powered extraction of a stock action from a voice transcript."""

from __future__ import annotations

import logging
import math
from typing import Mapping, Protocol

from smartpantry_backend.config.llm import (
    DEFAULT_LANG,
    DEFAULT_VOICE_EXTRACTION_PROMPTS,
)
from smartpantry_backend.models import CandidateAction
from smartpantry_backend.services.llm import LLMResult
from smartpantry_backend.services.normalization import (
    normalize_voice_transcript_to_singular,
)

logger = logging.getLogger(__name__)

_ALLOWED_INTENTS = {"add", "consume", "none"}


class VoiceExtractionError(RuntimeError):
    """Raised when the extraction LLM call fails or returns invalid data."""


class PromptRunner(Protocol):
    def run_prompt(
        self, *, prompt: str, system_prompt: str | None = None
    ) -> LLMResult: ...


def _instructions_for(lang: str, prompts: Mapping[str, str]) -> str:
    return prompts.get(lang) or prompts[DEFAULT_LANG]


def _parse_llm_payload(payload: object) -> CandidateAction | None:
    """Validate the extracted action; ``None`` means nothing actionable was heard."""

    if not isinstance(payload, dict):
        raise ValueError("LLM output must be a JSON object")

    intent = str(payload.get("intent") or "none").strip().lower()
    if intent not in _ALLOWED_INTENTS:
        raise ValueError(f"invalid intent {intent!r}")

    product_name = str(payload.get("product_name") or "").strip()
    if intent == "none" or not product_name:
        return None

    try:
        quantity = float(payload.get("quantity") or 0)
    except (TypeError, ValueError) as exc:
        raise ValueError("quantity must be a number") from exc
    if not math.isfinite(quantity):
        raise ValueError("quantity must be finite")

    unit = payload.get("unit")
    category = payload.get("category")
    return CandidateAction(
        intent=intent,
        product_name=product_name,
        amount=quantity,
        unit=str(unit).strip() if unit else None,
        category=str(category).strip() if category else None,
    )


class VoiceActionExtractor:
    """Ask a text LLM for the stock action described by a spoken sentence."""

    def __init__(
        self,
        llm_client: PromptRunner,
        *,
        prompts: Mapping[str, str] = DEFAULT_VOICE_EXTRACTION_PROMPTS,
    ) -> None:
        self._llm_client = llm_client
        self._prompts = prompts

    def extract(
        self, transcript: str, lang: str = DEFAULT_LANG
    ) -> CandidateAction | None:
        """Return the candidate action for ``transcript``.

        The transcript is singularized before it reaches the model so plural
        product names line up with the pantry's item names.
        """

        singular = normalize_voice_transcript_to_singular(transcript)
        if not singular:
            return None

        try:
            result = self._llm_client.run_prompt(
                prompt=f"Transcription: {singular}",
                system_prompt=_instructions_for(lang, self._prompts),
            )
        except Exception as exc:
            logger.exception("voice extraction LLM request failed")
            raise VoiceExtractionError("failed to invoke LLM") from exc

        if not result.raw_text:
            raise VoiceExtractionError("LLM returned empty output")
        if result.parsed_json is None:
            raise VoiceExtractionError("LLM did not return valid JSON")

        try:
            return _parse_llm_payload(result.parsed_json)
        except ValueError as exc:
            raise VoiceExtractionError(str(exc)) from exc
