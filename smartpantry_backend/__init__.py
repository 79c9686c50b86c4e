import logging
import os

from flask import Flask, jsonify

from smartpantry_backend.api import init_app as init_api
from smartpantry_backend.api.deps import SUPPORTED_LANGS
from smartpantry_backend.config import DEFAULT_LANG, DEFAULT_LLM_MODEL
from smartpantry_backend.services.extraction import VoiceActionExtractor
from smartpantry_backend.services.llm import (
    TextLLMSettings,
    init_text_llm_client,
)


def create_app() -> Flask:
    """Application factory for the SmartPantry backend."""
    app = Flask(__name__)

    _configure_logging(app)

    default_lang = os.environ.get("SMARTPANTRY_DEFAULT_LANG", DEFAULT_LANG).strip().lower()
    if default_lang not in SUPPORTED_LANGS:
        app.logger.warning(
            "unsupported SMARTPANTRY_DEFAULT_LANG=%s; using %s", default_lang, DEFAULT_LANG
        )
        default_lang = DEFAULT_LANG
    app.config["DEFAULT_LANG"] = default_lang

    @app.get("/healthz")
    def healthcheck():
        return jsonify(status="ok")

    @app.get("/api/healthz")
    def api_healthcheck():
        return jsonify(status="ok")

    _init_voice_extractor(app)
    init_api(app)

    return app


def _configure_logging(app: Flask) -> None:
    """Ensure application and root loggers emit INFO-level logs."""

    logging.basicConfig(level=logging.INFO)
    logging.getLogger().setLevel(logging.INFO)
    app.logger.setLevel(logging.INFO)


def _init_voice_extractor(app: Flask) -> None:
    """Wire the transcript extractor when an LLM key is available."""

    llm_api_key = os.environ.get("SMARTPANTRY_LLM_API_KEY") or os.environ.get(
        "OPENAI_API_KEY"
    )
    if not llm_api_key:
        app.logger.warning(
            "SMARTPANTRY_LLM_API_KEY/OPENAI_API_KEY not set; voice transcript endpoint disabled"
        )
        return

    llm_model = os.environ.get("SMARTPANTRY_LLM_MODEL", DEFAULT_LLM_MODEL)
    llm_client = init_text_llm_client(
        TextLLMSettings(api_key=llm_api_key, model=llm_model)
    )
    app.extensions["text_llm_client"] = llm_client
    app.extensions["voice_action_extractor"] = VoiceActionExtractor(llm_client)
    app.logger.info("voice transcript extraction enabled", extra={"model": llm_model})


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000)
