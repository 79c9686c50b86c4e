"""API package wiring for SmartPantry backend."""

from flask import Flask

from .shopping import bp as shopping_bp
from .voice import bp as voice_bp


def init_app(app: Flask) -> None:
    """Register all API blueprints on the given application."""

    app.register_blueprint(shopping_bp)
    app.register_blueprint(voice_bp)
