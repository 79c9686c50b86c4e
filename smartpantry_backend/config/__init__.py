"""Static configuration shipped with the codebase."""

# Catalog and LLM defaults live in dedicated modules for clarity and reuse.
from .catalog import (
    CATEGORIES,
    DEFAULT_CATEGORY_ID,
    DEFAULT_UNIT,
    UNITS,
    get_category,
    get_category_label,
)
from .llm import DEFAULT_LANG, DEFAULT_LLM_MODEL, DEFAULT_VOICE_EXTRACTION_PROMPTS

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY_ID",
    "DEFAULT_LANG",
    "DEFAULT_LLM_MODEL",
    "DEFAULT_UNIT",
    "DEFAULT_VOICE_EXTRACTION_PROMPTS",
    "UNITS",
    "get_category",
    "get_category_label",
]
