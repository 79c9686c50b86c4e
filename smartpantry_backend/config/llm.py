"""Defaults for the transcript extraction LLM that are tracked in Git."""

# Model version used by default. Can be overridden via env if needed.
DEFAULT_LLM_MODEL = "gpt-4o-mini"

# Prompts asking the model to turn a spoken sentence into a stock action.
DEFAULT_VOICE_EXTRACTION_PROMPTS = {
    "en": (
        "Extract the inventory action from the user's speech and return JSON only "
        'with this schema: {"intent":"add|consume|none","product_name":"string",'
        '"quantity":number,"unit":"un|kg|l|g|ml|package|box","category":"string",'
        '"message":"short english message"}. '
        "Copy product_name exactly as spoken, without translating it. "
        "If the action is unclear, use intent=none with quantity=0."
    ),
    "pt": (
        "Extraia a ação de estoque da fala do usuário e responda somente JSON no "
        'formato: {"intent":"add|consume|none","product_name":"string",'
        '"quantity":number,"unit":"un|kg|l|g|ml|package|box","category":"string",'
        '"message":"mensagem curta em português"}. '
        "Copie product_name exatamente como falado, sem traduzir. "
        "Se não estiver claro, use intent=none com quantity=0."
    ),
}

DEFAULT_LANG = "pt"
