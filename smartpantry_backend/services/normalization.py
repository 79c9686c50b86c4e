"""Utilities for normalizing spoken product names and voice transcripts."""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM_SPACE = re.compile(r"[^a-z0-9\s]+")
_COLLAPSE_SPACES = re.compile(r"\s+")

# Ordered plural rules: (suffix, replacement, minimum token length).
# First match wins; the length guard keeps short words like "gas" intact.
_SINGULAR_RULES: tuple[tuple[str, str, int], ...] = (
    ("zes", "z", 5),  # arrozes -> arroz
    ("tes", "te", 5),  # tomates -> tomate
    ("es", "", 5),  # boxes -> box
    ("s", "", 4),  # bananas -> banana
)

# Words of the command grammar that must survive transcript singularization.
_COMMAND_WORDS = frozenset(
    {
        # verbs
        "adicionar", "adicione", "adiciona", "adicionei", "consumir", "consuma",
        "consome", "consumi", "remover", "remove", "retirar", "retire", "usar",
        "use", "usei", "comprar", "compre", "comprei", "inserir", "insert",
        "add", "adds", "consume", "consumes", "uses", "used", "buy", "buys",
        "bought",
        # articles, pronouns, prepositions and connectives
        "i", "you", "me", "my", "us", "is", "this", "its", "o", "a", "os", "as",
        "um", "uma", "uns", "umas", "de", "do", "da", "dos", "das", "no", "na",
        "nos", "nas", "para", "por", "com", "sem", "e", "ou", "mais", "menos",
        "plus", "less", "que", "what", "please", "porfavor", "favor",
    }
)

# Spoken quantities; several end in "s" and would otherwise be clipped.
_QUANTITY_WORDS = frozenset(
    {
        "dois", "duas", "tres", "seis", "dez", "doze", "treze", "dezesseis",
        "duzentos", "duzentas", "trezentos", "trezentas", "quatrocentos",
        "quatrocentas", "quinhentos", "quinhentas", "seiscentos", "seiscentas",
        "setecentos", "setecentas", "oitocentos", "oitocentas", "novecentos",
        "novecentas", "duzias", "dezenas", "tens", "dozens", "hundreds",
        "thousands",
    }
)

PROTECTED_TRANSCRIPT_WORDS = _COMMAND_WORDS | _QUANTITY_WORDS


def normalize_text(value: object) -> str:
    """Fold accents, lowercase and collapse punctuation into single spaces.

    ``"Feijão-Preto!"`` becomes ``"feijao preto"``. The result only holds
    ``[a-z0-9 ]`` with no doubled or surrounding spaces, and applying the
    function twice gives the same string.
    """

    if value is None:
        return ""
    decomposed = unicodedata.normalize("NFD", str(value))
    stripped = "".join(
        char for char in decomposed if not unicodedata.combining(char)
    )
    normalized = stripped.lower()
    normalized = _NON_ALNUM_SPACE.sub(" ", normalized)
    # ``\s`` also matches non-ASCII whitespace, which collapses to a plain space.
    return _COLLAPSE_SPACES.sub(" ", normalized).strip()


def singularize_token(token: str) -> str:
    """Collapse a plural token to a pseudo-singular form.

    This is a suffix heuristic for Portuguese and English plurals, not a
    stemmer, so rare words may be over- or under-stemmed.
    """

    for suffix, replacement, min_length in _SINGULAR_RULES:
        if token.endswith(suffix) and len(token) >= min_length:
            return token[: -len(suffix)] + replacement
    return token


def tokenize_name(value: object) -> list[str]:
    """Return the singularized tokens of a normalized name."""

    normalized = normalize_text(value)
    if not normalized:
        return []
    return [singularize_token(token) for token in normalized.split(" ") if token]


def normalize_voice_transcript_to_singular(transcript: object) -> str:
    """Singularize the product nouns of a whole utterance.

    Command verbs, connectives and spoken quantities pass through unchanged.
    """

    normalized = normalize_text(transcript)
    if not normalized:
        return ""

    words = []
    for token in normalized.split(" "):
        if token in PROTECTED_TRANSCRIPT_WORDS:
            words.append(token)
        else:
            words.append(singularize_token(token))
    return " ".join(words)
