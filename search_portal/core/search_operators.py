"""
Shield boolean search syntax from translation.

Quoted phrases and AND/OR/NOT (plus the symbolic forms &, |, !) are swapped
for placeholders before text is handed to a translator and swapped back
afterwards. Restoring writes the canonical keyword for every operator, so a
symbolic or lowercase operator comes back as AND, OR or NOT.
"""
import re
from typing import NamedTuple

# Scan order matters: word forms first, then symbols.
SEARCH_OPERATORS = ("AND", "OR", "NOT", "&", "|", "!")
CANONICAL_OPERATOR = {"AND": "AND", "OR": "OR", "NOT": "NOT", "&": "AND", "|": "OR", "!": "NOT"}

_QUOTED_RE = re.compile(r'"[^"]*"')
_WORD_OPERATOR_RE = re.compile(r"\b(AND|OR|NOT)\b", re.IGNORECASE)
_OPERATOR_PLACEHOLDER_RE = re.compile(r"__OPERATOR_(AND|OR|NOT)_\d+__", re.IGNORECASE)
_NON_ALPHA_RE = re.compile(r"[^a-zA-Z]")


class PreservedText(NamedTuple):
    preserved_text: str
    tokens: list[str]


def _quoted_placeholder(index: int) -> str:
    return f"__QUOTED_{index}__"


def _operator_pattern(operator: str) -> re.Pattern:
    if operator.isalpha():
        return re.compile(rf"\b{operator}\b", re.IGNORECASE)
    # Symbols count only when they stand alone, so "AT&T" and "Yahoo!" are left intact.
    return re.compile(rf"(?<!\S){re.escape(operator)}(?!\S)")


def preserve(text: str) -> PreservedText:
    """Replace quoted phrases, then operators, with placeholders. Returns (text, tokens)."""
    tokens: list[str] = []
    preserved = text or ""

    for index, phrase in enumerate(_QUOTED_RE.findall(preserved)):
        tokens.append(phrase)
        preserved = preserved.replace(phrase, _quoted_placeholder(index), 1)

    # Word and symbolic forms of one operator share a counter so placeholders stay unique.
    counters: dict[str, int] = {}
    for operator in SEARCH_OPERATORS:
        canonical = CANONICAL_OPERATOR[operator]

        def _swap(match: re.Match) -> str:
            occurrence = counters.get(canonical, 0)
            counters[canonical] = occurrence + 1
            tokens.append(match.group(0))
            return f"__OPERATOR_{canonical}_{occurrence}__"

        preserved = _operator_pattern(operator).sub(_swap, preserved)

    return PreservedText(preserved, tokens)


def restore(translated_text: str, tokens: list[str]) -> str:
    """Put quoted phrases back by index and rewrite operator placeholders as canonical keywords."""
    restored = translated_text or ""
    for index, token in enumerate(tokens or []):
        if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
            restored = restored.replace(_quoted_placeholder(index), token)
    return _OPERATOR_PLACEHOLDER_RE.sub(lambda m: m.group(1).upper(), restored)


def should_translate(text: str) -> bool:
    """False when nothing alphabetic is left once operator keywords are dropped."""
    remainder = _WORD_OPERATOR_RE.sub(" ", text or "")
    return len(_NON_ALPHA_RE.sub("", remainder)) > 0


def has_operators(text: str) -> bool:
    return bool(_WORD_OPERATOR_RE.search(text or ""))


def check_translation_operators(original: str, translation: str) -> str | None:
    """Return a warning when the original uses operators and the translation dropped them."""
    if has_operators(original) and not has_operators(translation):
        return (
            "Original string contains search operators. "
            "Make sure to include equivalent operators in your translation."
        )
    return None
