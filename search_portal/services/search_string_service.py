import logging

from sqlalchemy.orm import Session

from search_portal.core.search_operators import (
    check_translation_operators,
    has_operators,
    preserve,
    should_translate,
)
from search_portal.models.search_string import SearchString, normalize_translations
from search_portal.repos.search_string_repo import (
    create as create_string,
    get_by_id,
    set_translations,
)
from search_portal.schemas.search import Notice

logger = logging.getLogger(__name__)

AVAILABLE_LANGUAGES = {
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "ar": "Arabic",
}


class SearchStringError(ValueError):
    """Rejected admin edit (bad language, blank text, dropped operators)."""


class SearchStringNotFound(LookupError):
    pass


def add_search_string(db: Session, value: str, created_by: str | None = None) -> tuple[SearchString, Notice]:
    value = (value or "").strip()
    if not value:
        raise SearchStringError("Search string cannot be empty.")
    item = create_string(db, value, created_by=created_by)
    logger.info("Search string %s added by %s", item.id, created_by)
    if has_operators(value):
        notice = Notice(
            title="Search string added",
            description="Note: Search operators (AND, OR, NOT) will be preserved during translation.",
        )
    else:
        notice = Notice(title="Search string added", description="The search string has been added successfully.")
    return item, notice


def add_translation(db: Session, string_id: str, language: str, text: str) -> tuple[SearchString, Notice]:
    text = (text or "").strip()
    if language not in AVAILABLE_LANGUAGES or not text:
        raise SearchStringError("Please select a language and enter translation text.")
    item = get_by_id(db, string_id)
    if not item:
        raise SearchStringNotFound(string_id)

    warning = check_translation_operators(item.string_value, text)
    if warning:
        raise SearchStringError(warning)

    translations = normalize_translations(item.translations)
    translations[language] = text
    updated = set_translations(db, string_id, translations)
    if not updated:
        raise SearchStringNotFound(string_id)
    return updated, Notice(
        title="Translation added",
        description=f"Translation added in {AVAILABLE_LANGUAGES[language]}.",
    )


def remove_translation(db: Session, string_id: str, language: str) -> SearchString:
    item = get_by_id(db, string_id)
    if not item:
        raise SearchStringNotFound(string_id)
    translations = normalize_translations(item.translations)
    if translations.pop(language, None) is None:
        return item
    updated = set_translations(db, string_id, translations)
    if not updated:
        raise SearchStringNotFound(string_id)
    return updated


def preview_translation(text: str) -> dict:
    """What a translator would be handed for text, and whether it is worth sending at all."""
    preserved_text, tokens = preserve(text)
    return {
        "preserved_text": preserved_text,
        "tokens": tokens,
        "should_translate": should_translate(text),
        "has_operators": has_operators(text),
    }
