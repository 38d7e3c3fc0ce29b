from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from search_portal.database import Base


def normalize_translations(value) -> dict[str, str]:
    """Coerce a stored translations value to {language_code: text}; anything else becomes {}."""
    if not isinstance(value, dict):
        return {}
    return {str(code): text for code, text in value.items() if isinstance(text, str)}


class SearchString(Base):
    """Admin-curated base search term with per-language translations."""

    __tablename__ = "search_strings"

    id = Column(String, primary_key=True, index=True)
    string_value = Column(String, nullable=False)
    translations = Column(JSONB, nullable=False, default=dict)  # {"es": "...", "fr": "..."}
    is_active = Column(Boolean, default=True, index=True)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
