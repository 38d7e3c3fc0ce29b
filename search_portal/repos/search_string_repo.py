from sqlalchemy.orm import Session

from search_portal.models.search_string import SearchString
from search_portal.core.security import generate_id


def create(db: Session, string_value: str, created_by: str | None = None) -> SearchString:
    item = SearchString(
        id=generate_id(),
        string_value=string_value,
        translations={},
        is_active=True,
        created_by=created_by,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def get_by_id(db: Session, string_id: str) -> SearchString | None:
    return db.query(SearchString).filter(SearchString.id == string_id).first()


def get_all(db: Session) -> list[SearchString]:
    """Every string, newest first (admin view)."""
    return db.query(SearchString).order_by(SearchString.created_at.desc()).all()


def get_active(db: Session) -> list[SearchString]:
    """Strings that take part in searches, newest first."""
    return (
        db.query(SearchString)
        .filter(SearchString.is_active == True)
        .order_by(SearchString.created_at.desc())
        .all()
    )


def update(
    db: Session,
    string_id: str,
    *,
    string_value: str | None = None,
    is_active: bool | None = None,
) -> SearchString | None:
    item = get_by_id(db, string_id)
    if not item:
        return None
    if string_value is not None:
        item.string_value = string_value
    if is_active is not None:
        item.is_active = is_active
    db.commit()
    db.refresh(item)
    return item


def set_translations(db: Session, string_id: str, translations: dict[str, str]) -> SearchString | None:
    """Replace the translations mapping (a new dict so the JSONB change is flushed)."""
    item = get_by_id(db, string_id)
    if not item:
        return None
    item.translations = dict(translations)
    db.commit()
    db.refresh(item)
    return item


def delete_one(db: Session, string_id: str) -> bool:
    """Delete a string. Buckets that reference it keep the id; it is dropped when resolved."""
    item = get_by_id(db, string_id)
    if not item:
        return False
    db.delete(item)
    db.commit()
    return True
