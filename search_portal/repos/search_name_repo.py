from sqlalchemy.orm import Session

from search_portal.models.search_name import SearchName
from search_portal.core.security import generate_id


def bulk_insert(db: Session, names: list[str], user_id: str | None = None) -> int:
    """Log the names used by one search in a single commit. Returns the number inserted."""
    if not names:
        return 0
    db.add_all([SearchName(id=generate_id(), name_value=name, user_id=user_id) for name in names])
    db.commit()
    return len(names)
