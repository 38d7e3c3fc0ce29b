from sqlalchemy.orm import Session

from search_portal.models.search_history import SearchHistory
from search_portal.core.security import generate_id


def create(
    db: Session,
    search_strings: list[str],
    search_names: list[str],
    user_id: str | None = None,
    results_count: int = 0,
) -> SearchHistory:
    row = SearchHistory(
        id=generate_id(),
        search_strings=list(search_strings),
        search_names=list(search_names),
        results_count=results_count,
        user_id=user_id,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_recent(
    db: Session,
    user_id: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[SearchHistory], int]:
    """History newest first, optionally for one user. Returns (items, total)."""
    q = db.query(SearchHistory).order_by(SearchHistory.created_at.desc())
    if user_id:
        q = q.filter(SearchHistory.user_id == user_id)
    total = q.count()
    return q.offset(offset).limit(limit).all(), total
