"""Admin-specific repository functions for stats and system data."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from search_portal.models.user import User
from search_portal.models.search_string import SearchString
from search_portal.models.string_bucket import StringBucket
from search_portal.models.search_history import SearchHistory
from search_portal.models.brand import Brand


def get_stats(db: Session) -> dict:
    """Return admin dashboard stats."""
    user_count = db.query(func.count(User.id)).scalar() or 0
    active_user_count = db.query(func.count(User.id)).filter(User.is_active == True).scalar() or 0
    string_count = db.query(func.count(SearchString.id)).scalar() or 0
    active_string_count = db.query(func.count(SearchString.id)).filter(SearchString.is_active == True).scalar() or 0
    bucket_count = db.query(func.count(StringBucket.id)).scalar() or 0
    brand_count = db.query(func.count(Brand.id)).scalar() or 0
    history_count = db.query(func.count(SearchHistory.id)).scalar() or 0
    return {
        "users_total": user_count,
        "users_active": active_user_count,
        "search_strings": string_count,
        "search_strings_active": active_string_count,
        "buckets": bucket_count,
        "brands": brand_count,
        "searches": history_count,
    }
