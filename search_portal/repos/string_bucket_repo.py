from sqlalchemy.orm import Session

from search_portal.models.string_bucket import StringBucket
from search_portal.core.security import generate_id


def create(db: Session, bucket_name: str, string_ids: list[str], user_id: str | None = None) -> StringBucket:
    bucket = StringBucket(
        id=generate_id(),
        bucket_name=bucket_name,
        string_ids=list(string_ids),
        user_id=user_id,
    )
    db.add(bucket)
    db.commit()
    db.refresh(bucket)
    return bucket


def get_all(db: Session, user_id: str | None = None) -> list[StringBucket]:
    """Buckets newest first, optionally only those owned by user_id."""
    q = db.query(StringBucket)
    if user_id:
        q = q.filter(StringBucket.user_id == user_id)
    return q.order_by(StringBucket.created_at.desc()).all()


def get_by_id(db: Session, bucket_id: str, user_id: str | None = None) -> StringBucket | None:
    q = db.query(StringBucket).filter(StringBucket.id == bucket_id)
    if user_id:
        q = q.filter(StringBucket.user_id == user_id)
    return q.first()


def delete_one(db: Session, bucket_id: str, user_id: str | None = None) -> bool:
    bucket = get_by_id(db, bucket_id, user_id)
    if not bucket:
        return False
    db.delete(bucket)
    db.commit()
    return True
