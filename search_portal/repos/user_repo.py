from sqlalchemy.orm import Session

from search_portal.models.user import User
from search_portal.core.security import hash_password, generate_id


def get_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(
    db: Session,
    username: str,
    password: str,
    *,
    email: str | None = None,
    role: str = "viewer",
    created_by: str | None = None,
) -> User:
    user = User(
        id=generate_id(),
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=role,
        created_by=created_by,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    email: str | None = None,
    password_hash: str | None = None,
    role: str | None = None,
    is_active: bool | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if email is not None:
        user.email = email or None
    if password_hash is not None:
        user.password_hash = password_hash
    if role is not None:
        user.role = role
    if is_active is not None:
        user.is_active = is_active
    db.commit()
    db.refresh(user)
    return user


def get_all_users(db: Session) -> list[User]:
    """List all users for admin. Order by created_at desc."""
    return db.query(User).order_by(User.created_at.desc()).all()


def get_all_users_paginated(
    db: Session,
    search: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[User], int]:
    """List users with optional username search and pagination. Returns (items, total)."""
    q = db.query(User).order_by(User.created_at.desc())
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(User.username.ilike(term))
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total


def get_usernames(db: Session, user_ids: list[str]) -> dict[str, str]:
    """Map user id -> username for the given ids."""
    if not user_ids:
        return {}
    rows = db.query(User).filter(User.id.in_(user_ids)).all()
    return {u.id: u.username for u in rows}


def delete_user(db: Session, user_id: str) -> bool:
    """Delete user; their buckets go with them (CASCADE). Returns True if deleted."""
    user = get_by_id(db, user_id)
    if not user:
        return False
    db.delete(user)
    db.commit()
    return True
