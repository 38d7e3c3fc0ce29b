import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from search_portal.database import get_db
from search_portal.dependencies import get_current_admin, get_current_analyst
from search_portal.models.user import User
from search_portal.models.brand import Brand
from search_portal.repos.admin_repo import get_stats
from search_portal.repos.user_repo import (
    get_all_users_paginated,
    get_by_id,
    get_by_username,
    get_usernames,
    create as create_user_repo,
    update as update_user,
    delete_user,
)
from search_portal.repos.search_string_repo import (
    get_all as get_all_strings,
    update as update_string,
    delete_one as delete_string,
)
from search_portal.repos.brand_repo import (
    get_all as get_all_brands,
    get_by_name as get_brand_by_name,
    create as create_brand,
    update as update_brand,
    delete_one as delete_brand,
)
from search_portal.repos.search_history_repo import get_recent as get_recent_history
from search_portal.core.security import hash_password
from search_portal.routers.search import string_to_response, history_to_item
from search_portal.schemas.admin import (
    AdminUserCreate,
    AdminUserUpdate,
    BrandCreate,
    BrandUpdate,
    SearchStringCreate,
    SearchStringUpdate,
    TranslationCreate,
    TranslationPreviewRequest,
)
from search_portal.services.search_string_service import (
    AVAILABLE_LANGUAGES,
    SearchStringError,
    SearchStringNotFound,
    add_search_string,
    add_translation,
    preview_translation,
    remove_translation,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _user_to_response(u: User) -> dict:
    return {
        "id": u.id,
        "username": u.username,
        "email": u.email,
        "role": u.role,
        "is_active": u.is_active,
        "created_at": u.created_at.isoformat() if u.created_at else None,
    }


def _brand_to_response(b: Brand) -> dict:
    return {
        "id": b.id,
        "name": b.name,
        "industry": b.industry,
        "keywords": list(b.keywords) if isinstance(b.keywords, list) else [],
        "risk_level": b.risk_level,
        "is_active": b.is_active,
        "created_at": b.created_at.isoformat() if b.created_at else None,
    }


@router.get("/stats")
def get_admin_stats(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    """Return dashboard stats."""
    try:
        return get_stats(db)
    except Exception as e:
        logger.exception("Admin stats failed for user=%s: %s", user.username, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load admin stats") from e


# ---- Search strings and translations ----
@router.get("/languages")
def list_languages(user: User = Depends(get_current_analyst)):
    return [{"code": code, "name": name} for code, name in AVAILABLE_LANGUAGES.items()]


@router.get("/search-strings")
def list_search_strings(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    """All strings, active or not, newest first."""
    try:
        return [string_to_response(s) for s in get_all_strings(db)]
    except Exception as e:
        logger.exception("Listing search strings failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load search strings") from e


@router.post("/search-strings")
def create_search_string(
    body: SearchStringCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    try:
        item, notice = add_search_string(db, body.string_value, created_by=user.id)
    except SearchStringError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.exception("Adding search string failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add search string") from e
    return {"search_string": string_to_response(item), "notice": notice}


@router.patch("/search-strings/{string_id}")
def update_search_string(
    string_id: str,
    body: SearchStringUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    """Edit the base value and/or toggle whether the string takes part in searches."""
    value = body.string_value.strip() if body.string_value is not None else None
    if value == "":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search string cannot be empty.")
    updated = update_string(db, string_id, string_value=value, is_active=body.is_active)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Search string not found")
    return string_to_response(updated)


@router.delete("/search-strings/{string_id}")
def delete_search_string(
    string_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    if not delete_string(db, string_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Search string not found")
    logger.info("Search string %s deleted by %s", string_id, user.username)
    return {"message": "Search string deleted"}


@router.post("/search-strings/{string_id}/translations")
def create_translation(
    string_id: str,
    body: TranslationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    try:
        item, notice = add_translation(db, string_id, body.language, body.text)
    except SearchStringNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Search string not found") from e
    except SearchStringError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.exception("Adding translation to %s failed: %s", string_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add translation") from e
    return {"search_string": string_to_response(item), "notice": notice}


@router.delete("/search-strings/{string_id}/translations/{language}")
def delete_translation(
    string_id: str,
    language: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    try:
        item = remove_translation(db, string_id, language)
    except SearchStringNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Search string not found") from e
    return string_to_response(item)


@router.post("/translations/preview")
def preview_translation_text(
    body: TranslationPreviewRequest,
    user: User = Depends(get_current_analyst),
):
    """Show the placeholder text a translator would receive."""
    return preview_translation(body.text)


# ---- Brands ----
@router.get("/brands")
def list_brands(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    return [_brand_to_response(b) for b in get_all_brands(db)]


@router.post("/brands")
def create_brand_admin(
    body: BrandCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    if get_brand_by_name(db, body.name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Brand name already exists. Please choose a different name.",
        )
    brand = create_brand(
        db,
        body.name,
        industry=(body.industry or "").strip() or None,
        keywords=body.keywords,
        risk_level=body.risk_level,
        created_by=user.id,
    )
    return _brand_to_response(brand)


@router.patch("/brands/{brand_id}")
def update_brand_admin(
    brand_id: str,
    body: BrandUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    if body.name:
        other = get_brand_by_name(db, body.name)
        if other and other.id != brand_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Brand name already exists")
    updated = update_brand(
        db,
        brand_id,
        name=body.name,
        industry=body.industry.strip() if body.industry is not None else None,
        keywords=body.keywords,
        risk_level=body.risk_level,
        is_active=body.is_active,
    )
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brand not found")
    return _brand_to_response(updated)


@router.delete("/brands/{brand_id}")
def delete_brand_admin(
    brand_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_analyst),
):
    if not delete_brand(db, brand_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brand not found")
    return {"message": "Brand deleted"}


# ---- Users (admin only) ----
@router.get("/users")
def list_users(
    search: str | None = None,
    page: int = 1,
    page_size: int = 20,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_admin),
):
    """List users with optional username search and pagination. Admin only."""
    page = max(1, page)
    page_size = min(max(1, page_size), 100)
    offset = (page - 1) * page_size
    users, total = get_all_users_paginated(db, search=search, limit=page_size, offset=offset)
    return {"items": [_user_to_response(u) for u in users], "total": total}


@router.post("/users")
def create_user_admin(
    body: AdminUserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """Create a user. Admin only."""
    if get_by_username(db, body.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists. Please choose a different username.",
        )
    user = create_user_repo(
        db,
        body.username,
        body.password,
        email=body.email,
        role=body.role,
        created_by=current_user.id,
    )
    logger.info("User %s created with role %s by %s", user.username, user.role, current_user.username)
    return _user_to_response(user)


@router.patch("/users/{user_id}")
def update_user_admin(
    user_id: str,
    body: AdminUserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """Update role, status, email or password. Admins cannot demote or disable themselves."""
    target = get_by_id(db, user_id)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if target.id == current_user.id and (
        (body.role is not None and body.role != "admin") or body.is_active is False
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove your own admin access",
        )
    password_hash = hash_password(body.password) if body.password else None
    updated = update_user(
        db,
        user_id,
        email=body.email,
        password_hash=password_hash,
        role=body.role,
        is_active=body.is_active,
    )
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return _user_to_response(updated)


@router.delete("/users/{user_id}")
def delete_user_admin(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """Delete a user. Admin only. Cannot delete self."""
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")
    if not delete_user(db, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return {"message": "User deleted"}


# ---- Search history ----
@router.get("/history")
def list_history(
    page: int = 1,
    page_size: int = 50,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_admin),
):
    """All users' searches, newest first, with usernames attached."""
    page = max(1, page)
    page_size = min(max(1, page_size), 200)
    try:
        rows, total = get_recent_history(db, limit=page_size, offset=(page - 1) * page_size)
        usernames = get_usernames(db, sorted({r.user_id for r in rows if r.user_id}))
    except Exception as e:
        logger.exception("Fetching search history failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load search history.") from e
    return {"items": [history_to_item(r, usernames) for r in rows], "total": total}
