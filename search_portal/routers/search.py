import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from search_portal.database import get_db
from search_portal.dependencies import get_current_user
from search_portal.core.search_operators import has_operators
from search_portal.models.search_string import SearchString, normalize_translations
from search_portal.models.user import User
from search_portal.repos.search_string_repo import get_active as get_active_strings
from search_portal.repos.string_bucket_repo import (
    get_all as get_buckets,
    create as create_bucket,
    delete_one as delete_bucket,
)
from search_portal.repos.search_history_repo import get_recent as get_recent_history
from search_portal.schemas.search import (
    BucketCreate,
    BucketOut,
    HistoryItem,
    LinksRequest,
    SearchExecuteResponse,
    SearchLinkOut,
    SearchRequest,
    SearchStringOut,
)
from search_portal.services.bucket_filter import resolve_bucket_strings
from search_portal.services.search_combinations import build_replay_link, enumerate_links, links_as_text
from search_portal.services.search_execution import SearchValidationError, perform_search

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/search", tags=["search"])


def string_to_response(s: SearchString) -> SearchStringOut:
    return SearchStringOut(
        id=s.id,
        string_value=s.string_value,
        translations=normalize_translations(s.translations),
        is_active=bool(s.is_active),
        has_operators=has_operators(s.string_value),
        created_at=s.created_at.isoformat() if s.created_at else None,
    )


def _bucket_to_response(b, available: list) -> BucketOut:
    return BucketOut(
        id=b.id,
        bucket_name=b.bucket_name,
        string_ids=list(b.string_ids or []),
        strings=[s.string_value for s in resolve_bucket_strings(b, available)],
        created_at=b.created_at.isoformat() if b.created_at else None,
    )


def _link_to_response(link) -> SearchLinkOut:
    return SearchLinkOut(label=link.label, query=link.query, url=link.url)


def history_to_item(row, usernames: dict[str, str]) -> HistoryItem:
    strings = list(row.search_strings or [])
    names = list(row.search_names or [])
    return HistoryItem(
        id=row.id,
        search_strings=strings,
        search_names=names,
        results_count=row.results_count,
        created_at=row.created_at.isoformat() if row.created_at else None,
        user_id=row.user_id,
        username=usernames.get(row.user_id) or "Unknown User",
        replay_link=build_replay_link(strings, names),
    )


@router.get("/strings", response_model=list[SearchStringOut])
def list_active_strings(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Active admin strings that searches combine with names."""
    try:
        return [string_to_response(s) for s in get_active_strings(db)]
    except Exception as e:
        logger.exception("Fetching active search strings failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load search strings") from e


@router.get("/buckets", response_model=list[BucketOut])
def list_buckets(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        available = get_active_strings(db)
        return [_bucket_to_response(b, available) for b in get_buckets(db, user.id)]
    except Exception as e:
        logger.exception("Fetching buckets failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load buckets") from e


@router.post("/buckets", response_model=BucketOut)
def create_bucket_for_user(
    body: BucketCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        bucket = create_bucket(db, body.bucket_name, body.string_ids, user_id=user.id)
        logger.info("Bucket %r created by %s with %d strings", body.bucket_name, user.username, len(body.string_ids))
        return _bucket_to_response(bucket, get_active_strings(db))
    except Exception as e:
        logger.exception("Creating bucket failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create bucket") from e


@router.delete("/buckets/{bucket_id}")
def delete_bucket_for_user(
    bucket_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_bucket(db, bucket_id, user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bucket not found")
    return {"message": "Bucket deleted"}


@router.post("/links", response_model=list[SearchLinkOut])
def preview_links(
    body: LinksRequest,
    user: User = Depends(get_current_user),
):
    """Build links for the given strings and names without recording anything."""
    return [_link_to_response(link) for link in enumerate_links(body.mode, body.strings, body.names)]


@router.post("/execute", response_model=SearchExecuteResponse)
def execute_search(
    body: SearchRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        outcome = perform_search(
            db,
            user.id,
            body.names,
            current_name=body.current_name,
            bulk_names=body.bulk_names,
            selected_bucket_ids=body.selected_bucket_ids,
            mode=body.mode,
        )
    except SearchValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.exception("Search failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Search failed") from e
    return SearchExecuteResponse(
        result=outcome.result,
        links=[_link_to_response(link) for link in outcome.links],
        copy_text=links_as_text(outcome.links),
        notices=outcome.notices,
    )


@router.get("/history", response_model=list[HistoryItem])
def my_history(
    limit: int = 50,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    limit = min(max(1, limit), 200)
    try:
        rows, _ = get_recent_history(db, user_id=user.id, limit=limit)
    except Exception as e:
        logger.exception("Fetching history failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load search history") from e
    return [history_to_item(r, {user.id: user.username}) for r in rows]
