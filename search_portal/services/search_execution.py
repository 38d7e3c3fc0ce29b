"""
Run one portal search: resolve the participating strings, build the links and
record what was searched.

The name log insert and the history insert are separate commits. Either can
fail without undoing the other; failures come back as notices instead of
aborting the search.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable

from sqlalchemy.orm import Session

from search_portal.config import settings
from search_portal.core.search_operators import has_operators
from search_portal.models.search_string import normalize_translations
from search_portal.repos.search_string_repo import get_active as get_active_strings
from search_portal.repos.string_bucket_repo import get_all as get_buckets
from search_portal.repos.search_name_repo import bulk_insert as insert_search_names
from search_portal.repos.search_history_repo import create as create_history
from search_portal.schemas.search import Notice, SearchResultData
from search_portal.services.bucket_filter import filter_by_buckets
from search_portal.services.search_combinations import SearchLink, SearchMode, enumerate_links, flatten_strings
from search_portal.services.search_names import merge_pending_names

logger = logging.getLogger(__name__)


class SearchValidationError(ValueError):
    """Search request that cannot produce a single query."""


@dataclass
class SearchOutcome:
    result: SearchResultData
    links: list[SearchLink]
    notices: list[Notice] = field(default_factory=list)


def _summary_notice(selected_strings: list, flat_strings: list[str], names: list[str]) -> Notice:
    total_languages = sum(len(normalize_translations(s.translations)) for s in selected_strings)
    operator_count = sum(1 for s in flat_strings if has_operators(s))
    return Notice(
        title="Search prepared",
        description=(
            f"Prepared Google searches using {len(flat_strings)} search terms across "
            f"{total_languages + len(selected_strings)} languages with {len(names)} names. "
            f"{operator_count} strings contain search operators."
        ),
    )


def perform_search(
    db: Session,
    user_id: str | None,
    names: Iterable[str],
    current_name: str = "",
    bulk_names: str = "",
    selected_bucket_ids: Iterable[str] = (),
    mode: SearchMode | str = SearchMode.auto,
) -> SearchOutcome:
    final_names = merge_pending_names(names, current_name, bulk_names)
    if len(final_names) > settings.max_names_per_search:
        raise SearchValidationError(
            f"Too many names: {len(final_names)} (max {settings.max_names_per_search} per search)."
        )

    selected_bucket_ids = list(selected_bucket_ids or ())
    active = get_active_strings(db)
    buckets = get_buckets(db, user_id) if selected_bucket_ids else []
    selected = filter_by_buckets(active, buckets, selected_bucket_ids)
    flat_strings = flatten_strings(selected)

    if not flat_strings and not final_names:
        raise SearchValidationError(
            "Please add at least one search name, or ask admin to add search strings."
        )

    notices: list[Notice] = []
    if final_names:
        try:
            insert_search_names(db, final_names, user_id)
        except Exception as e:
            logger.exception("Saving search names failed for user=%s: %s", user_id, e)
            db.rollback()
            notices.append(Notice(title="Names not saved", description="Failed to save search names.", variant="destructive"))

    try:
        create_history(db, flat_strings, final_names, user_id=user_id)
    except Exception as e:
        logger.exception("Saving search history failed for user=%s: %s", user_id, e)
        db.rollback()
        notices.append(Notice(title="History not saved", description="Failed to save search history.", variant="destructive"))

    links = enumerate_links(mode, flat_strings, final_names)
    logger.info(
        "Search by user=%s: %d strings, %d names, %d buckets -> %d links",
        user_id, len(flat_strings), len(final_names), len(selected_bucket_ids), len(links),
    )
    notices.insert(0, _summary_notice(selected, flat_strings, final_names))
    return SearchOutcome(
        result=SearchResultData(search_strings=flat_strings, search_names=final_names),
        links=links,
        notices=notices,
    )
