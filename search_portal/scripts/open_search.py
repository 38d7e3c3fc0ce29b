"""
Run a portal search from the command line and open every generated link in the
default browser, one tab at a time.

Usage:
  python -m search_portal.scripts.open_search --names "Acme Corp" "John Doe"
  python -m search_portal.scripts.open_search --bulk names.txt --bucket <id> --mode individual --copy
"""
import argparse
import logging
import sys
from pathlib import Path

from search_portal.database import SessionLocal
from search_portal.logging_config import setup_logging
from search_portal.repos.user_repo import get_by_username
from search_portal.services.bucket_filter import BucketSelection
from search_portal.services.search_combinations import SearchMode
from search_portal.services.search_execution import SearchValidationError, perform_search
from search_portal.services.url_dispatcher import BrowserEnvironment, UrlDispatcher

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Open search-engine queries for names combined with active search strings.")
    parser.add_argument("--names", nargs="*", default=[], help="Names to search for")
    parser.add_argument("--bulk", type=Path, help="File with names separated by newlines, commas or semicolons")
    parser.add_argument("--bucket", action="append", default=[], dest="buckets", help="Restrict strings to a bucket id (repeatable)")
    parser.add_argument("--drop-bucket", action="append", default=[], dest="dropped_buckets", help="Remove a bucket id from the selection (repeatable)")
    parser.add_argument("--mode", choices=[m.value for m in SearchMode], default=SearchMode.auto.value)
    parser.add_argument("--user", help="Username the search is recorded under")
    parser.add_argument("--copy", action="store_true", help="Copy the URLs to the clipboard instead of opening them")
    parser.add_argument("--stagger-ms", type=int, default=None, help="Delay between opened tabs")
    return parser


def run(args, db, environment=None) -> int:
    user_id = None
    if args.user:
        user = get_by_username(db, args.user)
        if not user:
            print(f"User not found: {args.user}")
            return 1
        user_id = user.id

    bulk_text = args.bulk.read_text(encoding="utf-8") if args.bulk else ""
    selection = BucketSelection()
    for bucket_id in args.buckets:
        selection.toggle(bucket_id, True)
    for bucket_id in args.dropped_buckets:
        selection.toggle(bucket_id, False)

    try:
        outcome = perform_search(
            db,
            user_id,
            args.names,
            bulk_names=bulk_text,
            selected_bucket_ids=selection.ids,
            mode=args.mode,
        )
    except SearchValidationError as e:
        print(str(e))
        return 1

    for notice in outcome.notices:
        print(f"{notice.title}: {notice.description}")

    dispatcher = UrlDispatcher(environment or BrowserEnvironment(), stagger_ms=args.stagger_ms)
    urls = [link.url for link in outcome.links]
    if args.copy:
        notice = dispatcher.copy_all(urls)
        print(f"{notice.title}: {notice.description}")
        return 0 if notice.variant == "default" else 1

    result = dispatcher.open_all(urls)
    notice = result.notice()
    print(f"{notice.title}: {notice.description}")
    return 0 if not result.failed else 1


def main() -> int:
    setup_logging()
    args = build_parser().parse_args()
    db = SessionLocal()
    try:
        return run(args, db)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
