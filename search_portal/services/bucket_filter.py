from typing import Any, Iterable, Sequence


def _field(item: Any, name: str, default=None):
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def _string_ids(bucket: Any) -> list[str]:
    ids = _field(bucket, "string_ids")
    return list(ids) if isinstance(ids, (list, tuple, set)) else []


def filter_by_buckets(all_strings: Sequence[Any], buckets: Iterable[Any], selected_bucket_ids: Iterable[str]) -> list[Any]:
    """
    Narrow all_strings to the union of the selected buckets' string ids.
    No selection means no filtering. Ids that no longer resolve are skipped;
    the result keeps all_strings' order.
    """
    selected = set(selected_bucket_ids or ())
    if not selected:
        return list(all_strings)

    wanted: set[str] = set()
    for bucket in buckets:
        if _field(bucket, "id") in selected:
            wanted.update(_string_ids(bucket))
    return [s for s in all_strings if _field(s, "id") in wanted]


def resolve_bucket_strings(bucket: Any, all_strings: Sequence[Any]) -> list[Any]:
    """Strings a bucket currently points at, in all_strings' order."""
    ids = set(_string_ids(bucket))
    return [s for s in all_strings if _field(s, "id") in ids]


class BucketSelection:
    """Bucket ids picked for the current search session."""

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: list[str] = list(dict.fromkeys(ids))

    @property
    def ids(self) -> list[str]:
        return list(self._ids)

    def toggle(self, bucket_id: str, checked: bool) -> list[str]:
        if checked and bucket_id not in self._ids:
            self._ids.append(bucket_id)
        elif not checked:
            self.discard(bucket_id)
        return self.ids

    def discard(self, bucket_id: str) -> None:
        self._ids = [i for i in self._ids if i != bucket_id]

    def __contains__(self, bucket_id: str) -> bool:
        return bucket_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
