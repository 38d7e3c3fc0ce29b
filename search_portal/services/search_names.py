import re
from typing import Iterable

_BULK_SPLIT_RE = re.compile(r"[\n,;]+")


def parse_bulk_names(text: str) -> list[str]:
    """Split pasted text on newlines, commas or semicolons; blanks dropped."""
    if not text or not text.strip():
        return []
    return [part.strip() for part in _BULK_SPLIT_RE.split(text) if part.strip()]


class SearchNameList:
    """Ordered working list of names for one search session. Exact-match duplicates are refused."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: list[str] = []
        for name in names:
            self.add(name)

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def add(self, name: str) -> bool:
        name = (name or "").strip()
        if not name or name in self._names:
            return False
        self._names.append(name)
        return True

    def add_bulk(self, text: str) -> list[str]:
        return [name for name in parse_bulk_names(text) if self.add(name)]

    def remove(self, index: int) -> str | None:
        if 0 <= index < len(self._names):
            return self._names.pop(index)
        return None

    def clear(self) -> None:
        self._names.clear()

    def as_text(self) -> str:
        return "\n".join(self._names)

    def __len__(self) -> int:
        return len(self._names)


def merge_pending_names(names: Iterable[str], current_name: str = "", bulk_names: str = "") -> list[str]:
    """Fold a half-typed single name and any pasted bulk text into the list before searching."""
    working = SearchNameList(names)
    working.add(current_name)
    working.add_bulk(bulk_names)
    return working.names
