"""
Expand admin search strings and user names into search-engine queries and URLs.

Strings are flattened (base value, then every non-empty translation) before any
combination, so each translation is searched as its own query.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence
from urllib.parse import quote, urlencode

from search_portal.config import settings
from search_portal.models.search_string import normalize_translations

logger = logging.getLogger(__name__)

# Same unescaped set as encodeURIComponent
_URI_COMPONENT_SAFE = "!~*'()"


class SearchMode(str, Enum):
    combined = "combined"
    strings_only = "strings_only"
    names_only = "names_only"
    individual = "individual"
    auto = "auto"


@dataclass(frozen=True)
class SearchLink:
    label: str
    query: str
    url: str


def _field(item: Any, name: str, default=None):
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def flatten_strings(active_strings: Iterable[Any]) -> list[str]:
    """Base value of each string followed by its non-empty translations, in mapping order."""
    flat: list[str] = []
    for search_string in active_strings:
        flat.append(_field(search_string, "string_value", ""))
        for translation in normalize_translations(_field(search_string, "translations")).values():
            if translation.strip():
                flat.append(translation)
    return flat


def build_query_url(query: str, template: str | None = None) -> str:
    template = template or settings.search_engine_url
    return template.replace("{query}", quote(query, safe=_URI_COMPONENT_SAFE))


def build_combined_query(base_string: str, names: Sequence[str]) -> str:
    if not names:
        return base_string
    return f"{base_string} ({' OR '.join(names)})"


def build_combined_url(base_string: str, names: Sequence[str], template: str | None = None) -> str:
    return build_query_url(build_combined_query(base_string, names), template)


def _link(label: str, query: str, template: str | None) -> SearchLink:
    return SearchLink(label=label, query=query, url=build_query_url(query, template))


def combined_links(strings: Sequence[str], names: Sequence[str], template: str | None = None) -> list[SearchLink]:
    return [_link(s, build_combined_query(s, names), template) for s in strings]


def strings_only_links(strings: Sequence[str], template: str | None = None) -> list[SearchLink]:
    return [_link(s, s, template) for s in strings]


def names_only_links(names: Sequence[str], template: str | None = None) -> list[SearchLink]:
    return [_link(n, n, template) for n in names]


def individual_links(strings: Sequence[str], names: Sequence[str], template: str | None = None) -> list[SearchLink]:
    """String-major cross product; a string with no names is searched alone."""
    links: list[SearchLink] = []
    for s in strings:
        if not names:
            links.append(_link(s, s, template))
            continue
        for n in names:
            links.append(_link(f"{s} + {n}", f"{s} {n}", template))
    return links


def auto_open_links(strings: Sequence[str], names: Sequence[str], template: str | None = None) -> list[SearchLink]:
    """Names alone when there are no strings; combined links when names are present, otherwise each string alone."""
    if not strings:
        return names_only_links(names, template)
    if names:
        return combined_links(strings, names, template)
    return strings_only_links(strings, template)


def enumerate_links(
    mode: SearchMode | str,
    strings: Sequence[str],
    names: Sequence[str],
    template: str | None = None,
) -> list[SearchLink]:
    mode = SearchMode(mode)
    if mode == SearchMode.combined:
        links = combined_links(strings, names, template)
    elif mode == SearchMode.strings_only:
        links = strings_only_links(strings, template)
    elif mode == SearchMode.names_only:
        links = names_only_links(names, template)
    elif mode == SearchMode.individual:
        links = individual_links(strings, names, template)
    else:
        links = auto_open_links(strings, names, template)
    logger.debug("Built %d %s links from %d strings x %d names", len(links), mode.value, len(strings), len(names))
    return links


def links_as_text(links: Iterable[SearchLink]) -> str:
    return "\n".join(link.url for link in links)


def build_replay_link(search_strings: Sequence[str], search_names: Sequence[str]) -> str:
    """Portal link that re-runs a history entry: /search?strings=a,b&names=x,y."""
    params = {}
    if search_strings:
        params["strings"] = ",".join(search_strings)
    if search_names:
        params["names"] = ",".join(search_names)
    return f"/search?{urlencode(params)}"
