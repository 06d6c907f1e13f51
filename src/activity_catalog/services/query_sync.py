"""Mirrors filter selections into the navigable URL query string."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlencode, urlsplit

from ..models import ALL_CATEGORIES, FilterState, SortKey

SEARCH_PARAM = "q"
CATEGORY_PARAM = "cat"
SORT_PARAM = "sort"


def encode_query(state: FilterState) -> str:
    """Serialise the non-default members of ``state`` as a query string."""

    params: dict[str, str] = {}
    if state.search_text:
        params[SEARCH_PARAM] = state.search_text
    if state.category != ALL_CATEGORIES:
        params[CATEGORY_PARAM] = state.category
    if state.sort_key is not SortKey.UNSPECIFIED:
        params[SORT_PARAM] = state.sort_key.value
    return urlencode(params)


def decode_query(query: str | Mapping[str, str]) -> FilterState:
    """Build a ``FilterState`` from a query string or an args mapping.

    Missing parameters fall back to defaults; an unknown ``sort`` value is
    treated as unspecified.
    """

    if isinstance(query, str):
        parsed = parse_qs(query.lstrip("?"), keep_blank_values=True)
        values = {name: parsed_values[0] for name, parsed_values in parsed.items()}
    else:
        values = dict(query)

    return FilterState(
        search_text=values.get(SEARCH_PARAM) or "",
        category=values.get(CATEGORY_PARAM) or ALL_CATEGORIES,
        sort_key=SortKey.parse(values.get(SORT_PARAM)),
    )


@dataclass(slots=True)
class LocationHistory:
    """In-memory stand-in for the browser's navigable location."""

    entries: list[str] = field(default_factory=lambda: ["/"])

    @property
    def current(self) -> str:
        return self.entries[-1]

    def replace(self, url: str) -> None:
        """Swap the current entry for ``url`` without growing the history."""

        self.entries[-1] = url


class QuerySync:
    """Keeps the current location's query string in step with filter state."""

    def __init__(self, history: LocationHistory, path: str = "/") -> None:
        self._history = history
        self._path = path

    @property
    def history(self) -> LocationHistory:
        return self._history

    @property
    def location(self) -> str:
        return self._history.current

    def initial_state(self) -> FilterState:
        """Seed filter state from the query of the current location."""

        return decode_query(urlsplit(self._history.current).query)

    def push_state(self, state: FilterState) -> str:
        query = encode_query(state)
        url = f"{self._path}?{query}" if query else self._path
        if url != self._history.current:
            self._history.replace(url)
        return url
