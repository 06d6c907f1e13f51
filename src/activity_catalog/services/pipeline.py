"""Derivation of the visible list from the raw catalog and filter selections."""
from __future__ import annotations

from collections.abc import Callable, Sequence

from ..models import ALL_CATEGORIES, CatalogItem, SortKey


def _sort_spec(sort_key: SortKey) -> tuple[Callable[[CatalogItem], float], bool]:
    if sort_key is SortKey.PRICE_LOW:
        return (lambda item: item.price), False
    if sort_key is SortKey.PRICE_HIGH:
        return (lambda item: item.price), True
    return (lambda item: item.rating), True


def visible_items(
    items: Sequence[CatalogItem],
    search_text: str,
    category: str,
    sort_key: SortKey,
) -> tuple[CatalogItem, ...]:
    """Filter ``items`` by title text and category, then order them.

    ``sorted`` is stable with ``reverse=True`` as well, so items with equal
    keys keep their catalog order in every direction.
    """

    needle = search_text.lower()
    matches = [
        item
        for item in items
        if needle in item.title.lower() and (category == ALL_CATEGORIES or item.category == category)
    ]
    key, reverse = _sort_spec(sort_key)
    return tuple(sorted(matches, key=key, reverse=reverse))


def derive_categories(items: Sequence[CatalogItem]) -> list[str]:
    """Return the category selector options, ``all`` first."""

    return [ALL_CATEGORIES, *dict.fromkeys(item.category for item in items)]
