"""Domain models used throughout the activity catalog browser."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ALL_CATEGORIES = "all"
UNRATED = "unrated"


class SortKey(str, Enum):
    """Orderings offered by the sort selector.

    Values are the literal strings used in form fields and the ``sort`` query
    parameter.
    """

    UNSPECIFIED = ""
    RATING = "rating"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"

    @classmethod
    def parse(cls, value: str | None) -> SortKey:
        """Return the member for ``value``, falling back to ``UNSPECIFIED``."""

        try:
            return cls(value or "")
        except ValueError:
            return cls.UNSPECIFIED


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """Single product returned by the remote catalog."""

    id: int
    title: str
    description: str
    price: float
    rating: float
    category: str
    thumbnail: str

    @property
    def is_rated(self) -> bool:
        return self.rating > 0

    @property
    def display_rating(self) -> str:
        """Rating as shown to the user; zero ratings read as ``unrated``."""

        if not self.is_rated:
            return UNRATED
        return f"{self.rating:g}"


@dataclass(frozen=True, slots=True)
class FilterState:
    """Search, category and sort selections driving the visible list."""

    search_text: str = ""
    category: str = ALL_CATEGORIES
    sort_key: SortKey = SortKey.UNSPECIFIED
