"""Coordinates fetching, filtering, favorites and selection for the catalog view."""
from __future__ import annotations

import functools
import logging
import threading
from dataclasses import asdict, replace
from typing import Any, Iterable

from ..api.client import CatalogClient, CatalogFetchError
from ..models import CatalogItem, FilterState, SortKey
from ..notifications.base import BookingConfirmation, NullNotifier, Notifier
from ..scheduler.debounce import Debouncer, TimerFactory
from .favorites_service import FavoritesService
from .pipeline import derive_categories, visible_items
from .query_sync import QuerySync

logger = logging.getLogger(__name__)


class CatalogViewState:
    """Owns the catalog view's state and exposes its derived values.

    The fetch continuation and the debounce timer run on worker threads; every
    read and write goes through one re-entrant lock so each field has a single
    writer at a time.
    """

    def __init__(
        self,
        client: CatalogClient,
        favorites: FavoritesService,
        *,
        query_sync: QuerySync | None = None,
        notifier: Notifier | None = None,
        debounce_seconds: float = 0.3,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self._client = client
        self._favorites = favorites
        self._query_sync = query_sync
        self._notifier = notifier or NullNotifier()
        self._lock = threading.RLock()

        self._raw_catalog: tuple[CatalogItem, ...] = ()
        self._loading = True
        self._error = False
        self._started = False
        self._closed = False
        self._selected: CatalogItem | None = None
        self._search_input = ""
        self._filters = FilterState()

        self._debouncer: Debouncer[str] = Debouncer(debounce_seconds, self._apply_search, timer_factory)
        self._pipeline = functools.lru_cache(maxsize=1)(visible_items)

    # -- lifecycle -----------------------------------------------------------------

    def start(self, background: bool = True) -> None:
        """Seed filters and favorites, then issue the single catalog request."""

        with self._lock:
            if self._started:
                raise RuntimeError("Catalog view state has already been started")
            self._started = True
            if self._query_sync is not None:
                self._filters = self._query_sync.initial_state()
                self._search_input = self._filters.search_text
            self._favorites.load()

        if background:
            thread = threading.Thread(target=self.load_catalog, name="catalog-fetch", daemon=True)
            thread.start()
        else:
            self.load_catalog()

    def load_catalog(self) -> None:
        """Fetch the catalog and settle the loading state with the outcome."""

        try:
            items = self._client.fetch_catalog()
        except CatalogFetchError as exc:
            logger.warning("Failed to load catalog: %s", exc)
            self._settle((), error=True)
            return

        logger.info("Loaded %s catalog items", len(items))
        self._settle(items, error=False)

    def _settle(self, items: Iterable[CatalogItem], error: bool) -> None:
        with self._lock:
            if self._closed:
                logger.debug("Discarding catalog result for a closed view")
                return
            if not self._loading:
                logger.debug("Ignoring repeated catalog settlement")
                return
            self._raw_catalog = tuple(items)
            self._error = error
            self._loading = False

    def close(self) -> None:
        """Tear down the view; pending input is dropped and late results ignored."""

        with self._lock:
            self._closed = True
            self._debouncer.cancel()

    # -- filter input --------------------------------------------------------------

    def set_search(self, text: str) -> None:
        """Record raw search input; it reaches the pipeline once typing pauses."""

        with self._lock:
            self._search_input = text
            self._debouncer.trigger(text)

    def _apply_search(self, text: str) -> None:
        with self._lock:
            # Input may have changed between the timer firing and taking the lock.
            if self._closed or text != self._search_input:
                return
            self._filters = replace(self._filters, search_text=text)
            self._sync_location()

    def set_category(self, category: str) -> None:
        with self._lock:
            self._filters = replace(self._filters, category=category)
            self._sync_location()

    def set_sort(self, sort_key: SortKey | str) -> None:
        """Select an ordering; raises ``ValueError`` for an unknown sort value."""

        with self._lock:
            self._filters = replace(self._filters, sort_key=SortKey(sort_key))
            self._sync_location()

    def apply_filters(self, state: FilterState) -> None:
        """Replace all filter selections at once, bypassing the debounce delay."""

        with self._lock:
            self._debouncer.cancel()
            self._search_input = state.search_text
            self._filters = state
            self._sync_location()

    def _sync_location(self) -> None:
        if self._query_sync is not None:
            self._query_sync.push_state(self._filters)

    # -- favorites and selection ---------------------------------------------------

    def toggle_favorite(self, item_id: int) -> bool:
        with self._lock:
            return self._favorites.toggle(item_id)

    def is_favorite(self, item_id: int) -> bool:
        with self._lock:
            return self._favorites.is_favorite(item_id)

    def select(self, item_id: int) -> CatalogItem:
        """Open the detail view for ``item_id``, replacing any previous selection."""

        with self._lock:
            for item in self._raw_catalog:
                if item.id == item_id:
                    self._selected = item
                    return item
        raise KeyError(f"Unknown catalog item: {item_id}")

    def close_selection(self) -> None:
        with self._lock:
            self._selected = None

    def confirm_booking(self) -> str:
        """Acknowledge a booking of the selected item; nothing is persisted."""

        with self._lock:
            if self._selected is None:
                raise LookupError("No catalog item is selected")
            confirmation = BookingConfirmation(item=self._selected)
        self._notifier.send(confirmation)
        return confirmation.message

    # -- derived state -------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> bool:
        return self._error

    @property
    def raw_catalog(self) -> tuple[CatalogItem, ...]:
        return self._raw_catalog

    @property
    def selected_item(self) -> CatalogItem | None:
        return self._selected

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def search_input(self) -> str:
        return self._search_input

    @property
    def favorite_ids(self) -> tuple[int, ...]:
        with self._lock:
            return self._favorites.ids

    @property
    def location(self) -> str | None:
        return self._query_sync.location if self._query_sync is not None else None

    @property
    def visible_items(self) -> tuple[CatalogItem, ...]:
        with self._lock:
            filters = self._filters
            return self._pipeline(self._raw_catalog, filters.search_text, filters.category, filters.sort_key)

    @property
    def recompute_count(self) -> int:
        """Number of times the visible list has actually been recomputed."""

        return self._pipeline.cache_info().misses

    @property
    def categories(self) -> list[str]:
        with self._lock:
            return derive_categories(self._raw_catalog)

    @property
    def is_empty(self) -> bool:
        """``True`` once a loaded catalog has no item matching the filters."""

        with self._lock:
            return not self._loading and not self._error and not self.visible_items

    @property
    def empty_message(self) -> str | None:
        with self._lock:
            if not self.is_empty:
                return None
            if self._filters.search_text:
                return f'No activities found matching "{self._filters.search_text}".'
            return "No activities found matching your filters."

    def snapshot(self) -> dict[str, Any]:
        """Summarise the current state for the presentation layer."""

        with self._lock:
            selected = self._selected
            return {
                "loading": self._loading,
                "error": self._error,
                "search_input": self._search_input,
                "filters": {
                    "search_text": self._filters.search_text,
                    "category": self._filters.category,
                    "sort": self._filters.sort_key.value,
                },
                "categories": self.categories,
                "items": [self._describe(item) for item in self.visible_items],
                "empty_message": self.empty_message,
                "selected": self._describe(selected) if selected is not None else None,
                "location": self.location,
            }

    def _describe(self, item: CatalogItem) -> dict[str, Any]:
        description = asdict(item)
        description["display_rating"] = item.display_rating
        description["favorite"] = self._favorites.is_favorite(item.id)
        return description
