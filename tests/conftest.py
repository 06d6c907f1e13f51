from __future__ import annotations

from typing import Any, Callable

import pytest

from activity_catalog.api.client import CatalogFetchError
from activity_catalog.models import CatalogItem


class FakeTimer:
    """Stand-in for ``threading.Timer`` that only fires when told to."""

    def __init__(self, interval: float, function: Callable[..., None], args: Any = None, kwargs: Any = None) -> None:
        self.interval = interval
        self.function = function
        self.args = tuple(args or ())
        self.kwargs = dict(kwargs or {})
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function(*self.args, **self.kwargs)


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, function: Callable[..., None], args: Any = None, kwargs: Any = None) -> FakeTimer:
        timer = FakeTimer(interval, function, args, kwargs)
        self.timers.append(timer)
        return timer

    @property
    def armed(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if timer.started and not timer.cancelled]

    def fire_latest(self) -> None:
        self.timers[-1].fire()


class StubClient:
    def __init__(self, items: list[CatalogItem] | None = None, error: bool = False) -> None:
        self._items = items or []
        self._error = error
        self.calls = 0

    def fetch_catalog(self) -> list[CatalogItem]:
        self.calls += 1
        if self._error:
            raise CatalogFetchError("boom")
        return list(self._items)


def make_item(item_id: int, title: str, price: float, rating: float, category: str) -> CatalogItem:
    return CatalogItem(
        id=item_id,
        title=title,
        description=f"About {title}",
        price=price,
        rating=rating,
        category=category,
        thumbnail=f"https://example.com/{item_id}.png",
    )


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def scenario_items() -> list[CatalogItem]:
    return [
        make_item(1, "Zoo Trip", 20, 0, "outdoor"),
        make_item(2, "Art Class", 10, 4.5, "indoor"),
    ]


@pytest.fixture
def catalog_items() -> list[CatalogItem]:
    return [
        make_item(1, "Zoo Trip", 20, 0, "outdoor"),
        make_item(2, "Art Class", 10, 4.5, "indoor"),
        make_item(3, "Pottery Art", 35, 4.5, "indoor"),
        make_item(4, "Forest Hike", 10, 3.9, "outdoor"),
        make_item(5, "Science Lab", 50, 4.8, "learning"),
        make_item(6, "Street Art Walk", 20, 3.9, "outdoor"),
    ]


@pytest.fixture
def make_client() -> Callable[..., StubClient]:
    return StubClient
