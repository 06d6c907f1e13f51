from __future__ import annotations

import json

import pytest

from activity_catalog.services.favorites_service import FavoritesService
from activity_catalog.services.query_sync import LocationHistory, QuerySync
from activity_catalog.services.view_state import CatalogViewState
from activity_catalog.storage.repository import FavoritesRepository, JsonKeyValueStore
from activity_catalog.web.app import create_app


@pytest.fixture
def web_app(tmp_path, timers, make_client, catalog_items):
    store = JsonKeyValueStore(tmp_path / "local_storage.json")
    favorites = FavoritesService(repository=FavoritesRepository(store, "kidz-favs"))
    view_state = CatalogViewState(
        make_client(catalog_items),
        favorites,
        query_sync=QuerySync(LocationHistory()),
        timer_factory=timers,
    )
    view_state.start(background=False)

    app = create_app(view_state)
    app.config.update(TESTING=True)

    return app, view_state, store


def test_index_returns_snapshot(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()

    response = client.get("/")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["loading"] is False
    assert payload["categories"] == ["all", "outdoor", "indoor", "learning"]
    assert [item["id"] for item in payload["items"]] == [5, 2, 3, 4, 6, 1]


def test_index_seeds_filters_from_query(web_app) -> None:
    app, view_state, _ = web_app
    client = app.test_client()

    response = client.get("/?q=art&cat=indoor&sort=price-low")

    payload = response.get_json()
    assert [item["id"] for item in payload["items"]] == [2, 3]
    assert payload["filters"] == {"search_text": "art", "category": "indoor", "sort": "price-low"}
    assert view_state.location == "/?q=art&cat=indoor&sort=price-low"


def test_search_is_applied_after_debounce(web_app, timers) -> None:
    app, _, _ = web_app
    client = app.test_client()

    response = client.post("/search", data={"q": "zoo"})

    assert response.status_code == 202
    assert response.get_json()["search_input"] == "zoo"
    assert len(response.get_json()["items"]) == 6

    timers.fire_latest()

    assert [item["id"] for item in client.get("/").get_json()["items"]] == [1]


def test_category_and_sort_updates(web_app) -> None:
    app, view_state, _ = web_app
    client = app.test_client()

    client.post("/category", data={"cat": "outdoor"})
    response = client.post("/sort", data={"sort": "price-high"})

    assert [item["id"] for item in response.get_json()["items"]] == [1, 6, 4]
    assert view_state.location == "/?cat=outdoor&sort=price-high"


def test_unknown_sort_is_rejected(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()

    response = client.post("/sort", data={"sort": "cheapest"})

    assert response.status_code == 400


def test_toggle_favorite_persists(web_app) -> None:
    app, _, store = web_app
    client = app.test_client()

    first = client.post("/favorites/2")
    second = client.post("/favorites/5")
    third = client.post("/favorites/5")

    assert first.get_json() == {"id": 2, "favorite": True}
    assert second.get_json()["favorite"] is True
    assert third.get_json()["favorite"] is False
    assert json.loads(store.get_item("kidz-favs")) == [2]


def test_selection_and_booking(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()

    assert client.post("/selection/book").status_code == 409
    assert client.post("/items/99/select").status_code == 404

    selected = client.post("/items/2/select").get_json()["selected"]
    booking = client.post("/selection/book")
    closed = client.post("/selection/close").get_json()

    assert selected["title"] == "Art Class"
    assert booking.get_json() == {"message": 'Booking "Art Class" Confirmed'}
    assert closed["selected"] is None


def test_index_without_query_keeps_current_filters(web_app) -> None:
    app, view_state, _ = web_app
    client = app.test_client()
    client.post("/category", data={"cat": "learning"})

    payload = client.get("/").get_json()

    assert payload["filters"]["category"] == "learning"
    assert view_state.location == "/?cat=learning"
