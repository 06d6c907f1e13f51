"""Flask web application exposing the catalog view state."""
from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request

from ..api.client import CatalogClient
from ..config import DEFAULT_CONFIG, AppConfig
from ..models import ALL_CATEGORIES, SortKey
from ..notifications.base import LogNotifier
from ..services.favorites_service import FavoritesService
from ..services.query_sync import CATEGORY_PARAM, SEARCH_PARAM, SORT_PARAM, LocationHistory, QuerySync, decode_query
from ..services.view_state import CatalogViewState
from ..storage.repository import FavoritesRepository, JsonKeyValueStore

_FILTER_PARAMS = (SEARCH_PARAM, CATEGORY_PARAM, SORT_PARAM)


def create_app(view_state: CatalogViewState) -> Flask:
    app = Flask(__name__)
    app.config["view_state"] = view_state

    def _error(message: str, status: int) -> tuple[Any, int]:
        return jsonify({"error": message}), status

    @app.route("/")
    def index():
        # Opening a shared link replaces the filters of the one shared view state.
        if any(name in request.args for name in _FILTER_PARAMS):
            view_state.apply_filters(decode_query(request.args))
        return jsonify(view_state.snapshot())

    @app.route("/search", methods=["POST"])
    def search():
        view_state.set_search(request.form.get(SEARCH_PARAM, ""))
        return jsonify(view_state.snapshot()), 202

    @app.route("/category", methods=["POST"])
    def category():
        view_state.set_category(request.form.get(CATEGORY_PARAM) or ALL_CATEGORIES)
        return jsonify(view_state.snapshot())

    @app.route("/sort", methods=["POST"])
    def sort():
        value = request.form.get(SORT_PARAM, "")
        try:
            view_state.set_sort(SortKey(value))
        except ValueError:
            return _error(f"Unknown sort order: {value}", 400)
        return jsonify(view_state.snapshot())

    @app.route("/favorites/<int:item_id>", methods=["POST"])
    def toggle_favorite(item_id: int):
        favorite = view_state.toggle_favorite(item_id)
        return jsonify({"id": item_id, "favorite": favorite})

    @app.route("/items/<int:item_id>/select", methods=["POST"])
    def select_item(item_id: int):
        try:
            view_state.select(item_id)
        except KeyError:
            return _error("Unknown catalog item", 404)
        return jsonify(view_state.snapshot())

    @app.route("/selection/close", methods=["POST"])
    def close_selection():
        view_state.close_selection()
        return jsonify(view_state.snapshot())

    @app.route("/selection/book", methods=["POST"])
    def book_selection():
        try:
            message = view_state.confirm_booking()
        except LookupError:
            return _error("No catalog item is selected", 409)
        return jsonify({"message": message})

    return app


def bootstrap_app(config: AppConfig = DEFAULT_CONFIG) -> tuple[Flask, CatalogViewState]:
    """Factory used by the entrypoint for running the web UI."""

    config.ensure_data_directories()
    store = JsonKeyValueStore(config.storage_path)
    favorites = FavoritesService(repository=FavoritesRepository(store, config.favorites.storage_key))
    client = CatalogClient(
        endpoint=config.catalog.endpoint,
        page_size=config.catalog.page_size,
        timeout_seconds=config.catalog.timeout_seconds,
        placeholder_thumbnail=config.catalog.placeholder_thumbnail,
    )
    view_state = CatalogViewState(
        client,
        favorites,
        query_sync=QuerySync(LocationHistory()),
        notifier=LogNotifier(),
        debounce_seconds=config.search.debounce_seconds,
    )
    view_state.start()

    app = create_app(view_state)
    return app, view_state
