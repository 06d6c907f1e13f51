"""Client for the remote product catalog."""
from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

from ..models import CatalogItem

_TEXT_FIELDS = ("title", "description", "category")


class CatalogFetchError(Exception):
    """Raised when the catalog cannot be fetched or has an unexpected shape."""


@dataclass(slots=True)
class CatalogClient:
    """Fetches the bounded product collection from the catalog endpoint."""

    endpoint: str
    page_size: int = 12
    timeout_seconds: int = 10
    placeholder_thumbnail: str = ""

    def fetch_catalog(self) -> list[CatalogItem]:
        """Fetch one page of products.

        Network failures, non-success statuses, undecodable bodies and
        payloads that do not match the expected product shape all raise
        :class:`CatalogFetchError`; there is no partial result.
        """

        try:
            response = requests.get(
                self.endpoint,
                params={"limit": self.page_size},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise CatalogFetchError(f"Catalog request failed: {exc}") from exc

        records = self._extract_products(payload)
        items: list[CatalogItem] = []
        seen_ids: set[int] = set()
        for record in records[: self.page_size]:
            item = self._parse_item(record)
            if item.id in seen_ids:
                raise CatalogFetchError(f"Duplicate product id {item.id}")
            seen_ids.add(item.id)
            items.append(item)
        return items

    @staticmethod
    def _extract_products(payload: Any) -> list[Any]:
        if not isinstance(payload, Mapping):
            raise CatalogFetchError("Catalog response is not an object")

        products = payload.get("products")
        if not isinstance(products, list):
            raise CatalogFetchError("Catalog response has no product list")
        return products

    def _parse_item(self, record: Any) -> CatalogItem:
        """Validate one product record and normalise it into a ``CatalogItem``."""

        if not isinstance(record, Mapping):
            raise CatalogFetchError("Product record is not an object")

        item_id = record.get("id")
        if not isinstance(item_id, int) or isinstance(item_id, bool):
            raise CatalogFetchError(f"Product id {item_id!r} is not an integer")

        texts: dict[str, str] = {}
        for name in _TEXT_FIELDS:
            value = record.get(name)
            if not isinstance(value, str):
                raise CatalogFetchError(f"Product {item_id} has no {name}")
            texts[name] = value

        price = self._extract_number(record, "price", item_id)
        if price < 0:
            raise CatalogFetchError(f"Product {item_id} has a negative price")

        rating = 0.0
        if record.get("rating") is not None:
            rating = self._extract_number(record, "rating", item_id)
            if not 0 <= rating <= 5:
                raise CatalogFetchError(f"Product {item_id} rating {rating} is out of range")

        thumbnail = record.get("thumbnail")
        if thumbnail is None:
            thumbnail = ""
        if not isinstance(thumbnail, str):
            raise CatalogFetchError(f"Product {item_id} thumbnail is not a string")

        return CatalogItem(
            id=item_id,
            title=texts["title"],
            description=texts["description"],
            price=price,
            rating=rating,
            category=texts["category"],
            thumbnail=thumbnail or self.placeholder_thumbnail,
        )

    @staticmethod
    def _extract_number(record: Mapping[str, Any], name: str, item_id: int) -> float:
        value = record.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CatalogFetchError(f"Product {item_id} {name} is not a number")
        if not math.isfinite(value):
            raise CatalogFetchError(f"Product {item_id} {name} is not finite")
        return float(value)
