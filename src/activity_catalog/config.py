"""Configuration settings for the activity catalog browser."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal


@dataclass(slots=True)
class CatalogConfig:
    """Settings related to fetching the remote product collection."""

    endpoint: str = "https://dummyjson.com/products"
    """Collection endpoint queried once per session start."""

    page_size: int = 12
    """Fixed number of products requested from the endpoint."""

    timeout_seconds: int = 10

    placeholder_thumbnail: str = "https://via.placeholder.com/150"
    """Image shown for products delivered without a thumbnail."""


@dataclass(slots=True)
class SearchConfig:
    """Settings for free-text search input."""

    debounce_seconds: float = 0.3
    """Idle period required before search text reaches the filter pipeline."""


@dataclass(slots=True)
class FavoritesConfig:
    """Where favorites are persisted between sessions."""

    storage_key: str = "kidz-favs"
    storage_filename: str = "local_storage.json"


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration for the application."""

    environment: Literal["development", "production"] = "development"
    data_directory: Path = field(default_factory=lambda: Path("data"))
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    favorites: FavoritesConfig = field(default_factory=FavoritesConfig)

    @property
    def storage_path(self) -> Path:
        return self.data_directory / self.favorites.storage_filename

    def ensure_data_directories(self) -> None:
        """Create data directories required by the application."""

        self.data_directory.mkdir(parents=True, exist_ok=True)


DEFAULT_CONFIG = AppConfig()
