"""Service for managing favorite catalog items."""
from __future__ import annotations

from dataclasses import dataclass, field

from ..storage.repository import FavoritesRepository


@dataclass(slots=True)
class FavoritesService:
    """Keeps the favorites set in memory and writes every change through."""

    repository: FavoritesRepository
    _ids: dict[int, None] = field(default_factory=dict)

    def load(self) -> None:
        self._ids = dict.fromkeys(self.repository.load())

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(self._ids)

    def is_favorite(self, item_id: int) -> bool:
        return item_id in self._ids

    def toggle(self, item_id: int) -> bool:
        """Flip membership of ``item_id`` and persist; returns the new membership.

        The in-memory set only changes once the write has succeeded.
        """

        updated = dict(self._ids)
        if item_id in updated:
            del updated[item_id]
        else:
            updated[item_id] = None
        self.repository.save(updated)
        self._ids = updated
        return item_id in updated
