"""Notification abstractions for booking acknowledgments."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models import CatalogItem

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BookingConfirmation:
    """Acknowledgment shown after the user books the selected item."""

    item: CatalogItem

    @property
    def message(self) -> str:
        return f'Booking "{self.item.title}" Confirmed'


class Notifier(ABC):
    """Base class for delivering acknowledgments to the user."""

    @abstractmethod
    def send(self, confirmation: BookingConfirmation) -> None:
        """Dispatch the provided confirmation."""


class NullNotifier(Notifier):
    """Discards confirmations; the presentation layer shows the message itself."""

    def send(self, confirmation: BookingConfirmation) -> None:
        return None


class LogNotifier(Notifier):
    """Writes confirmations to the application log."""

    def send(self, confirmation: BookingConfirmation) -> None:
        logger.info(confirmation.message)
