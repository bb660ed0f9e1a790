"""Domain service: Inventory Ledger.

Stock per size is a shared counter that concurrent checkouts race on, so
the ledger never writes a value it computed from an earlier read. It works
in two phases:

  Phase 1, validate: every line's size exists, is active and has enough
            stock. Fails fast before any mutation.
  Phase 2, take: an atomic conditional decrement per size. If a later
            size loses a race, the sizes already taken are given back and
            the whole take fails, so a cart is never partially reserved.

Stock is never restored automatically afterwards (cancellation keeps it
consumed); ``give_back`` exists only to undo a checkout that failed midway.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Iterable

from storefront.domain.exceptions import InsufficientStockError, SizeUnavailableError
from storefront.domain.model.product_size import ProductSize
from storefront.domain.repository.product_size_repository import ProductSizeRepository

logger = logging.getLogger(__name__)


def _merge(lines: Iterable[tuple[str, int]]) -> OrderedDict[str, int]:
    merged: OrderedDict[str, int] = OrderedDict()
    for size_id, quantity in lines:
        merged[size_id] = merged.get(size_id, 0) + quantity
    return merged


class InventoryLedger:

    def __init__(self, size_repo: ProductSizeRepository) -> None:
        self._size_repo = size_repo

    def check_availability(self, size_id: str, quantity: int) -> ProductSize:
        """Return the size if it can supply ``quantity`` right now."""
        size = self._size_repo.get_by_id(size_id)
        if size is None or not size.is_active:
            raise SizeUnavailableError(size_id)
        if size.available_qty < quantity:
            raise InsufficientStockError(size.name, quantity, size.available_qty)
        return size

    def validate_lines(self, lines: Iterable[tuple[str, int]]) -> dict[str, ProductSize]:
        """Phase 1 for a whole cart; duplicate sizes are summed.

        Returns the loaded sizes keyed by id. The first failing line aborts.
        """
        sizes: dict[str, ProductSize] = {}
        for size_id, quantity in _merge(lines).items():
            sizes[size_id] = self.check_availability(size_id, quantity)
        return sizes

    def take(self, lines: Iterable[tuple[str, int]]) -> None:
        """Phase 2: all-or-nothing conditional decrement."""
        taken: list[tuple[str, int]] = []
        for size_id, quantity in _merge(lines).items():
            if self._size_repo.try_decrement(size_id, quantity):
                taken.append((size_id, quantity))
                continue

            self.give_back(taken)
            size = self._size_repo.get_by_id(size_id)
            if size is None or not size.is_active:
                raise SizeUnavailableError(size_id)
            raise InsufficientStockError(size.name, quantity, size.available_qty)

    def take_floor(self, size_id: str, quantity: int) -> int:
        """Decrement clamping at zero; returns how many units were short."""
        taken = self._size_repo.decrement_floor(size_id, quantity)
        return quantity - taken

    def give_back(self, lines: Iterable[tuple[str, int]]) -> None:
        for size_id, quantity in lines:
            logger.info("Returning %d unit(s) of size %s to stock", quantity, size_id)
            self._size_repo.increment(size_id, quantity)
