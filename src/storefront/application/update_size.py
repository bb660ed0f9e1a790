"""Application service: Update Size use case (admin).

Only allowlisted fields are written; anything else in the request is
dropped. Editing a price never touches existing orders because their line
items hold a price snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from storefront.application.admin_guard import AdminGuard
from storefront.application.dto import SizeDTO, to_size_dto
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.domain.repository.admin_repository import AdminRepository
from storefront.domain.repository.product_size_repository import ProductSizeRepository

logger = logging.getLogger(__name__)


class UpdateSizeHandler:

    def __init__(self, size_repo: ProductSizeRepository, admin_repo: AdminRepository) -> None:
        self._size_repo = size_repo
        self._guard = AdminGuard(admin_repo)

    def handle(self, admin_email: str, size_id: str, updates: dict[str, Any]) -> SizeDTO:
        if not size_id or not isinstance(updates, dict):
            raise ValidationError("Invalid payload")
        admin = self._guard.require(admin_email)

        size = self._size_repo.get_by_id(size_id)
        if size is None:
            raise NotFoundError(f"Size {size_id} not found")

        # Validate against a scratch copy; the store applies the fields itself.
        applied = replace(size).apply_updates(updates)
        stored = self._size_repo.update_fields(size_id, applied)
        if stored is None:
            raise NotFoundError(f"Size {size_id} not found")

        logger.info("%s updated size %s: %s", admin.email, size_id, sorted(applied))
        return to_size_dto(stored)
