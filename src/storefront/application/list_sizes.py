"""Application service: List Sizes use case (query)."""

from __future__ import annotations

from storefront.application.dto import SizeDTO, to_size_dto
from storefront.domain.repository.product_size_repository import ProductSizeRepository


class ListSizesHandler:

    def __init__(self, size_repo: ProductSizeRepository) -> None:
        self._size_repo = size_repo

    def handle(self, active_only: bool = False) -> list[SizeDTO]:
        sizes = self._size_repo.list_all()
        if active_only:
            sizes = [s for s in sizes if s.is_active]
        sizes.sort(key=lambda s: (s.sort_order is None, s.sort_order or 0, s.name))
        return [to_size_dto(s) for s in sizes]
