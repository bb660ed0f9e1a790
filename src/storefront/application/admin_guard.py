"""Admin identity check shared by every admin use case."""

from __future__ import annotations

from storefront.domain.exceptions import AuthorizationError, ValidationError
from storefront.domain.model.admin import AdminUser
from storefront.domain.repository.admin_repository import AdminRepository


class AdminGuard:

    def __init__(self, admin_repo: AdminRepository) -> None:
        self._admin_repo = admin_repo

    def require(self, admin_email: str | None) -> AdminUser:
        if not admin_email or not admin_email.strip():
            raise ValidationError("adminEmail is required")
        admin = self._admin_repo.get_by_email(admin_email.strip())
        if admin is None:
            raise AuthorizationError("Unauthorized: admin required")
        return admin
