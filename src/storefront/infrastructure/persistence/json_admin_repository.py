"""JSON-file-backed implementation of AdminRepository (read-only)."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.admin import AdminUser
from storefront.domain.repository.admin_repository import AdminRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonAdminRepository(AdminRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    def get_by_email(self, email: str) -> AdminUser | None:
        wanted = email.strip().lower()
        for admin in self.list_all():
            if admin.email.strip().lower() == wanted:
                return admin
        return None

    def list_all(self) -> list[AdminUser]:
        return [
            AdminUser(
                id=raw["id"],
                email=raw["email"],
                notification_email=raw.get("notification_email"),
                notification_phone=raw.get("notification_phone"),
                email_notifications_enabled=raw.get("email_notifications_enabled", True),
                sms_notifications_enabled=raw.get("sms_notifications_enabled", False),
            )
            for raw in self._file.load()
        ]
