"""Admin accounts: who may run admin operations and who gets order alerts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AdminUser:
    id: str
    email: str
    notification_email: str | None = None
    notification_phone: str | None = None
    email_notifications_enabled: bool = True
    sms_notifications_enabled: bool = False

    @property
    def alert_email(self) -> str | None:
        if not self.email_notifications_enabled:
            return None
        return self.notification_email or self.email

    @property
    def alert_phone(self) -> str | None:
        if not self.sms_notifications_enabled:
            return None
        return self.notification_phone or None
