"""Delivery channels for notifications.

Every channel raises on failure; the dispatcher is responsible for
catching and logging.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx
from twilio.rest import Client

from storefront.infrastructure.notifications.messages import Message

logger = logging.getLogger(__name__)


class MessageChannel(ABC):

    @abstractmethod
    def send(self, recipient: str, message: Message) -> None:
        """Deliver one message to one recipient."""


class LogChannel(MessageChannel):
    """Development channel: writes the message to the log instead of sending."""

    def __init__(self, kind: str) -> None:
        self.kind = kind

    def send(self, recipient: str, message: Message) -> None:
        logger.info("[%s -> %s] %s\n%s", self.kind, recipient, message.subject, message.body)


class ResendEmailChannel(MessageChannel):

    API_URL = "https://api.resend.com/emails"

    def __init__(
        self,
        api_key: str,
        from_email: str,
        client: httpx.Client | None = None,
    ) -> None:
        self._from_email = from_email
        self._client = client or httpx.Client(
            timeout=10.0, headers={"Authorization": f"Bearer {api_key}"}
        )

    def send(self, recipient: str, message: Message) -> None:
        response = self._client.post(
            self.API_URL,
            json={
                "from": self._from_email,
                "to": recipient,
                "subject": message.subject,
                "text": message.body,
            },
        )
        response.raise_for_status()
        logger.debug("Email to %s accepted: %s", recipient, response.json().get("id"))


class TwilioSmsChannel(MessageChannel):

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        client: Client | None = None,
    ) -> None:
        self._from_number = from_number
        self._client = client or Client(account_sid, auth_token)

    def send(self, recipient: str, message: Message) -> None:
        self._client.messages.create(from_=self._from_number, to=recipient, body=message.body)
