"""Gateway webhook processing: verify, decode and route events."""

from __future__ import annotations

import logging

from storefront.application.confirm_payment import ConfirmPaymentHandler, PaymentConfirmation
from storefront.application.payment_gateway import CheckoutSessionMetadata
from storefront.domain.exceptions import ConfigurationError, ValidationError
from storefront.infrastructure.gateway.webhook_signature import construct_event

logger = logging.getLogger(__name__)

SESSION_COMPLETED = "checkout.session.completed"


class GatewayWebhookProcessor:

    def __init__(
        self,
        confirm_handler: ConfirmPaymentHandler,
        webhook_secret: str | None,
        tolerance: int = 300,
    ) -> None:
        self._confirm = confirm_handler
        self._secret = webhook_secret
        self._tolerance = tolerance

    def process(self, payload: bytes, signature_header: str | None) -> PaymentConfirmation | None:
        """Returns the confirmation for completed sessions, None for other events."""
        if not self._secret:
            raise ConfigurationError("Webhook secret is not configured")
        event = construct_event(payload, signature_header, self._secret, self._tolerance)

        event_type = event.get("type")
        if event_type != SESSION_COMPLETED:
            logger.debug("Ignoring gateway event %s", event_type)
            return None

        session = (event.get("data") or {}).get("object") or {}
        session_id = session.get("id")
        if not session_id:
            raise ValidationError("Completed session event has no session id")
        metadata = CheckoutSessionMetadata.from_metadata(session.get("metadata") or {})
        return self._confirm.handle(
            session_id=session_id,
            metadata=metadata,
            payment_intent_id=session.get("payment_intent"),
        )
