"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and map them to a status
code or a user-friendly message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request field is missing/malformed or an invariant was violated."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class SizeUnavailableError(NotFoundError):
    """A product size is unknown or no longer active."""

    def __init__(self, size_id: str) -> None:
        super().__init__("Size unavailable")
        self.size_id = size_id


class AvailabilityError(DomainException):
    """Stock cannot satisfy the request."""


class InsufficientStockError(AvailabilityError):

    def __init__(self, size_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient quantity available for {size_name} "
            f"(requested {requested}, {available} left)"
        )
        self.size_name = size_name
        self.requested = requested
        self.available = available


class AuthorizationError(DomainException):
    """The caller is not a known admin."""


class ConfigurationError(DomainException):
    """A required external service or store setting is not configured."""


class MissingPaymentConfigError(ConfigurationError):
    """No payment handle is configured on the store settings."""


class UpstreamFailure(DomainException):
    """The record store or the payment gateway failed."""


class PersistenceFailure(UpstreamFailure):
    """A record-store write failed."""


class CustomerPersistenceError(PersistenceFailure):
    pass


class OrderPersistenceError(PersistenceFailure):
    pass


class DuplicatePaymentSessionError(PersistenceFailure):
    """An order already exists for this payment session id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Order already recorded for session {session_id}")
        self.session_id = session_id


class GatewayError(UpstreamFailure):
    """The payment gateway rejected or failed a call."""


class SignatureError(DomainException):
    """A webhook signature did not verify."""
