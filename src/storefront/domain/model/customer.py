"""Customer entity and the contact normalisation used for de-duplication."""

from __future__ import annotations

import re
from dataclasses import dataclass

_NON_DIGITS = re.compile(r"\D")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def normalize_phone(phone: str) -> str:
    """Keep digits only: ``(555) 123-4567`` and ``555.123.4567`` collapse.

    No country-code inference is made, so ``+1 555 123 4567`` stays distinct
    from ``555 123 4567``.
    """
    return _NON_DIGITS.sub("", phone or "")


@dataclass
class Customer:
    id: str | None
    name: str
    email: str
    phone: str

    @property
    def contact_key(self) -> tuple[str, str]:
        """The (email, phone) pair customers are de-duplicated on."""
        return normalize_email(self.email), normalize_phone(self.phone)
