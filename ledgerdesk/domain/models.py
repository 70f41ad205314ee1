"""
Domain models for LedgerDesk.

These models represent the core business entities independent of persistence concerns.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
import uuid


def now_utc() -> datetime:
    """Timezone-aware UTC now for default timestamps (avoid datetime.utcnow deprecation)."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Book:
    """A book in the catalogue, identified by a generated id."""
    id: Optional[str] = None
    title: str = ""
    author: str = ""

    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def display_label(self) -> str:
        return f"{self.title} by {self.author}"


@dataclass
class DeliveryFee:
    """A delivery fee charged against a single invoice.

    The invoice number is the record's identity: it is unique across the
    store and never changes after creation.
    """
    invoice_number: str = ""
    fee: Decimal = Decimal("0.00")

    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def display_label(self) -> str:
        return f"invoice {self.invoice_number}"
