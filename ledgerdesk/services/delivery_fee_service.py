"""
Delivery fee service.

Invoice numbers are normalized here before they reach storage, so every
lookup and uniqueness check compares canonical values. Creation checks for
an existing record first; the storage primary key catches anything that
races past that check.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from ..domain.errors import DuplicateRecordError, RecordNotFoundError
from ..domain.models import DeliveryFee
from ..domain.repositories import DeliveryFeeRepository
from ..infrastructure.kuzu_repositories import KuzuDeliveryFeeRepository
from ..utils.money import normalize_invoice_number, cents_to_decimal, CENT

logger = logging.getLogger(__name__)


class DeliveryFeeService:
    """Delivery fee operations with duplicate detection on invoice number."""

    def __init__(self, repository: Optional[DeliveryFeeRepository] = None):
        self.repository = repository or KuzuDeliveryFeeRepository()

    def find_existing(self, invoice_number: str) -> Optional[DeliveryFee]:
        """Return the stored fee for this invoice number, if any."""
        key = normalize_invoice_number(invoice_number)
        if not key:
            return None
        return self.repository.get_by_invoice_number(key)

    def create_fee(self, invoice_number: str, fee: Decimal) -> DeliveryFee:
        """
        Create a delivery fee.

        Raises:
            DuplicateRecordError: the invoice number is already recorded; the
                error's ``key`` is the existing record's invoice number.
            ValueError: the invoice number is blank.
        """
        key = normalize_invoice_number(invoice_number)
        if not key:
            raise ValueError("Invoice number is required")

        existing = self.repository.get_by_invoice_number(key)
        if existing is not None:
            logger.warning(f"Duplicate delivery fee rejected for invoice {key}")
            raise DuplicateRecordError('DeliveryFee', key, f"Delivery fee already exists for invoice {key}")

        try:
            created = self.repository.create(DeliveryFee(invoice_number=key, fee=fee.quantize(CENT)))
        except DuplicateRecordError:
            logger.warning(f"Duplicate delivery fee for invoice {key} rejected by storage")
            raise
        logger.info(f"Created delivery fee for invoice {key}: {created.fee}")
        return created

    def get_fee(self, invoice_number: str) -> DeliveryFee:
        key = normalize_invoice_number(invoice_number)
        fee = self.repository.get_by_invoice_number(key) if key else None
        if fee is None:
            raise RecordNotFoundError('DeliveryFee', key or invoice_number)
        return fee

    def list_fees(self) -> List[DeliveryFee]:
        return self.repository.list_all()

    def update_fee(self, invoice_number: str, fee: Decimal) -> DeliveryFee:
        record = self.get_fee(invoice_number)
        record.fee = fee.quantize(CENT)
        self.repository.update_fee(record)
        logger.info(f"Updated delivery fee for invoice {record.invoice_number}: {record.fee}")
        return record

    def delete_fee(self, invoice_number: str) -> DeliveryFee:
        record = self.get_fee(invoice_number)
        if not self.repository.delete(record.invoice_number):
            raise RecordNotFoundError('DeliveryFee', record.invoice_number)
        logger.info(f"Deleted delivery fee for invoice {record.invoice_number}")
        return record

    def count_fees(self) -> int:
        return self.repository.count()

    def total_fees(self) -> Decimal:
        return cents_to_decimal(self.repository.total_cents())
