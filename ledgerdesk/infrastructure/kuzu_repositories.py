"""
Kuzu repositories for books and delivery fees.
"""

import logging
from typing import Optional, List, Dict, Any

from ..domain.models import Book, DeliveryFee, new_id, now_utc
from ..domain.repositories import BookRepository, DeliveryFeeRepository
from ..domain.errors import DuplicateRecordError
from ..utils.money import decimal_to_cents, cents_to_decimal
from ..utils.safe_kuzu_manager import (
    SafeKuzuManager, get_safe_kuzu_manager, to_kuzu_timestamp, from_kuzu_timestamp
)

logger = logging.getLogger(__name__)


def is_duplicate_key_error(error: Exception) -> bool:
    """True when Kuzu rejected a write for violating a primary key."""
    message = str(error).lower()
    return 'duplicated primary key' in message or 'violates the uniqueness constraint' in message


class _KuzuRepositoryBase:
    """Resolves the manager on every access so a reset manager is picked up."""

    def __init__(self, safe_manager: Optional[SafeKuzuManager] = None):
        self._safe_manager = safe_manager

    @property
    def safe_manager(self) -> SafeKuzuManager:
        return self._safe_manager or get_safe_kuzu_manager()

    def _query(self, query: str, params: Optional[Dict[str, Any]] = None,
               operation: str = "query") -> List[Dict[str, Any]]:
        return self.safe_manager.execute_query(query, params or {}, operation=operation)

    def _count(self, label: str) -> int:
        rows = self._query(f"MATCH (n:{label}) RETURN COUNT(n) AS c", operation=f"count_{label.lower()}")
        return int(rows[0]['c']) if rows else 0


_BOOK_COLUMNS = """
    b.id AS id, b.title AS title, b.author AS author,
    b.created_at AS created_at, b.updated_at AS updated_at
"""


def _row_to_book(row: Dict[str, Any]) -> Book:
    return Book(
        id=row['id'],
        title=row.get('title') or '',
        author=row.get('author') or '',
        created_at=from_kuzu_timestamp(row.get('created_at')) or now_utc(),
        updated_at=from_kuzu_timestamp(row.get('updated_at')) or now_utc(),
    )


class KuzuBookRepository(_KuzuRepositoryBase, BookRepository):
    """Book repository backed by the Book node table."""

    def create(self, book: Book) -> Book:
        if not book.id:
            book.id = new_id()
        try:
            self._query(
                """
                CREATE (b:Book {id: $id, title: $title, author: $author,
                                created_at: $created_at, updated_at: $updated_at})
                """,
                {
                    'id': book.id,
                    'title': book.title,
                    'author': book.author,
                    'created_at': to_kuzu_timestamp(book.created_at),
                    'updated_at': to_kuzu_timestamp(book.updated_at),
                },
                operation="create_book",
            )
        except RuntimeError as e:
            if is_duplicate_key_error(e):
                raise DuplicateRecordError('Book', book.id, f"Book already exists with id {book.id}") from e
            raise
        return book

    def get_by_id(self, book_id: str) -> Optional[Book]:
        rows = self._query(
            f"MATCH (b:Book) WHERE b.id = $id RETURN {_BOOK_COLUMNS}",
            {'id': book_id},
            operation="get_book",
        )
        return _row_to_book(rows[0]) if rows else None

    def list_all(self) -> List[Book]:
        rows = self._query(
            f"MATCH (b:Book) RETURN {_BOOK_COLUMNS} ORDER BY title, author",
            operation="list_books",
        )
        return [_row_to_book(row) for row in rows]

    def update(self, book: Book) -> Book:
        book.updated_at = now_utc()
        self._query(
            """
            MATCH (b:Book) WHERE b.id = $id
            SET b.title = $title, b.author = $author, b.updated_at = $updated_at
            """,
            {
                'id': book.id,
                'title': book.title,
                'author': book.author,
                'updated_at': to_kuzu_timestamp(book.updated_at),
            },
            operation="update_book",
        )
        return book

    def delete(self, book_id: str) -> bool:
        if self.get_by_id(book_id) is None:
            return False
        self._query("MATCH (b:Book) WHERE b.id = $id DELETE b", {'id': book_id}, operation="delete_book")
        return True

    def count(self) -> int:
        return self._count('Book')


_FEE_COLUMNS = """
    f.invoice_number AS invoice_number, f.fee_cents AS fee_cents,
    f.created_at AS created_at, f.updated_at AS updated_at
"""


def _row_to_fee(row: Dict[str, Any]) -> DeliveryFee:
    return DeliveryFee(
        invoice_number=row['invoice_number'],
        fee=cents_to_decimal(row.get('fee_cents')),
        created_at=from_kuzu_timestamp(row.get('created_at')) or now_utc(),
        updated_at=from_kuzu_timestamp(row.get('updated_at')) or now_utc(),
    )


class KuzuDeliveryFeeRepository(_KuzuRepositoryBase, DeliveryFeeRepository):
    """Delivery fee repository; the invoice number is the node's primary key."""

    def create(self, fee: DeliveryFee) -> DeliveryFee:
        try:
            self._query(
                """
                CREATE (f:DeliveryFee {invoice_number: $invoice_number, fee_cents: $fee_cents,
                                       created_at: $created_at, updated_at: $updated_at})
                """,
                {
                    'invoice_number': fee.invoice_number,
                    'fee_cents': decimal_to_cents(fee.fee),
                    'created_at': to_kuzu_timestamp(fee.created_at),
                    'updated_at': to_kuzu_timestamp(fee.updated_at),
                },
                operation="create_delivery_fee",
            )
        except RuntimeError as e:
            if is_duplicate_key_error(e):
                raise DuplicateRecordError(
                    'DeliveryFee', fee.invoice_number,
                    f"Delivery fee already exists for invoice {fee.invoice_number}",
                ) from e
            raise
        return fee

    def get_by_invoice_number(self, invoice_number: str) -> Optional[DeliveryFee]:
        rows = self._query(
            f"MATCH (f:DeliveryFee) WHERE f.invoice_number = $invoice_number RETURN {_FEE_COLUMNS}",
            {'invoice_number': invoice_number},
            operation="get_delivery_fee",
        )
        return _row_to_fee(rows[0]) if rows else None

    def list_all(self) -> List[DeliveryFee]:
        rows = self._query(
            f"MATCH (f:DeliveryFee) RETURN {_FEE_COLUMNS} ORDER BY invoice_number",
            operation="list_delivery_fees",
        )
        return [_row_to_fee(row) for row in rows]

    def update_fee(self, fee: DeliveryFee) -> DeliveryFee:
        fee.updated_at = now_utc()
        self._query(
            """
            MATCH (f:DeliveryFee) WHERE f.invoice_number = $invoice_number
            SET f.fee_cents = $fee_cents, f.updated_at = $updated_at
            """,
            {
                'invoice_number': fee.invoice_number,
                'fee_cents': decimal_to_cents(fee.fee),
                'updated_at': to_kuzu_timestamp(fee.updated_at),
            },
            operation="update_delivery_fee",
        )
        return fee

    def delete(self, invoice_number: str) -> bool:
        if self.get_by_invoice_number(invoice_number) is None:
            return False
        self._query(
            "MATCH (f:DeliveryFee) WHERE f.invoice_number = $invoice_number DELETE f",
            {'invoice_number': invoice_number},
            operation="delete_delivery_fee",
        )
        return True

    def count(self) -> int:
        return self._count('DeliveryFee')

    def total_cents(self) -> int:
        rows = self._query(
            "MATCH (f:DeliveryFee) RETURN SUM(f.fee_cents) AS total",
            operation="sum_delivery_fees",
        )
        if not rows or rows[0]['total'] is None:
            return 0
        return int(rows[0]['total'])
