"""
Repository interfaces for the domain layer.

These interfaces define the contracts for data access without coupling to specific implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Book, DeliveryFee


class BookRepository(ABC):
    """Repository interface for Book operations."""

    @abstractmethod
    def create(self, book: Book) -> Book:
        """Create a new book."""
        pass

    @abstractmethod
    def get_by_id(self, book_id: str) -> Optional[Book]:
        """Get a book by ID."""
        pass

    @abstractmethod
    def list_all(self) -> List[Book]:
        """List all books ordered by title, then author."""
        pass

    @abstractmethod
    def update(self, book: Book) -> Book:
        """Update an existing book."""
        pass

    @abstractmethod
    def delete(self, book_id: str) -> bool:
        """Delete a book. Returns False when nothing matched."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass


class DeliveryFeeRepository(ABC):
    """Repository interface for DeliveryFee operations."""

    @abstractmethod
    def create(self, fee: DeliveryFee) -> DeliveryFee:
        """Create a new delivery fee.

        Raises DuplicateRecordError when the invoice number is already stored.
        """
        pass

    @abstractmethod
    def get_by_invoice_number(self, invoice_number: str) -> Optional[DeliveryFee]:
        pass

    @abstractmethod
    def list_all(self) -> List[DeliveryFee]:
        """List all fees ordered by invoice number."""
        pass

    @abstractmethod
    def update_fee(self, fee: DeliveryFee) -> DeliveryFee:
        """Update the amount of an existing fee."""
        pass

    @abstractmethod
    def delete(self, invoice_number: str) -> bool:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def total_cents(self) -> int:
        """Sum of all fees in minor units."""
        pass
