"""
Domain layer for LedgerDesk.

Contains the core business entities and repository contracts.
"""

from .models import Book, DeliveryFee, now_utc
from .repositories import BookRepository, DeliveryFeeRepository

__all__ = ['Book', 'DeliveryFee', 'now_utc', 'BookRepository', 'DeliveryFeeRepository']
