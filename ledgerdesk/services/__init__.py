"""
Services Package

- BookService: catalogue operations
- DeliveryFeeService: delivery fees with duplicate detection
"""

from ..domain.errors import LedgerDeskError, RecordNotFoundError, DuplicateRecordError
from .book_service import BookService
from .delivery_fee_service import DeliveryFeeService

# Service instances with lazy initialization
_book_service = None
_fee_service = None


def _get_book_service():
    """Get book service instance with lazy initialization."""
    global _book_service
    if _book_service is None:
        _book_service = BookService()
    return _book_service


def _get_fee_service():
    """Get delivery fee service instance with lazy initialization."""
    global _fee_service
    if _fee_service is None:
        _fee_service = DeliveryFeeService()
    return _fee_service


class _LazyService:
    """Lazy service that initializes on first access."""
    def __init__(self, service_getter):
        self._service_getter = service_getter
        self._service = None

    def __getattr__(self, name):
        if self._service is None:
            self._service = self._service_getter()
        return getattr(self._service, name)


book_service = _LazyService(_get_book_service)
fee_service = _LazyService(_get_fee_service)


def reset_all_services():
    """Reset all service instances to force fresh initialization."""
    global _book_service, _fee_service
    _book_service = None
    _fee_service = None
    book_service._service = None
    fee_service._service = None
    return True


__all__ = [
    'BookService',
    'DeliveryFeeService',
    'LedgerDeskError',
    'RecordNotFoundError',
    'DuplicateRecordError',
    'book_service',
    'fee_service',
    'reset_all_services',
]
