"""
Infrastructure layer: Kuzu-backed repository implementations.
"""

from .kuzu_repositories import KuzuBookRepository, KuzuDeliveryFeeRepository

__all__ = ['KuzuBookRepository', 'KuzuDeliveryFeeRepository']
