"""
Book service: catalogue operations on top of the book repository.
"""

import logging
from typing import List, Optional

from ..domain.errors import RecordNotFoundError
from ..domain.models import Book
from ..domain.repositories import BookRepository
from ..infrastructure.kuzu_repositories import KuzuBookRepository

logger = logging.getLogger(__name__)


class BookService:
    """Core book operations."""

    def __init__(self, repository: Optional[BookRepository] = None):
        self.repository = repository or KuzuBookRepository()

    def add_book(self, title: str, author: str) -> Book:
        book = self.repository.create(Book(title=title.strip(), author=author.strip()))
        logger.info(f"Created book {book.id}: '{book.title}' by '{book.author}'")
        return book

    def get_book(self, book_id: str) -> Book:
        book = self.repository.get_by_id(book_id)
        if book is None:
            raise RecordNotFoundError('Book', book_id)
        return book

    def list_books(self) -> List[Book]:
        return self.repository.list_all()

    def update_book(self, book_id: str, title: str, author: str) -> Book:
        book = self.get_book(book_id)
        book.title = title.strip()
        book.author = author.strip()
        self.repository.update(book)
        logger.info(f"Updated book {book.id}")
        return book

    def delete_book(self, book_id: str) -> Book:
        """Delete a book and return the record as it was before deletion."""
        book = self.get_book(book_id)
        if not self.repository.delete(book_id):
            raise RecordNotFoundError('Book', book_id)
        logger.info(f"Deleted book {book_id}: '{book.title}'")
        return book

    def count_books(self) -> int:
        return self.repository.count()
