"""
Book management routes.
Handles book CRUD operations; deletion is confirmed through a shared modal
on the list page, or a plain confirmation page when JavaScript is off.
"""

import logging

from flask import Blueprint, render_template, redirect, url_for, flash, abort

from ..forms import BookForm, ConfirmDeleteForm
from ..services import book_service, RecordNotFoundError

logger = logging.getLogger(__name__)

book_bp = Blueprint('books', __name__)


def _get_book_or_404(book_id):
    try:
        return book_service.get_book(book_id)
    except RecordNotFoundError:
        abort(404)


@book_bp.route('/')
def list_books():
    books = book_service.list_books()
    return render_template('books/list.html', books=books, delete_form=ConfirmDeleteForm())


@book_bp.route('/new', methods=['GET', 'POST'])
def add_book():
    """Add a new book to the catalogue"""
    form = BookForm()
    if form.validate_on_submit():
        book = book_service.add_book(form.title.data, form.author.data)
        flash(f'Added "{book.title}".', 'success')
        return redirect(url_for('books.list_books'))
    return render_template('books/form.html', form=form, book=None)


@book_bp.route('/<book_id>/edit', methods=['GET', 'POST'])
def edit_book(book_id):
    book = _get_book_or_404(book_id)
    form = BookForm(obj=book)
    if form.validate_on_submit():
        book_service.update_book(book_id, form.title.data, form.author.data)
        flash(f'Updated "{form.title.data}".', 'success')
        return redirect(url_for('books.list_books'))
    return render_template('books/form.html', form=form, book=book)


@book_bp.route('/<book_id>/delete', methods=['GET', 'POST'])
def delete_book(book_id):
    """GET shows a confirmation page; POST (from the page or the modal) deletes."""
    book = _get_book_or_404(book_id)
    form = ConfirmDeleteForm()
    if form.validate_on_submit():
        try:
            book_service.delete_book(book_id)
        except RecordNotFoundError:
            abort(404)
        flash(f'Deleted "{book.title}".', 'success')
        return redirect(url_for('books.list_books'))
    return render_template(
        'confirm_delete.html',
        form=form,
        record_label=book.display_label,
        delete_url=url_for('books.delete_book', book_id=book.id),
        cancel_url=url_for('books.list_books'),
    )
