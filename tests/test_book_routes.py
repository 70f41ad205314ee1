"""Tests for the book views and the shared delete modal."""


def test_add_book(client, book_service):
    resp = client.post('/books/new', data={'title': '  Refactoring ', 'author': 'Martin Fowler'})

    assert resp.status_code == 302
    books = book_service.list_books()
    assert [(b.title, b.author) for b in books] == [('Refactoring', 'Martin Fowler')]

def test_add_book_requires_title(client, book_service):
    resp = client.post('/books/new', data={'title': '', 'author': 'Someone'})

    assert resp.status_code == 200
    assert 'is-invalid' in resp.get_data(as_text=True)
    assert book_service.count_books() == 0

def test_list_wires_each_row_to_the_shared_modal(client, book_service):
    book = book_service.add_book('Domain-Driven Design', 'Eric Evans')

    html = client.get('/books/').get_data(as_text=True)

    assert f'data-delete-url="/books/{book.id}/delete"' in html
    assert 'data-record-label="Domain-Driven Design by Eric Evans"' in html
    assert 'data-bs-target="#confirmDeleteModal"' in html
    assert 'data-delete-form' in html
    assert 'js/confirm_modal.js' in html

def test_delete_get_shows_confirmation_without_deleting(client, book_service):
    book = book_service.add_book('Refactoring', 'Martin Fowler')

    resp = client.get(f'/books/{book.id}/delete')

    assert resp.status_code == 200
    assert 'Are you sure you want to delete' in resp.get_data(as_text=True)
    assert book_service.count_books() == 1

def test_delete_post_removes_book(client, book_service, flashed_messages):
    book = book_service.add_book('Refactoring', 'Martin Fowler')

    resp = client.post(f'/books/{book.id}/delete')

    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/books/')
    assert book_service.count_books() == 0
    assert flashed_messages()[0] == ('success', 'Deleted "Refactoring".')

def test_delete_missing_book_is_404(client):
    assert client.post('/books/missing/delete').status_code == 404

def test_edit_book(client, book_service):
    book = book_service.add_book('Refactorin', 'Martin Fowler')

    resp = client.post(f'/books/{book.id}/edit', data={'title': 'Refactoring', 'author': 'Martin Fowler'})

    assert resp.status_code == 302
    assert book_service.get_book(book.id).title == 'Refactoring'

def test_dashboard_counts(client, book_service, fee_service):
    from decimal import Decimal
    book_service.add_book('Refactoring', 'Martin Fowler')
    fee_service.create_fee('INV-1', Decimal('5.00'))

    html = client.get('/').get_data(as_text=True)

    assert '1 book in the catalogue' in html
    assert 'totalling $5.00' in html
