"""Tests for the delivery fee views, including the duplicate-invoice redirect."""
from decimal import Decimal


def test_create_page_renders_confirmation_modal(client):
    resp = client.get('/fees/new')
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert 'data-bs-target="#confirmCreateModal"' in html
    assert 'id="confirmCreateModal"' in html
    assert 'bootstrap.bundle.min.js' in html

def test_create_fee_persists_and_redirects_to_list(client, fee_service):
    resp = client.post('/fees/new', data={'invoice_number': 'inv-001', 'fee': '12.50'})

    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/fees/')
    fee = fee_service.get_fee('INV-001')
    assert fee.fee == Decimal('12.50')

def test_duplicate_invoice_redirects_to_edit_existing(client, fee_service, flashed_messages):
    fee_service.create_fee('INV-001', Decimal('12.50'))

    resp = client.post('/fees/new', data={'invoice_number': ' inv-001 ', 'fee': '99.00'})

    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/fees/INV-001/edit')
    assert fee_service.count_fees() == 1
    assert fee_service.get_fee('INV-001').fee == Decimal('12.50')
    messages = flashed_messages()
    assert messages[0][0] == 'warning'
    assert 'INV-001 already exists' in messages[0][1]

def test_duplicate_redirect_lands_on_edit_form(client, fee_service):
    fee_service.create_fee('INV-001', Decimal('12.50'))

    resp = client.post('/fees/new', data={'invoice_number': 'INV-001', 'fee': '1.00'},
                       follow_redirects=True)

    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert 'Edit delivery fee' in html
    assert 'value="INV-001"' in html
    assert 'already exists. You can edit it below.' in html

def test_other_validation_errors_rerender_form(client, fee_service):
    resp = client.post('/fees/new', data={'invoice_number': 'INV-002', 'fee': '-5'})

    assert resp.status_code == 200
    assert 'is-invalid' in resp.get_data(as_text=True)
    assert fee_service.count_fees() == 0

def test_fee_with_fraction_of_cent_is_rejected(client, fee_service):
    resp = client.post('/fees/new', data={'invoice_number': 'INV-003', 'fee': '1.005'})

    assert resp.status_code == 200
    assert 'at most two decimal places' in resp.get_data(as_text=True)
    assert fee_service.find_existing('INV-003') is None

def test_missing_invoice_number_is_rejected(client, fee_service):
    resp = client.post('/fees/new', data={'invoice_number': '   ', 'fee': '1.00'})

    assert resp.status_code == 200
    assert fee_service.count_fees() == 0

def test_duplicate_caught_after_validation_also_redirects(client, fee_service, monkeypatch):
    fee_service.create_fee('INV-004', Decimal('3.00'))
    # Validation misses the record, so only the service and storage checks see it
    monkeypatch.setattr(type(fee_service._service), 'find_existing', lambda self, invoice_number: None)

    resp = client.post('/fees/new', data={'invoice_number': 'INV-004', 'fee': '4.00'})

    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/fees/INV-004/edit')
    assert fee_service.count_fees() == 1

def test_edit_fee_updates_amount(client, fee_service):
    fee_service.create_fee('INV-005', Decimal('3.00'))

    resp = client.post('/fees/INV-005/edit', data={'fee': '4.75'})

    assert resp.status_code == 302
    assert fee_service.get_fee('INV-005').fee == Decimal('4.75')

def test_edit_missing_fee_is_404(client):
    assert client.get('/fees/NOPE/edit').status_code == 404

def test_invoice_numbers_with_slashes_resolve(client, fee_service):
    fee_service.create_fee('2024/07/15', Decimal('8.00'))

    assert client.get('/fees/2024/07/15/edit').status_code == 200

def test_duplicate_with_edge_slashes_redirects_to_same_record(client, fee_service):
    fee_service.create_fee('X', Decimal('5.00'))
    fee_service.create_fee('X/Y', Decimal('6.00'))

    resp = client.post('/fees/new', data={'invoice_number': '/x', 'fee': '1.00'})
    assert resp.headers['Location'].endswith('/fees/X/edit')

    resp = client.post('/fees/new', data={'invoice_number': 'x//y/', 'fee': '1.00'},
                       follow_redirects=True)
    html = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert 'value="X/Y"' in html
    assert fee_service.count_fees() == 2

def test_invoice_number_of_only_slashes_is_rejected(client, fee_service):
    resp = client.post('/fees/new', data={'invoice_number': '//', 'fee': '1.00'})

    assert resp.status_code == 200
    assert 'is-invalid' in resp.get_data(as_text=True)
    assert fee_service.count_fees() == 0

def test_list_shows_total_and_delete_modal(client, fee_service):
    fee_service.create_fee('INV-006', Decimal('1000.00'))
    fee_service.create_fee('INV-007', Decimal('234.50'))

    html = client.get('/fees/').get_data(as_text=True)

    assert '$1,234.50' in html
    assert 'data-delete-url="/fees/INV-006/delete"' in html
    assert 'id="confirmDeleteModal"' in html

def test_delete_fee_via_post(client, fee_service):
    fee_service.create_fee('INV-008', Decimal('2.00'))

    get_resp = client.get('/fees/INV-008/delete')
    assert get_resp.status_code == 200
    assert fee_service.find_existing('INV-008') is not None

    resp = client.post('/fees/INV-008/delete')
    assert resp.status_code == 302
    assert fee_service.find_existing('INV-008') is None
