from decimal import Decimal


def test_lookup_reports_existing_invoice(client, fee_service):
    fee_service.create_fee('INV-100', Decimal('1.00'))

    data = client.get('/api/fees/lookup?invoice_number=inv-100').get_json()

    assert data == {'exists': True, 'invoice_number': 'INV-100', 'edit_url': '/fees/INV-100/edit'}


def test_lookup_reports_unknown_invoice(client):
    data = client.get('/api/fees/lookup?invoice_number=INV-404').get_json()

    assert data['exists'] is False
    assert data['edit_url'] is None


def test_lookup_requires_invoice_number(client):
    resp = client.get('/api/fees/lookup')

    assert resp.status_code == 400


def test_api_404_is_json(client):
    resp = client.get('/api/nothing-here')

    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'Not found'}
