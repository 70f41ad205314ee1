import pytest

from config import TestingConfig
from ledgerdesk import create_app
from ledgerdesk.services import reset_all_services
from ledgerdesk.utils.safe_kuzu_manager import reset_safe_kuzu_manager


@pytest.fixture
def app(tmp_path):
    app = create_app(TestingConfig, KUZU_DB_PATH=str(tmp_path / "kuzu" / "test.db"))
    yield app
    reset_safe_kuzu_manager()
    reset_all_services()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fee_service(app):
    from ledgerdesk.services import fee_service
    return fee_service


@pytest.fixture
def book_service(app):
    from ledgerdesk.services import book_service
    return book_service


@pytest.fixture
def flashed_messages(client):
    """Return the flash messages currently queued in the test client's session"""
    def _read():
        with client.session_transaction() as session:
            return list(session.get('_flashes', []))
    return _read
