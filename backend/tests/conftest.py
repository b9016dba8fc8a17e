"""
Pytest fixtures for VendorHub backend tests.

Every app-level fixture is parametrised over the three record stores, so
each test that uses `app`, `client` or `store` runs against memory, the JSON
file backend and SQL (in-memory SQLite).
"""

import pytest

from vendorhub import create_app
from vendorhub.extensions import db
from vendorhub.stores import BACKENDS, get_store


def make_app(backend: str, tmp_path, **overrides):
    config = {
        'TESTING': True,
        'STORE_BACKEND': backend,
        'DATA_FILE': str(tmp_path / 'vendorhub_data.json'),
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SEED_DEMO': False,
    }
    config.update(overrides)
    return create_app(config)


@pytest.fixture(scope='function', params=BACKENDS)
def app(request, tmp_path):
    """Create application for testing, once per store backend."""
    app = make_app(request.param, tmp_path)

    with app.app_context():
        yield app
        if request.param == 'sql':
            db.session.remove()
            db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def store(app):
    """The record store owned by the app under test."""
    return get_store()


@pytest.fixture(scope='function')
def vendor(client):
    """Create a vendor through the API."""
    response = client.post('/api/vendors', json={
        'name': 'Fresh Farms Co.',
        'contactPerson': 'John Miller',
        'phone': '+1-555-0123',
        'paymentTerms': 'credit',
    })
    assert response.status_code == 201
    return response.json['vendor']


@pytest.fixture(scope='function')
def invoice(client, vendor):
    """Create a 1000.00 invoice for the vendor through the API."""
    response = client.post('/api/invoices', json={
        'vendorId': vendor['id'],
        'invoiceNumber': 'INV-001',
        'invoiceDate': '2024-03-01',
        'invoiceAmount': 1000,
        'totalItems': 40,
    })
    assert response.status_code == 201
    return response.json['invoice']
