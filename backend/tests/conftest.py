"""
Pytest fixtures for salesdash tests.

Provides an app with an in-memory database, a test client, a dict-backed
key-value store and a factory for sale records with fixed timestamps.
"""

import itertools

import pytest

from salesdash import create_app
from salesdash.extensions import db
from salesdash.models import Sale
from salesdash.services.dashboard_service import SalesDashboard
from salesdash.services.storage_service import MemoryKeyValueStore


@pytest.fixture(scope='function')
def app():
    """Create application for testing; a fresh database per test."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def store():
    return MemoryKeyValueStore()


@pytest.fixture(scope='function')
def dashboard(store):
    """Dashboard over the memory store, default accounts seeded."""
    return SalesDashboard(store).load()


@pytest.fixture(scope='function')
def make_sale():
    """Build Sale records directly, bypassing the ledger."""
    counter = itertools.count(1)

    def _make(
        item="Pen",
        quantity=1,
        price=10.0,
        is_paid=False,
        user_id="user-1",
        username="user",
        name=None,
        timestamp="2026-03-01T12:00:00.000Z",
    ):
        n = next(counter)
        return Sale(
            id=f"sale-{n}",
            name=name or f"Customer {n}",
            item=item,
            quantity=quantity,
            price=price,
            is_paid=is_paid,
            user_id=user_id,
            username=username,
            timestamp=timestamp,
        )

    return _make


def login(client, username: str, password: str):
    """Helper to log a user in through the API."""
    return client.post('/api/auth/login', json={
        'username': username,
        'password': password,
    })


@pytest.fixture(scope='function')
def admin_client(client):
    resp = login(client, 'admin', 'admin123')
    assert resp.status_code == 200
    return client


@pytest.fixture(scope='function')
def user_client(client):
    resp = login(client, 'user', 'user123')
    assert resp.status_code == 200
    return client
