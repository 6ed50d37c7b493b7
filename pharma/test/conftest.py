"""
Pytest configuration and fixtures

Every test gets a fresh application backed by an in-memory SQLite database.
"""
from datetime import date, timedelta
from decimal import Decimal

import pytest

from pharma import create_app
from pharma import db as _db
from pharma.config import AppConfig

TEST_USERNAME = 'pharmacist'
TEST_PASSWORD = 'Pharmacy123'


def make_test_config(tmp_path, **overrides):
    """AppConfig suitable for tests: no HTTPS, CSRF or rate limiting"""
    values = dict(
        secret_key='test-secret-key',
        database_url='sqlite://',
        testing=True,
        enable_https=False,
        force_https_redirect=False,
        session_cookie_secure=False,
        remember_cookie_secure=False,
        ratelimit_enabled=False,
        csrf_enabled=False,
        log_dir=str(tmp_path / 'logs'),
        log_level='DEBUG',
        admin_username='admin',
        admin_password='AdminPass123',
    )
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create Flask application for testing"""
    app = create_app(make_test_config(tmp_path))

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


def login_user(client, username=TEST_USERNAME, password=TEST_PASSWORD):
    """Helper function to login a user"""
    return client.post('/login', data={
        'username': username,
        'password': password
    })


@pytest.fixture(scope='function')
def user(app):
    from pharma.data.user import User

    user = User.from_dict({'username': TEST_USERNAME, 'password': TEST_PASSWORD})
    _db.session.add(user)
    _db.session.commit()
    return user


@pytest.fixture(scope='function')
def authenticated_client(client, user):
    """Test client logged in as the test pharmacist"""
    response = login_user(client)
    assert response.status_code == 302
    return client


@pytest.fixture(scope='function')
def make_supplier(app):
    from pharma.data.supplier import Supplier

    def _make(name='Global Pharma', contact='Jane Doe', email='info@globalpharma.com'):
        supplier = Supplier(name=name, contact=contact, email=email)
        _db.session.add(supplier)
        _db.session.commit()
        return supplier

    return _make


@pytest.fixture(scope='function')
def make_medicine(app):
    from pharma.data.medicine import Medicine

    def _make(name='Paracetamol 500mg', stock=50, price='4.50', supplier=None, expiry_date=None):
        medicine = Medicine(
            name=name,
            stock=stock,
            price=Decimal(price),
            supplier=supplier,
            expiry_date=expiry_date if expiry_date is not None else date.today() + timedelta(days=365),
        )
        _db.session.add(medicine)
        _db.session.commit()
        return medicine

    return _make
