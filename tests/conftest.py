import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
import uuid

import jwt

from hardware_shop import create_app
from hardware_shop.database import get_database
from hardware_shop.models import Vendor, Product


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing (fresh in-memory database)."""
    app = create_app('config.TestingConfig')
    yield app
    get_database(app).dispose()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Create database session for testing."""
    with app.app_context():
        session = get_database(app).session
        yield session
        session.rollback()


@pytest.fixture(scope='function')
def vendor(session):
    """Create a test vendor."""
    suffix = str(uuid.uuid4())[:8]
    vendor = Vendor(name=f'Test Vendor {suffix}', phone='555-0100')
    session.add(vendor)
    session.commit()
    session.refresh(vendor)
    return vendor


@pytest.fixture(scope='function')
def product(session, vendor):
    """Create test product: cost 10, selling 15, stock 5."""
    product = Product(
        name='Claw Hammer',
        category='Tools',
        vendor_id=vendor.id,
        cost_price=Decimal('10.00'),
        selling_price=Decimal('15.00'),
        stock_quantity=5
    )
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


def _login(client, username, password):
    response = client.post('/login', json={'username': username, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response.get_json()['token']


@pytest.fixture(scope='function')
def admin_token(app, client):
    return _login(client, app.config['ADMIN_USERNAME'], app.config['ADMIN_PASSWORD'])


@pytest.fixture(scope='function')
def sales_token(app, client):
    return _login(client, app.config['SALES_USERNAME'], app.config['SALES_PASSWORD'])


@pytest.fixture(scope='function')
def admin_headers(admin_token):
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture(scope='function')
def sales_headers(sales_token):
    return {'Authorization': f'Bearer {sales_token}'}


@pytest.fixture(scope='function')
def expired_headers(app):
    """Headers carrying a correctly signed but expired admin token."""
    past = datetime.now(timezone.utc) - timedelta(hours=9)
    token = jwt.encode(
        {'username': 'admin', 'role': 'admin', 'iat': past, 'exp': past + timedelta(hours=8)},
        app.config['JWT_SECRET'],
        algorithm='HS256'
    )
    return {'Authorization': f'Bearer {token}'}
