"""
Integration tests for app-level behavior: health, CORS, metrics, error mapping.
"""

import pytest

from config import DEFAULT_SECRET_KEY, TestingConfig
from hardware_shop import create_app
from hardware_shop.database import get_database
from hardware_shop.services import ledger_service


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json()['database'] == 'connected'


def test_cors_preflight_needs_no_token(client):
    response = client.options('/sales', headers={
        'Origin': 'http://localhost:8080',
        'Access-Control-Request-Method': 'POST',
    })

    assert response.status_code == 200
    assert response.headers['Access-Control-Allow-Origin'] == '*'
    assert 'DELETE' in response.headers['Access-Control-Allow-Methods']
    assert 'Authorization' in response.headers['Access-Control-Allow-Headers']


def test_cors_headers_on_errors(client):
    response = client.get('/products')

    assert response.status_code == 401
    assert response.headers['Access-Control-Allow-Origin'] == '*'


def test_unknown_route_is_json_404(client):
    response = client.get('/nope')

    assert response.status_code == 404
    assert response.get_json() == {'status': 'error', 'error': 'Not Found'}


def test_unexpected_error_hides_details(client, admin_headers, monkeypatch):
    def boom(session):
        raise RuntimeError('SELECT * FROM secret_table')

    monkeypatch.setattr(ledger_service, 'list_products', boom)
    response = client.get('/products', headers=admin_headers)

    assert response.status_code == 500
    assert response.get_json() == {'status': 'error', 'error': 'Internal Server Error'}
    assert b'secret_table' not in response.data


def test_metrics_count_sale_outcomes(client, sales_headers, product):
    recorded = client.post('/sales', json={'product_id': product.id, 'quantity': 2}, headers=sales_headers)
    client.post('/sales', json={'product_id': product.id, 'quantity': 99}, headers=sales_headers)
    client.post('/sales', json={'product_id': product.id, 'quantity': 0}, headers=sales_headers)
    client.delete(f"/sales/{recorded.get_json()['id']}", headers=sales_headers)

    response = client.get('/metrics')

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'shop_api_requests_total{' in body
    for outcome in ('recorded', 'insufficient_stock', 'invalid', 'reversed'):
        assert f'shop_sale_events_total{{outcome="{outcome}"}}' in body
    assert 'shop_units_sold_total' in body


class TestTokenSecret:

    def test_production_refuses_default_secret(self):
        class ProductionDefaults(TestingConfig):
            ENV = 'production'
            JWT_SECRET = DEFAULT_SECRET_KEY

        with pytest.raises(RuntimeError, match='JWT_SECRET'):
            create_app(ProductionDefaults)

    def test_production_with_secret_starts(self):
        class ProductionConfigured(TestingConfig):
            ENV = 'production'
            JWT_SECRET = 'a-real-deployment-secret'

        app = create_app(ProductionConfigured)
        get_database(app).dispose()
        assert app.config['JWT_SECRET'] == 'a-real-deployment-secret'

    def test_development_default_secret_only_warns(self, caplog):
        class DevelopmentDefaults(TestingConfig):
            ENV = 'development'
            JWT_SECRET = DEFAULT_SECRET_KEY

        app = create_app(DevelopmentDefaults)
        get_database(app).dispose()
        assert 'development token secret' in caplog.text
