"""
Integration tests for sale recording and reversal over HTTP.
"""

import pytest

from hardware_shop.models import Product


def _stock(session, product_id):
    session.expire_all()
    return session.get(Product, product_id).stock_quantity


class TestSalesApi:

    def test_sell_reject_then_reverse(self, client, sales_headers, session, product):
        response = client.post('/sales', json={'product_id': product.id, 'quantity': 3}, headers=sales_headers)

        assert response.status_code == 201
        sale = response.get_json()
        assert sale['total'] == 45.0
        assert sale['profit'] == 15.0
        assert sale['quantity'] == 3
        assert sale['product_name'] == 'Claw Hammer'
        assert sale['message'] == 'Sale recorded successfully'
        assert _stock(session, product.id) == 2

        response = client.post('/sales', json={'product_id': product.id, 'quantity': 3}, headers=sales_headers)
        assert response.status_code == 400
        error = response.get_json()
        assert error['error'] == 'Insufficient stock. Available: 2, Requested: 3'
        assert error['available'] == 2
        assert error['requested'] == 3

        response = client.delete(f"/sales/{sale['id']}", headers=sales_headers)
        assert response.status_code == 200
        assert response.get_json()['message'] == 'Sale deleted and stock restored'
        assert response.get_json()['restored_quantity'] == 3
        assert _stock(session, product.id) == 5

    @pytest.mark.parametrize('body, message', [
        ({'quantity': 1}, 'Product is required'),
        ({'product_id': 1, 'quantity': 0}, 'Quantity must be a positive number'),
        ({'product_id': 1, 'quantity': 'two'}, 'Quantity must be a positive number'),
    ])
    def test_validation(self, client, sales_headers, product, body, message):
        response = client.post('/sales', json=body, headers=sales_headers)

        assert response.status_code == 400
        assert response.get_json()['error'] == message

    def test_unknown_product(self, client, sales_headers):
        response = client.post('/sales', json={'product_id': 4040, 'quantity': 1}, headers=sales_headers)

        assert response.status_code == 404
        assert response.get_json()['error'] == 'Product not found'

    def test_delete_missing_sale(self, client, sales_headers):
        assert client.delete('/sales/31337', headers=sales_headers).status_code == 404

    def test_delete_by_query_parameter(self, client, sales_headers, session, product):
        sale = client.post('/sales', json={'product_id': product.id, 'quantity': 2}, headers=sales_headers).get_json()

        response = client.delete(f"/api/sales?id={sale['id']}", headers=sales_headers)
        assert response.status_code == 200
        assert _stock(session, product.id) == 5

    def test_list_sales_newest_first(self, client, sales_headers, product):
        first = client.post('/sales', json={'product_id': product.id, 'quantity': 1}, headers=sales_headers).get_json()
        second = client.post('/sales', json={'product_id': product.id, 'quantity': 1}, headers=sales_headers).get_json()

        listed = client.get('/sales', headers=sales_headers).get_json()
        assert [s['id'] for s in listed] == [second['id'], first['id']]
        assert listed[0]['product_name'] == 'Claw Hammer'

    def test_list_sales_respects_limit(self, app, client, sales_headers, product):
        app.config['SALES_LIST_LIMIT'] = 2
        for _ in range(3):
            client.post('/sales', json={'product_id': product.id, 'quantity': 1}, headers=sales_headers)

        assert len(client.get('/sales', headers=sales_headers).get_json()) == 2

    def test_price_change_does_not_rewrite_sale(self, client, admin_headers, product, vendor):
        sale = client.post('/sales', json={'product_id': product.id, 'quantity': 2}, headers=admin_headers).get_json()

        client.put(f'/products/{product.id}', json={
            'name': 'Claw Hammer', 'category': 'Tools', 'vendor_id': vendor.id,
            'cost_price': 1, 'selling_price': 100, 'stock_quantity': 3,
        }, headers=admin_headers)

        listed = client.get('/sales', headers=admin_headers).get_json()
        stored = next(s for s in listed if s['id'] == sale['id'])
        assert stored['total'] == 30.0
        assert stored['profit'] == 10.0
