"""Seller marketplace listings, facets, ownership and buyer inquiries."""

import pytest

from houseplanfiles.models import SellerProduct


@pytest.fixture
def listings(db, seller, make_user):
    other = make_user('seller', name='Kumar', business_name='Kumar Steel')
    rows = [
        SellerProduct(seller_id=seller['id'], name='Vitrified Tiles', category='Tiles', city='Pune',
                      price=55, status=SellerProduct.STATUS_APPROVED),
        SellerProduct(seller_id=other['id'], name='TMT Bars', category='Steel', city='Nashik',
                      price=62000, status=SellerProduct.STATUS_APPROVED),
        SellerProduct(seller_id=seller['id'], name='Unreviewed Granite', category='Stone', city='Pune'),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return {'other': other, **{p.name: p.id for p in rows}}


def _names(payload):
    return sorted(p['name'] for p in payload['products'])


def test_public_list_and_facets(client, listings):
    data = client.get('/api/seller-products/public').get_json()
    assert _names(data) == ['TMT Bars', 'Vitrified Tiles']
    assert data['facets']['categories'] == ['All', 'Steel', 'Tiles']
    assert data['facets']['cities'] == ['All Cities', 'Nashik', 'Pune']
    assert data['facets']['mobilePageSize'] == 4


def test_facets_ignore_active_filters(client, listings):
    data = client.get('/api/seller-products/public?city=Pune').get_json()
    assert _names(data) == ['Vitrified Tiles']
    assert data['count'] == 1
    assert data['facets']['cities'] == ['All Cities', 'Nashik', 'Pune']


def test_all_placeholders_do_not_filter(client, listings):
    data = client.get('/api/seller-products/public?category=All&city=All%20Cities').get_json()
    assert data['count'] == 2


def test_search_matches_business_name(client, listings):
    data = client.get('/api/seller-products/public?search=kumar').get_json()
    assert _names(data) == ['TMT Bars']
    assert data['products'][0]['seller']['businessName'] == 'Kumar Steel'


def test_seller_listing_starts_pending(client, seller):
    resp = client.post('/api/seller-products', headers=seller['headers'], json={
        'name': 'Red Bricks', 'category': 'Bricks', 'city': 'Pune', 'price': 8, 'status': 'Approved',
    })
    assert resp.status_code == 201
    assert resp.get_json()['status'] == SellerProduct.STATUS_PENDING

    mine = client.get('/api/seller-products/mine', headers=seller['headers']).get_json()
    assert [p['name'] for p in mine] == ['Red Bricks']


def test_customers_cannot_list_products(client, customer):
    resp = client.post('/api/seller-products', headers=customer['headers'], json={'name': 'Bricks'})
    assert resp.status_code == 403


def test_only_owner_or_admin_can_edit(client, listings, seller, admin):
    other_headers = listings['other']['headers']
    product_id = listings['Vitrified Tiles']

    assert client.put(f'/api/seller-products/{product_id}', headers=other_headers, json={'price': 1}).status_code == 403

    own = client.put(f'/api/seller-products/{product_id}', headers=seller['headers'],
                     json={'price': 60, 'status': 'Rejected'})
    assert own.get_json()['price'] == 60
    assert own.get_json()['status'] == SellerProduct.STATUS_APPROVED

    moderated = client.put(f'/api/seller-products/{product_id}', headers=admin['headers'], json={'status': 'Rejected'})
    assert moderated.get_json()['status'] == SellerProduct.STATUS_REJECTED

    assert client.delete(f'/api/seller-products/{product_id}', headers=other_headers).status_code == 403
    assert client.delete(f'/api/seller-products/{product_id}', headers=seller['headers']).status_code == 200


def test_admin_moderation_list(client, listings, admin):
    pending = client.get('/api/seller-products/admin?status=Pending', headers=admin['headers']).get_json()
    assert [p['name'] for p in pending] == ['Unreviewed Granite']


def test_buyer_inquiry(client, listings, admin):
    product_id = listings['TMT Bars']
    resp = client.post(f'/api/seller-products/{product_id}/inquiries', json={
        'name': 'Sameer', 'email': 'sameer@example.com', 'phone': '9876501234', 'message': 'Need 2 tonnes',
    })
    assert resp.status_code == 201

    queue = client.get('/api/seller-products/inquiries', headers=admin['headers']).get_json()
    assert queue['total'] == 1
    assert queue['items'][0]['product']['name'] == 'TMT Bars'

    exported = client.get('/api/seller-products/inquiries/export', headers=admin['headers'])
    assert 'seller-enquiries.csv' in exported.headers['Content-Disposition']
    assert exported.get_data(as_text=True).splitlines()[0] == 'ID,Product,Name,Email,Phone,Message,Status,Date'


def test_inquiry_on_unapproved_listing_is_404(client, listings):
    resp = client.post(f"/api/seller-products/{listings['Unreviewed Granite']}/inquiries", json={
        'name': 'Sameer', 'email': 'sameer@example.com', 'phone': '9876501234',
    })
    assert resp.status_code == 404
