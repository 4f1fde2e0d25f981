"""Catalog listing, publishing workflow, reviews and image removal."""

import pytest

from houseplanfiles.models import Order, Product


@pytest.fixture
def plans(db, seller):
    rows = [
        Product(name='Modern Villa 30x40', price=5000, sale_price=4000, category=['Floor Plans'],
                plan_type='Floor Plans', city=['Pune'], product_no='HPF-101', user_id=seller['id']),
        Product(name='Classic Elevation', price=3000, category=['3D Elevation'], plan_type='3D Elevation'),
        Product(name='Hidden Draft', price=1000, status=Product.STATUS_DRAFT, user_id=seller['id']),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return {p.name: p.id for p in rows}


def test_list_only_published(client, plans):
    resp = client.get('/api/products')
    assert resp.status_code == 200
    data = resp.get_json()
    names = {p['name'] for p in data['products']}
    assert names == {'Modern Villa 30x40', 'Classic Elevation'}
    assert data['count'] == 2
    assert data['pages'] == 1


def test_search_and_currency(client, plans):
    resp = client.get('/api/products?search=villa&currency=INR')
    products = resp.get_json()['products']
    assert [p['name'] for p in products] == ['Modern Villa 30x40']
    card = products[0]
    assert card['isSale'] is True
    assert card['displayPrice'] == 4000
    assert card['priceDisplay'] == {'currency': 'INR', 'amount': 4000.0, 'formatted': '₹4,000.00'}
    assert card['shareSlug'] == f"modern-villa-30x40-{plans['Modern Villa 30x40']}"


def test_home_rail_skips_elevations(client, plans):
    names = [p['name'] for p in client.get('/api/products/home').get_json()['products']]
    assert names == ['Modern Villa 30x40']


def test_detail_hides_unpublished_from_strangers(client, plans, seller):
    draft_id = plans['Hidden Draft']
    assert client.get(f'/api/products/{draft_id}').status_code == 404
    owner_view = client.get(f'/api/products/{draft_id}', headers=seller['headers'])
    assert owner_view.status_code == 200
    assert owner_view.get_json()['reviews'] == []


def test_lookup_by_share_slug(client, plans):
    product_id = plans['Classic Elevation']
    resp = client.get(f'/api/products/slug/anything-{product_id}')
    assert resp.status_code == 200
    assert resp.get_json()['_id'] == product_id


def test_seller_submission_waits_for_review(client, seller):
    resp = client.post('/api/products', headers=seller['headers'], json={
        'name': 'Seller Plan',
        'price': 0,
        'category': ['Floor Plans', 'Duplex'],
        'status': 'Published',
    })
    assert resp.status_code == 201
    data = resp.get_json()
    assert data['status'] == Product.STATUS_PENDING
    assert data['category'] == ['Floor Plans', 'Duplex']
    assert data['user'] == seller['id']


def test_admin_submission_is_published(client, admin):
    resp = client.post('/api/products', headers=admin['headers'], json={'name': 'Admin Plan', 'price': 2500})
    assert resp.status_code == 201
    assert resp.get_json()['status'] == Product.STATUS_PUBLISHED


def test_customers_cannot_publish(client, customer):
    resp = client.post('/api/products', headers=customer['headers'], json={'name': 'Nope', 'price': 1})
    assert resp.status_code == 403


def test_price_is_required(client, admin):
    resp = client.post('/api/products', headers=admin['headers'], json={'name': 'No Price'})
    assert resp.status_code == 400
    assert resp.get_json()['errors']['price'] == ['Price is required']


def test_partial_update_keeps_status_for_non_admin(client, plans, seller):
    product_id = plans['Hidden Draft']
    resp = client.put(f'/api/products/{product_id}', headers=seller['headers'], json={
        'price': 1500, 'status': 'Published',
    })
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['price'] == 1500
    assert data['status'] == Product.STATUS_DRAFT


def test_only_owner_or_admin_can_delete(client, plans, customer, admin):
    product_id = plans['Classic Elevation']
    assert client.delete(f'/api/products/{product_id}', headers=customer['headers']).status_code == 403
    assert client.delete(f'/api/products/{product_id}', headers=admin['headers']).status_code == 200
    assert client.get(f'/api/products/{product_id}').status_code == 404


def test_reviews_update_rating_once_per_user(client, plans, customer, make_user):
    product_id = plans['Modern Villa 30x40']
    url = f'/api/products/{product_id}/reviews'

    first = client.post(url, headers=customer['headers'], json={'rating': 5, 'comment': 'Great plan'})
    assert first.status_code == 201
    other = make_user()
    second = client.post(url, headers=other['headers'], json={'rating': 2, 'comment': 'Too small'})
    assert second.get_json()['rating'] == 3.5
    assert second.get_json()['numReviews'] == 2

    again = client.post(url, headers=customer['headers'], json={'rating': 1, 'comment': 'Changed my mind'})
    assert again.status_code == 400
    assert again.get_json()['message'] == 'Product already reviewed'


def test_remove_imported_image(client, db, admin):
    product = Product(
        name='Imported',
        price=100,
        main_image='a.jpg',
        gallery_images=['a.jpg', 'b.jpg'],
        attributes={'Images': 'a.jpg, c.jpg'},
    )
    db.session.add(product)
    db.session.commit()
    product_id = product.id

    resp = client.delete(f'/api/products/{product_id}/csv-image', headers=admin['headers'], json={'imageUrl': 'a.jpg'})
    assert resp.status_code == 200

    stored = db.session.get(Product, product_id)
    assert stored.gallery_images == ['b.jpg']
    assert stored.attributes['Images'] == 'c.jpg'
    assert stored.main_image == 'b.jpg'

    missing = client.delete(f'/api/products/{product_id}/csv-image', headers=admin['headers'], json={'imageUrl': 'zzz.jpg'})
    assert missing.status_code == 404


def test_remove_absent_image_leaves_compact_list_untouched(client, db, admin):
    product = Product(name='Compact Import', price=100, attributes={'Images': 'x.jpg,y.jpg'})
    db.session.add(product)
    db.session.commit()
    product_id = product.id

    resp = client.delete(f'/api/products/{product_id}/csv-image', headers=admin['headers'], json={'imageUrl': 'zzz.jpg'})
    assert resp.status_code == 404
    assert db.session.get(Product, product_id).attributes['Images'] == 'x.jpg,y.jpg'


def test_professional_dashboard(client, db, plans, make_user, seller):
    buyer = make_user()
    db.session.add(Order(user_id=buyer['id'], product_id=plans['Modern Villa 30x40'], amount=4000, is_paid=True))
    db.session.commit()

    resp = client.get('/api/products/dashboard', headers=seller['headers'])
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['totalProducts'] == 2
    assert data['statusCounts'][Product.STATUS_PUBLISHED] == 1
    assert data['statusCounts'][Product.STATUS_DRAFT] == 1
    assert data['orders'] == 1
