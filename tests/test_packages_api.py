"""Service packages, FAQ and package consultation requests."""

import pytest

from houseplanfiles.extensions import mail
from houseplanfiles.models import Package, PackageRequest


@pytest.fixture
def package_ids(db):
    rows = [
        Package(title='Basic Plan', price='4999', unit='per plan', sort_order=1,
                features=['2D plan', 'Furniture layout', 'Door schedule', 'Window schedule', 'Column layout', 'Site plan']),
        Package(title='Premium Design', price='₹ 15/sq.ft Rs 25/sq.ft', package_type=Package.TYPE_PREMIUM,
                is_popular=True, sort_order=0, features=['3D elevation']),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return {p.title: p.id for p in rows}


def test_list_packages_serializes_cards(client, package_ids):
    resp = client.get('/api/packages?currency=INR')
    assert resp.status_code == 200
    data = resp.get_json()
    assert [p['title'] for p in data['packages']] == ['Premium Design', 'Basic Plan']
    assert data['mobileInitialCount'] == 4

    premium, basic = data['packages']
    assert premium['priceLines'] == ['₹ 15/sq.ft', 'Rs 25/sq.ft']
    assert premium['priceDisplay'] is None
    assert basic['visibleFeatures'] == ['2D plan', 'Furniture layout', 'Door schedule', 'Window schedule']
    assert basic['hiddenCount'] == 2
    assert basic['toggleLabel'] == 'View 2 More Benefits'
    assert basic['priceDisplay']['formatted'] == '₹4,999.00'


def test_filter_by_type(client, package_ids):
    data = client.get('/api/packages?type=premium').get_json()
    assert [p['title'] for p in data['packages']] == ['Premium Design']


def test_faq(client):
    faq = client.get('/api/packages/faq').get_json()['faq']
    assert len(faq) == 4
    assert all(item['question'] and item['answer'] for item in faq)


def test_admin_manages_packages(client, admin, customer):
    payload = {'title': 'City Partner', 'price': 'On request', 'packageType': 'city_partner', 'features': 'A, B'}
    assert client.post('/api/packages', headers=customer['headers'], json=payload).status_code == 403

    created = client.post('/api/packages', headers=admin['headers'], json=payload)
    assert created.status_code == 201
    body = created.get_json()
    assert body['features'] == ['A', 'B']
    assert body['priceLines'] == ['On request']

    package_id = body['_id']
    updated = client.put(f'/api/packages/{package_id}', headers=admin['headers'], json={'isPopular': True})
    assert updated.get_json()['isPopular'] is True
    assert updated.get_json()['title'] == 'City Partner'

    assert client.delete(f'/api/packages/{package_id}', headers=admin['headers']).status_code == 200
    assert client.get(f'/api/packages/{package_id}').status_code == 404


def test_package_request_notifies_admin(client):
    with mail.record_messages() as outbox:
        resp = client.post('/api/packages/requests', json={
            'tier': 'premium',
            'packageName': 'Premium Design',
            'name': 'Kiran',
            'email': 'kiran@example.com',
            'whatsappNumber': '+91 98765 43210',
            'city': 'Indore',
        })
    assert resp.status_code == 201
    assert resp.get_json()['request']['status'] == PackageRequest.STATUS_PENDING
    assert len(outbox) == 1
    assert outbox[0].subject == 'New Premium Package Request - Premium Design'
    assert outbox[0].recipients == ['admin@example.com']


def test_package_request_validation(client):
    resp = client.post('/api/packages/requests', json={'packageName': 'Basic Plan', 'whatsappNumber': '12'})
    assert resp.status_code == 400
    assert {'name', 'whatsappNumber'} <= set(resp.get_json()['errors'])


def _lead(db, tier, name):
    lead = PackageRequest(tier=tier, package_name='Basic Plan', name=name, whatsapp_number='9999999999', city='Pune')
    db.session.add(lead)
    db.session.commit()
    return lead.id


def test_queues_are_split_by_tier(client, db, admin):
    _lead(db, PackageRequest.TIER_STANDARD, 'Std Lead')
    _lead(db, PackageRequest.TIER_PREMIUM, 'Prem Lead')

    standard = client.get('/api/packages/requests', headers=admin['headers']).get_json()
    assert [row['name'] for row in standard['items']] == ['Std Lead']
    premium = client.get('/api/packages/requests?tier=premium', headers=admin['headers']).get_json()
    assert [row['name'] for row in premium['items']] == ['Prem Lead']


def test_standard_export(client, db, admin):
    _lead(db, PackageRequest.TIER_STANDARD, 'Std Lead')
    resp = client.get('/api/packages/requests/export', headers=admin['headers'])
    assert resp.status_code == 200
    assert 'standard-consultation-requests.csv' in resp.headers['Content-Disposition']
    lines = resp.get_data(as_text=True).splitlines()
    assert lines[0] == 'ID,Package Name,Customer Name,WhatsApp,City,Status,Date'
    assert ',Basic Plan,Std Lead,9999999999,Pune,Pending,' in lines[1]


def test_excel_export(client, db, admin):
    _lead(db, PackageRequest.TIER_PREMIUM, 'Prem Lead')
    resp = client.get('/api/packages/requests/export?tier=premium&format=xlsx', headers=admin['headers'])
    assert resp.status_code == 200
    assert resp.mimetype.endswith('spreadsheetml.sheet')
    assert 'premium-consultation-requests.xlsx' in resp.headers['Content-Disposition']


def test_status_update(client, db, admin):
    lead_id = _lead(db, PackageRequest.TIER_STANDARD, 'Std Lead')
    url = f'/api/packages/requests/{lead_id}/status'

    ok = client.put(url, headers=admin['headers'], json={'status': 'Contacted'})
    assert ok.status_code == 200
    assert ok.get_json()['status'] == 'Contacted'

    bad = client.put(url, headers=admin['headers'], json={'status': 'Lost'})
    assert bad.status_code == 400
    assert bad.get_json()['message'].startswith('Invalid status')

    gone = client.delete(f'/api/packages/requests/{lead_id}', headers=admin['headers'])
    assert gone.get_json()['message'] == 'Request deleted successfully.'
