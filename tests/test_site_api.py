"""Contact form, static pages, chat widget, media library, currency and health."""

import io

from houseplanfiles.extensions import mail
from houseplanfiles.models import ContactMessage, Product
from houseplanfiles.services.notifications import CONTACT_SUBJECT


def test_contact_stores_message_and_notifies(client, db):
    with mail.record_messages() as outbox:
        resp = client.post('/api/contact', json={
            'name': 'Leena', 'email': 'leena@example.com', 'message': 'Do you design farmhouses?',
        })
    assert resp.status_code == 201
    assert resp.get_json() == {
        'message': 'Thank you for your message! We will get back to you soon.',
        'emailSent': True,
    }
    assert outbox[0].subject == CONTACT_SUBJECT
    assert outbox[0].reply_to == 'leena@example.com'

    stored = ContactMessage.query.one()
    assert stored.subject == CONTACT_SUBJECT
    assert stored.email_status == ContactMessage.EMAIL_SENT


def test_contact_records_failed_delivery(client, app, monkeypatch):
    def refuse(msg):
        raise OSError('smtp down')

    monkeypatch.setattr(mail, 'send', refuse)
    resp = client.post('/api/contact', json={'name': 'Leena', 'email': 'leena@example.com', 'message': 'Hi'})
    assert resp.status_code == 201
    assert resp.get_json()['emailSent'] is False
    assert ContactMessage.query.one().email_status == ContactMessage.EMAIL_FAILED


def test_contact_validation(client):
    resp = client.post('/api/contact', json={'email': 'leena@example.com'})
    assert resp.status_code == 400
    assert resp.get_json()['errors']['message'] == ['Message is required']


def test_policy_page_and_aliases(client):
    page = client.get('/api/pages/refund-policy').get_json()
    assert page['title'] == 'Refund & Cancellation Policy'
    alias = client.get('/api/pages/payment-policy').get_json()
    assert alias['slug'] == 'refund-policy'
    assert client.get('/api/pages/unknown').get_json() == {'message': 'Page not found'}


def test_chat_widget_cooldown(client):
    fresh = client.get('/api/widget/chat').get_json()
    assert fresh['autoOpen'] is True
    assert fresh['widgetId'] == 'aaa7tm'

    dismissed = client.post('/api/widget/chat/dismiss')
    body = dismissed.get_json()
    assert body['autoOpen'] is False
    assert body['retryAfter'] == 180
    assert 'aisensy_closed_at=' in dismissed.headers['Set-Cookie']

    closed_at = body['closedAt']
    state = client.get('/api/widget/chat', headers={'Cookie': f'aisensy_closed_at={closed_at}'}).get_json()
    assert state['autoOpen'] is False

    client.set_cookie('aisensy_closed_at', '1000')
    expired = client.get('/api/widget/chat').get_json()
    assert expired['autoOpen'] is True


def test_media_library(client, db, admin, customer):
    db.session.add_all([
        Product(name='Twin House', price=1, product_no='HPF-7', main_image='uploads/plans/twin.webp?v=2',
                plan_files=['https://cdn.example.com/twin.pdf', 'https://cdn.example.com/twin']),
        Product(name='Farmhouse', price=1),
    ])
    db.session.commit()

    assert client.get('/api/media', headers=customer['headers']).status_code == 403

    data = client.get('/api/media?searchTerm=hpf-7', headers=admin['headers']).get_json()
    assert data['count'] == 1
    row = data['media'][0]
    assert row['mainImage']['downloadName'] == 'HPF-7-main.webp'
    assert [f['downloadName'] for f in row['planFiles']] == ['HPF-7-plan-1.pdf', 'HPF-7-plan-2.file']


def test_media_upload_and_serving(client, seller):
    resp = client.post('/api/media/upload', headers=seller['headers'], data={
        'kind': 'plan', 'file': (io.BytesIO(b'%PDF-1.4 floor plan'), 'ground floor.pdf'),
    }, content_type='multipart/form-data')
    assert resp.status_code == 201
    url = resp.get_json()['url']
    assert url.startswith('uploads/plans/')
    assert url.endswith('_ground_floor.pdf')
    assert resp.get_json()['absoluteUrl'] == f'https://houseplansfiles-backend.vercel.app/{url}'

    served = client.get('/' + url)
    assert served.status_code == 200
    assert served.data.startswith(b'%PDF')


def test_media_upload_rejects_spoofed_content(client, seller):
    resp = client.post('/api/media/upload', headers=seller['headers'], data={
        'file': (io.BytesIO(b'%PDF-1.4 not an image'), 'photo.jpg'),
    }, content_type='multipart/form-data')
    assert resp.status_code == 400

    empty = client.post('/api/media/upload', headers=seller['headers'], data={}, content_type='multipart/form-data')
    assert empty.get_json()['message'] == 'No file uploaded'


def test_currency_preference(client):
    default = client.get('/api/currency').get_json()
    assert default['currency'] == 'USD'
    assert len(default['currencies']) == 10

    chosen = client.post('/api/currency', json={'currency': 'eur'})
    assert chosen.get_json()['symbol'] == '€'
    assert 'currency=EUR' in chosen.headers['Set-Cookie']

    client.set_cookie('currency', 'INR')
    toggled = client.post('/api/currency/toggle')
    assert toggled.get_json()['currency'] == 'USD'

    assert client.post('/api/currency', json={'currency': 'BTC'}).status_code == 400


def test_health_endpoints(client):
    assert client.get('/health').get_json()['status'] == 'healthy'
    ready = client.get('/health/ready')
    assert ready.status_code == 200
    assert ready.get_json()['schema'] == 'complete'
    assert client.get('/health/live').get_json()['status'] == 'alive'


def test_unknown_route_is_json(client):
    resp = client.get('/api/nothing-here')
    assert resp.status_code == 404
    assert 'message' in resp.get_json()


def test_cors_and_security_headers(client, app):
    origin = app.config['CORS_ORIGINS'][0]
    resp = client.get('/health', headers={'Origin': origin})
    assert resp.headers['Access-Control-Allow-Origin'] == origin
    assert resp.headers['X-Content-Type-Options'] == 'nosniff'

    stranger = client.get('/health', headers={'Origin': 'https://evil.example'})
    assert 'Access-Control-Allow-Origin' not in stranger.headers
