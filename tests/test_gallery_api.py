"""Gallery groups, category tabs and watermarked previews."""

import io
import os
from datetime import datetime, timedelta

import pytest
from PIL import Image

from houseplanfiles.models import GalleryItem


@pytest.fixture
def gallery(db):
    now = datetime.utcnow()
    rows = [
        GalleryItem(title='Modern Villa', category='Elevation', image_url='https://cdn.example.com/a.jpg', created_at=now),
        GalleryItem(title='modern villa', category='Elevation', image_url='https://cdn.example.com/b.jpg',
                    created_at=now - timedelta(days=3)),
        GalleryItem(title='Cozy Kitchen', category='Interior', image_url='https://cdn.example.com/c.jpg',
                    created_at=now - timedelta(days=1)),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return [item.id for item in rows]


def test_groups_and_tabs(client, gallery):
    data = client.get('/api/gallery/groups').get_json()
    assert data['categories'] == ['All', 'Elevation', 'Interior', 'Video']
    assert data['videoPath'] == '/customize/3d-video-walkthrough'
    assert [g['title'] for g in data['groups']] == ['Modern Villa', 'Cozy Kitchen']
    assert data['groups'][0]['count'] == 2
    assert data['total'] == 2


def test_groups_filtered_by_category(client, gallery):
    data = client.get('/api/gallery/groups?category=Interior').get_json()
    assert [g['title'] for g in data['groups']] == ['Cozy Kitchen']
    # Tabs always reflect every item.
    assert data['categories'] == ['All', 'Elevation', 'Interior', 'Video']


@pytest.mark.parametrize('page', ['5', '0', '-1'])
def test_page_out_of_range(client, gallery, page):
    resp = client.get(f'/api/gallery/groups?page={page}')
    assert resp.status_code == 400
    assert resp.get_json()['message'] == 'Page must be between 1 and 1'


def test_alt_text_defaults_to_title(client, gallery):
    items = client.get('/api/gallery').get_json()
    assert items[0]['altText'] == 'Modern Villa'


def test_preview_is_downscaled_jpeg(client, db, app):
    folder = os.path.join(app.config['UPLOAD_FOLDER'], 'gallery')
    os.makedirs(folder, exist_ok=True)
    Image.new('RGB', (1200, 600), (200, 120, 40)).save(os.path.join(folder, 'big.png'))

    item = GalleryItem(title='Big Render', image_url='uploads/gallery/big.png')
    db.session.add(item)
    db.session.commit()
    item_id = item.id

    resp = client.get(f'/api/gallery/{item_id}/preview')
    assert resp.status_code == 200
    assert resp.mimetype == 'image/jpeg'
    with Image.open(io.BytesIO(resp.data)) as preview:
        assert preview.size == (800, 400)


def test_preview_of_missing_file(client, db):
    item = GalleryItem(title='Ghost', image_url='uploads/gallery/missing.png')
    db.session.add(item)
    db.session.commit()
    resp = client.get(f'/api/gallery/{item.id}/preview')
    assert resp.status_code == 502
    assert resp.get_json()['message'] == 'Preview unavailable'


def test_admin_adds_and_removes_items(client, admin, customer):
    payload = {'title': 'Courtyard', 'category': 'Exterior', 'imageUrl': 'https://cdn.example.com/court.jpg'}
    assert client.post('/api/gallery', headers=customer['headers'], json=payload).status_code == 403

    created = client.post('/api/gallery', headers=admin['headers'], json=payload)
    assert created.status_code == 201
    item_id = created.get_json()['_id']

    missing_image = client.post('/api/gallery', headers=admin['headers'], json={'title': 'No image'})
    assert missing_image.status_code == 400

    assert client.delete(f'/api/gallery/{item_id}', headers=admin['headers']).status_code == 200
    assert client.get(f'/api/gallery/{item_id}/preview').status_code == 404


def test_upload_image_file(client, admin):
    buf = io.BytesIO()
    Image.new('RGB', (10, 10)).save(buf, format='PNG')
    buf.seek(0)
    resp = client.post('/api/gallery', headers=admin['headers'], data={
        'title': 'Uploaded', 'image': (buf, 'tiny.png'),
    }, content_type='multipart/form-data')
    assert resp.status_code == 201
    assert resp.get_json()['imageUrl'].startswith('uploads/gallery/')
