"""Open Graph share pages."""

from houseplanfiles.models import BlogPost, Product


def _product(db, **fields):
    product = Product(name='Corner Plot Villa', price=7000, **fields)
    db.session.add(product)
    db.session.commit()
    return product.id


def test_product_share_page(client, db):
    product_id = _product(db, description='<p>East facing 3BHK &amp; garden.</p>', main_image='uploads/plans/villa.jpg')
    resp = client.get(f'/share/product/corner-plot-villa-{product_id}')
    assert resp.status_code == 200
    assert resp.headers['Cache-Control'] == 'public, max-age=86400'
    assert resp.headers['X-Robots-Tag'] == 'noindex, follow'

    html = resp.get_data(as_text=True)
    assert '<meta property="og:title" content="Corner Plot Villa | HousePlanFiles">' in html
    assert '<meta property="og:description" content="East facing 3BHK &amp; garden.">' in html
    assert 'content="https://houseplansfiles-backend.vercel.app/uploads/plans/villa.jpg"' in html
    assert f'https://www.houseplanfiles.com/product/corner-plot-villa-{product_id}' in html


def test_professional_plan_share_uses_its_section(client, db):
    product_id = _product(db, seo_title='Villa Plan by Studio K')
    html = client.get(f'/share/professional-plan/corner-plot-villa-{product_id}').get_data(as_text=True)
    assert 'content="Villa Plan by Studio K"' in html
    assert f'/professional-plan/corner-plot-villa-{product_id}' in html
    assert 'uploads/default-house.jpg' in html


def test_blog_share_page(client, db):
    post = BlogPost(title='Staircase Ideas', content='Floating steps.', excerpt='Five staircase styles.')
    db.session.add(post)
    db.session.commit()

    html = client.get('/share/blog/staircase-ideas').get_data(as_text=True)
    assert '<meta property="og:type" content="article">' in html
    assert 'content="Five staircase styles."' in html
    assert 'uploads/default-blog.jpg' in html


def test_unknown_slug_redirects_to_storefront(client):
    resp = client.get('/share/product/no-such-plan')
    assert resp.status_code == 302
    assert resp.headers['Location'] == 'https://www.houseplanfiles.com'

    blog = client.get('/share/blog/missing')
    assert blog.status_code == 302


def test_unpublished_product_share_redirects(client, db):
    product_id = _product(db, status=Product.STATUS_DRAFT, description='Secret draft layout.')
    resp = client.get(f'/share/product/corner-plot-villa-{product_id}')
    assert resp.status_code == 302
    assert resp.headers['Location'] == 'https://www.houseplanfiles.com'
    assert b'Corner Plot Villa' not in resp.data
