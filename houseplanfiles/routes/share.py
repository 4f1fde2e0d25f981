"""Share pages: Open Graph previews that forward visitors to the storefront."""

from flask import Blueprint, current_app, redirect, render_template
from sqlalchemy.exc import SQLAlchemyError

from houseplanfiles.extensions import db
from houseplanfiles.services import share_pages


share_bp = Blueprint('share', __name__)


def _render(build_meta, *args):
    try:
        meta = build_meta(*args)
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception('Share page lookup failed for %s: %s', args, exc)
        meta = None

    if meta is None:
        return redirect(share_pages.frontend_url(), code=302)

    html = render_template('share/meta.html', meta=meta, site_name=current_app.config['SITE_NAME'])
    return html, 200, share_pages.SHARE_HEADERS


@share_bp.route('/share/product/<slug>')
def share_product(slug):
    return _render(share_pages.product_meta, slug, 'product')


@share_bp.route('/share/professional-plan/<slug>')
def share_professional_plan(slug):
    return _render(share_pages.product_meta, slug, 'professional-plan')


@share_bp.route('/share/blog/<slug>')
def share_blog(slug):
    return _render(share_pages.blog_meta, slug)
