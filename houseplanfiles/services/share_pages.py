"""Open Graph share pages for products, professional plans and blog posts.

Link-preview crawlers read the meta tags; browsers follow the refresh to the
storefront page.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Optional

from flask import current_app

from houseplanfiles.models import BlogPost, Product
from houseplanfiles.services.catalog import find_by_slug
from houseplanfiles.utils.media import absolute_media_url


DESCRIPTION_LIMIT = 160
SHARE_HEADERS = {
    'Cache-Control': 'public, max-age=86400',
    'X-Robots-Tag': 'noindex, follow',
}

_TAGS = re.compile(r'<[^>]*>')
_SPACES = re.compile(r'\s+')


@dataclass(frozen=True)
class ShareMeta:
    title: str
    description: str
    image: str
    url: str
    og_type: str = 'product'


def clean_description(text: Optional[str], limit: int = DESCRIPTION_LIMIT) -> str:
    """Strip markup, collapse whitespace and cap at ``limit`` characters."""
    plain = html.unescape(_TAGS.sub(' ', text or ''))
    plain = _SPACES.sub(' ', plain).strip()
    return plain[:limit]


def frontend_url(path: str = '') -> str:
    base = current_app.config['FRONTEND_URL'].rstrip('/')
    return f"{base}/{path.lstrip('/')}" if path else base


def product_meta(slug: str, section: str = 'product') -> Optional[ShareMeta]:
    product = find_by_slug(slug)
    if product is None or product.status != Product.STATUS_PUBLISHED:
        return None
    site = current_app.config['SITE_NAME']
    description = product.seo_description or product.description or f"{product.name} house plan on {site}."
    return ShareMeta(
        title=product.seo_title or f"{product.name} | {site}",
        description=clean_description(description),
        image=absolute_media_url(product.main_image, current_app.config['DEFAULT_PRODUCT_IMAGE']),
        url=frontend_url(f"{section}/{slug}"),
    )


def blog_meta(slug: str) -> Optional[ShareMeta]:
    post = BlogPost.query.filter_by(slug=slug, status=BlogPost.STATUS_PUBLISHED).first()
    if post is None:
        return None
    site = current_app.config['SITE_NAME']
    return ShareMeta(
        title=post.meta_title or f"{post.title} | {site}",
        description=clean_description(post.meta_description or post.excerpt or post.content),
        image=absolute_media_url(post.main_image, current_app.config['DEFAULT_BLOG_IMAGE']),
        url=frontend_url(f"blog/{slug}"),
        og_type='article',
    )
