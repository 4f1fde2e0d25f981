"""Product catalog queries and storefront payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from flask import current_app
from sqlalchemy import String, cast, func, or_

from houseplanfiles.domain import listing
from houseplanfiles.extensions import db
from houseplanfiles.models import Order, Product
from houseplanfiles.services.pricing import price_payload
from houseplanfiles.utils.media import absolute_media_url


logger = logging.getLogger(__name__)

SORT_OPTIONS = {
    'latest': (Product.created_at.desc(), Product.id.desc()),
    'oldest': (Product.created_at.asc(), Product.id.asc()),
    'price_asc': (Product.price.asc(), Product.id.desc()),
    'price_desc': (Product.price.desc(), Product.id.desc()),
    'rating': (Product.rating.desc(), Product.num_reviews.desc()),
}


@dataclass(frozen=True)
class ProductFilters:
    search: str = ''
    category: str = ''
    plan_type: str = ''
    city: str = ''
    country: str = ''
    property_type: str = ''
    direction: str = ''
    status: str = Product.STATUS_PUBLISHED
    owner_id: Optional[int] = None
    sort: str = 'latest'

    @classmethod
    def from_args(cls, args, **overrides) -> 'ProductFilters':
        values = dict(
            search=(args.get('search') or args.get('keyword') or '').strip(),
            category=(args.get('category') or '').strip(),
            plan_type=(args.get('planType') or '').strip(),
            city=(args.get('city') or '').strip(),
            country=(args.get('country') or '').strip(),
            property_type=(args.get('propertyType') or '').strip(),
            direction=(args.get('direction') or '').strip(),
            sort=(args.get('sort') or 'latest').strip(),
        )
        values.update(overrides)
        return cls(**values)


def _json_contains(column, needle: str):
    """Substring match on a JSON list column; portable across SQLite and Postgres."""
    return func.lower(cast(column, String)).like(f"%{needle.lower()}%")


def build_products_query(filters: ProductFilters):
    query = Product.query

    if filters.status and filters.status != 'all':
        query = query.filter(Product.status == filters.status)
    if filters.owner_id is not None:
        query = query.filter(Product.user_id == filters.owner_id)

    if filters.search:
        like = f"%{filters.search}%"
        query = query.filter(or_(
            Product.name.ilike(like),
            Product.description.ilike(like),
            Product.product_no.ilike(like),
            Product.plot_size.ilike(like),
        ))
    if filters.category and filters.category.lower() != 'all':
        query = query.filter(_json_contains(Product.category, filters.category))
    if filters.plan_type:
        query = query.filter(Product.plan_type.ilike(filters.plan_type))
    if filters.city:
        query = query.filter(_json_contains(Product.city, filters.city))
    if filters.country:
        query = query.filter(_json_contains(Product.country, filters.country))
    if filters.property_type:
        query = query.filter(Product.property_type.ilike(filters.property_type))
    if filters.direction:
        query = query.filter(Product.direction.ilike(filters.direction))

    return query.order_by(*SORT_OPTIONS.get(filters.sort, SORT_OPTIONS['latest']))


def paginate(query, page: int, per_page: int) -> dict:
    """Page a query into the ``{items, page, pages, count}`` shape."""
    page = max(1, page)
    pagination = query.paginate(page=page, per_page=per_page, error_out=False)
    return {
        'items': pagination.items,
        'page': page,
        'pages': max(1, pagination.pages or 1),
        'count': pagination.total,
    }


def purchased_product_ids(user) -> set[int]:
    if user is None or not getattr(user, 'is_authenticated', False):
        return set()
    rows = (
        db.session.query(Order.product_id)
        .filter(Order.user_id == user.id, Order.is_paid.is_(True), Order.product_id.isnot(None))
        .all()
    )
    return {row[0] for row in rows}


def find_by_slug(slug: str) -> Optional[Product]:
    """Stored slug first, then the trailing id of a ``name-<id>`` share slug."""
    product = Product.query.filter_by(slug=slug).first()
    if product is not None:
        return product
    product_id = listing.id_from_slug(slug)
    if product_id is None:
        return None
    return db.session.get(Product, product_id)


def serialize_product(product: Product, currency: str, purchased: Optional[set] = None) -> dict:
    attributes = product.attributes or {}
    pricing = listing.resolve_pricing(product.price, product.sale_price, attributes)
    image = listing.first_image(product.main_image) or listing.first_image(attributes.get(listing.LEGACY_IMAGES))
    owner = product.owner

    return {
        '_id': product.id,
        'name': product.name,
        'slug': product.slug,
        'shareSlug': product.share_slug,
        'productNo': product.product_no,
        'description': product.description,
        'price': product.price,
        'salePrice': product.sale_price,
        'isSale': pricing.is_sale,
        'regularPrice': pricing.regular,
        'displayPrice': pricing.display,
        'priceDisplay': price_payload(pricing.display, currency),
        'taxRate': product.tax_rate,
        'category': product.categories,
        'categoryDisplay': listing.category_label(product.categories, attributes),
        'planType': product.plan_type,
        'plotSize': product.plot_size,
        'plotArea': product.plot_area,
        'rooms': product.rooms,
        'bathrooms': product.bathrooms,
        'kitchen': product.kitchen,
        'floors': product.floors,
        'direction': product.direction,
        'attributesDisplay': listing.plot_attributes(product, attributes),
        'country': product.country or [],
        'city': product.city or [],
        'propertyType': product.property_type,
        'mainImage': absolute_media_url(image, current_app.config['DEFAULT_PRODUCT_IMAGE']),
        'galleryImages': [absolute_media_url(i) for i in (product.gallery_images or []) if i],
        'planFile': product.plan_files or [],
        'youtubeLink': product.youtube_link,
        'videoId': listing.youtube_id(product.youtube_link),
        'rating': product.rating or 0,
        'numReviews': product.num_reviews or 0,
        'seo': {'title': product.seo_title or product.name, 'description': product.seo_description},
        'status': product.status,
        'user': owner.id if owner else None,
        'seller': {'name': owner.name, 'businessName': owner.business_name} if owner else None,
        'hasPurchased': product.id in (purchased or set()),
        'createdAt': product.created_at.isoformat() if product.created_at else None,
    }


def home_floor_plans(limit: int, currency: str, purchased: set) -> list[dict]:
    """Latest published floor plans for the home page rail."""
    cards = []
    # Over-fetch: elevation and 3D products are filtered out after loading.
    candidates = (
        Product.query
        .filter(Product.status == Product.STATUS_PUBLISHED)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(limit * 4)
        .all()
    )
    for product in candidates:
        if not listing.is_home_floor_plan(product.categories, product.attributes):
            continue
        cards.append(serialize_product(product, currency, purchased))
        if len(cards) >= limit:
            break
    return cards


def remove_image(product: Product, image_url: str) -> bool:
    """Drop ``image_url`` from the gallery and the imported ``Images`` column."""
    target = (image_url or '').strip()
    if not target:
        return False

    changed = False
    gallery = [i for i in (product.gallery_images or []) if i != target]
    if len(gallery) != len(product.gallery_images or []):
        product.gallery_images = gallery
        changed = True

    attributes = dict(product.attributes or {})
    legacy = attributes.get(listing.LEGACY_IMAGES)
    if isinstance(legacy, str) and legacy:
        parts = [part.strip() for part in legacy.split(',') if part.strip()]
        kept = [part for part in parts if part != target]
        if len(kept) != len(parts):
            attributes[listing.LEGACY_IMAGES] = ', '.join(kept)
            product.attributes = attributes
            changed = True

    if product.main_image == target:
        product.main_image = gallery[0] if gallery else None
        changed = True
    return changed


def status_counts(owner_id: int) -> dict:
    rows = (
        db.session.query(Product.status, func.count(Product.id))
        .filter(Product.user_id == owner_id)
        .group_by(Product.status)
        .all()
    )
    counts = {status: 0 for status in Product.STATUS_CHOICES}
    counts.update({status: total for status, total in rows})
    return counts
