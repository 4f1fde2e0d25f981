"""Public directories: City Partner contractors and marketplace sellers."""

from __future__ import annotations

from sqlalchemy import func, or_

from houseplanfiles.models import Contractor, SellerProduct, User


PROFESSION_ALL = 'All'
# Directory tab -> keywords matched inside the free-text profession.
PROFESSION_KEYWORDS = {
    'Building': ('civil', 'general'),
    'Interior': ('interior',),
}

ALL_CATEGORIES = 'All'
ALL_CITIES = 'All Cities'
MOBILE_PAGE_SIZE = 4


def public_contractors_query(city: str = '', profession: str = PROFESSION_ALL):
    """Approved premium partners, optionally narrowed by city and profession tab."""
    query = Contractor.query.filter(
        Contractor.status == Contractor.STATUS_APPROVED,
        Contractor.contractor_type == Contractor.TYPE_PREMIUM,
    )

    city = (city or '').strip()
    if city:
        query = query.filter(func.lower(Contractor.city).contains(city.lower()))

    keywords = PROFESSION_KEYWORDS.get((profession or PROFESSION_ALL).strip())
    if keywords:
        query = query.filter(or_(*(func.lower(Contractor.profession).contains(k) for k in keywords)))

    return query.order_by(Contractor.created_at.desc(), Contractor.id.desc())


def serialize_contractor(contractor: Contractor) -> dict:
    return {
        '_id': contractor.id,
        'name': contractor.name,
        'companyName': contractor.company_name,
        'city': contractor.city,
        'address': contractor.address,
        'experience': contractor.experience,
        'photoUrl': contractor.photo_url,
        'shopImageUrl': contractor.shop_image_url,
        'phone': contractor.phone,
        'profession': contractor.profession,
        'status': contractor.status,
        'contractorType': contractor.contractor_type,
        'detail': ' - '.join(p for p in (contractor.profession, contractor.experience) if p),
    }


def public_seller_products(limit: int, category: str = '', city: str = '', search: str = ''):
    """Approved marketplace listings with their seller joined."""
    query = (
        SellerProduct.query
        .join(User, SellerProduct.seller_id == User.id)
        .filter(SellerProduct.status == SellerProduct.STATUS_APPROVED, User.is_active.is_(True))
    )
    if category and category != ALL_CATEGORIES:
        query = query.filter(SellerProduct.category == category)
    if city and city != ALL_CITIES:
        query = query.filter(SellerProduct.city == city)
    if search:
        like = f"%{search.strip()}%"
        query = query.filter(or_(SellerProduct.name.ilike(like), User.business_name.ilike(like)))
    return query.order_by(SellerProduct.created_at.desc()).limit(limit).all()


def marketplace_facets(products) -> dict:
    categories = sorted({p.category for p in products if p.category}, key=str.lower)
    cities = sorted({p.city for p in products if p.city}, key=str.lower)
    return {
        'categories': [ALL_CATEGORIES, *categories],
        'cities': [ALL_CITIES, *cities],
        'mobilePageSize': MOBILE_PAGE_SIZE,
    }


def serialize_seller_product(product: SellerProduct) -> dict:
    seller = product.seller
    return {
        '_id': product.id,
        'name': product.name,
        'category': product.category,
        'city': product.city,
        'price': product.price,
        'description': product.description,
        'image': product.image,
        'status': product.status,
        'seller': {
            '_id': seller.id,
            'name': seller.name,
            'businessName': seller.business_name or seller.name,
            'phone': seller.phone,
        } if seller else None,
        'createdAt': product.created_at.isoformat() if product.created_at else None,
    }
