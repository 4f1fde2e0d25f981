"""Admin media library: downloadable assets of every product."""

from __future__ import annotations

from sqlalchemy import or_

from houseplanfiles.models import Product


def file_extension(url: str) -> str:
    """Extension of ``url`` ignoring the query string; ``file`` when absent."""
    if not url:
        return 'file'
    clean = url.split('?')[0]
    parts = clean.rsplit('/', 1)[-1].split('.')
    return parts[-1] if len(parts) > 1 and parts[-1] else 'file'


def _plan_files(value) -> list[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    return [v for v in (value or []) if v]


def media_row(product: Product) -> dict:
    identifier = product.product_no or 'product'
    files = _plan_files(product.plan_files)
    main = product.main_image
    return {
        '_id': product.id,
        'name': product.name,
        'productNo': identifier,
        'planType': product.plan_type,
        'mainImage': {
            'url': main,
            'downloadName': f"{identifier}-main.{file_extension(main)}",
        } if main else None,
        'planFiles': [
            {'url': url, 'downloadName': f"{identifier}-plan-{index}.{file_extension(url)}"}
            for index, url in enumerate(files, start=1)
        ],
    }


def media_query(search: str = ''):
    query = Product.query
    search = (search or '').strip()
    if search:
        like = f"%{search}%"
        query = query.filter(or_(Product.name.ilike(like), Product.product_no.ilike(like)))
    return query.order_by(Product.created_at.desc(), Product.id.desc())
