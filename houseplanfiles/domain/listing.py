from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from slugify import slugify


DEFAULT_CATEGORY_LABEL = 'Floor Plan'
HOME_EXCLUDED_CATEGORY_MARKERS = ('elevation', '3d')

# Column names produced by the bulk CSV importer.
LEGACY_IMAGES = 'Images'
LEGACY_CATEGORIES = 'Categories'
LEGACY_REGULAR_PRICE = 'Regular price'
LEGACY_SALE_PRICE = 'Sale price'
LEGACY_PLOT_SIZE = 'Attribute 1 value(s)'
LEGACY_PLOT_AREA = 'Attribute 2 value(s)'
LEGACY_ROOMS = 'Attribute 3 value(s)'
LEGACY_DIRECTION = 'Attribute 4 value(s)'

_YOUTUBE_ID = re.compile(r'^.*(youtu\.be/|v/|u/\w/|embed/|shorts/|watch\?v=|&v=)([^#&?]*).*')


@dataclass(frozen=True)
class Pricing:
    regular: float
    sale: Optional[float]

    @property
    def is_sale(self) -> bool:
        return self.sale is not None and self.sale > 0 and self.regular > 0 and self.sale < self.regular

    @property
    def display(self) -> float:
        return self.sale if self.is_sale else self.regular


def _positive(value) -> Optional[float]:
    try:
        number = float(str(value).replace(',', '').strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def resolve_pricing(price, sale_price, attributes: Optional[Mapping[str, Any]] = None) -> Pricing:
    """Sale applies only when both prices are positive and sale < regular."""
    attributes = attributes or {}
    regular = _positive(price) or _positive(attributes.get(LEGACY_REGULAR_PRICE)) or 0.0
    sale = _positive(sale_price) or _positive(attributes.get(LEGACY_SALE_PRICE))
    return Pricing(regular=regular, sale=sale)


def first_image(value, fallback: Optional[str] = None) -> Optional[str]:
    """First entry of a comma separated image list."""
    if isinstance(value, (list, tuple)):
        value = next((v for v in value if v), None)
    if isinstance(value, str) and value.strip():
        head = value.split(',')[0].strip()
        if head:
            return head
    return fallback


def youtube_id(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    match = _YOUTUBE_ID.match(url.strip())
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def category_label(categories: Iterable[str], attributes: Optional[Mapping[str, Any]] = None) -> str:
    for cat in categories or []:
        if cat:
            return cat
    legacy = (attributes or {}).get(LEGACY_CATEGORIES)
    if isinstance(legacy, str) and legacy.split(',')[0].strip():
        return legacy.split(',')[0].strip()
    return DEFAULT_CATEGORY_LABEL


def is_home_floor_plan(categories: Iterable[str], attributes: Optional[Mapping[str, Any]] = None) -> bool:
    """Home page floor plan rail leaves out elevation and 3D products."""
    text = ' '.join(c for c in (categories or []) if c)
    if not text:
        text = str((attributes or {}).get(LEGACY_CATEGORIES) or '')
    text = text.lower()
    return not any(marker in text for marker in HOME_EXCLUDED_CATEGORY_MARKERS)


def plot_attributes(product, attributes: Optional[Mapping[str, Any]] = None) -> dict:
    """Plot details with fallbacks to the CSV import columns."""
    attributes = attributes or {}

    plot_area = product.plot_area or None
    if not plot_area and attributes.get(LEGACY_PLOT_AREA):
        digits = re.sub(r'[^0-9]', '', str(attributes[LEGACY_PLOT_AREA]))
        plot_area = int(digits) if digits else None

    return {
        'plotArea': plot_area or 'N/A',
        'rooms': product.rooms or attributes.get(LEGACY_ROOMS) or 'N/A',
        'plotSize': product.plot_size or attributes.get(LEGACY_PLOT_SIZE) or 'N/A',
        'direction': product.direction or attributes.get(LEGACY_DIRECTION) or 'Any',
    }


def share_slug(name: Optional[str], product_id) -> str:
    return f"{slugify(name or 'plan')}-{product_id}"


def id_from_slug(slug: Optional[str]) -> Optional[int]:
    """Trailing ``-<id>`` segment of a share slug."""
    tail = (slug or '').rsplit('-', 1)[-1]
    return int(tail) if tail.isdigit() else None
