"""Static storefront copy (FAQ, policy pages) shipped with the package."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional


CONTENT_FILE = Path(__file__).resolve().parent.parent / 'content' / 'pages.json'


@lru_cache(maxsize=1)
def _load() -> dict:
    with CONTENT_FILE.open(encoding='utf-8') as handle:
        return json.load(handle)


def faq_items() -> list[dict]:
    return list(_load().get('faq', []))


def get_page(slug: str) -> Optional[dict]:
    data = _load()
    slug = (slug or '').strip().lower()
    slug = data.get('aliases', {}).get(slug, slug)
    page = data.get('pages', {}).get(slug)
    if page is None:
        return None
    return {'slug': slug, **page}
