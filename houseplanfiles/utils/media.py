"""Media URL helpers.

Image fields store either a relative path (``uploads/plans/x.jpg``, local
uploads) or a full URL (Cloudinary). Share pages and API payloads need a
public absolute https URL.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from flask import current_app


def is_absolute_url(value: Optional[str]) -> bool:
    if not value:
        return False
    parsed = urlparse(str(value))
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def absolute_media_url(value: Optional[str], default: Optional[str] = None) -> str:
    """Return an absolute https URL for a stored media value.

    Empty values use ``default`` (a path relative to the backend). Relative
    paths are prefixed with BACKEND_URL; http is upgraded to https.
    """
    raw = (value or '').strip() or (default or current_app.config['DEFAULT_PRODUCT_IMAGE'])

    if raw.startswith('//'):
        raw = 'https:' + raw
    if is_absolute_url(raw):
        if raw.startswith('http://'):
            raw = 'https://' + raw[len('http://'):]
        return raw

    backend = current_app.config['BACKEND_URL'].rstrip('/')
    if backend.startswith('http://'):
        backend = 'https://' + backend[len('http://'):]
    rel = raw.replace('\\', '/').lstrip('/')
    return f"{backend}/{rel}"
