"""Degraded gallery previews: downscaled, blurred and watermarked.

Previews discourage copying full-resolution gallery images. They are a
presentation measure only; the original URL is still part of the item payload.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests
from PIL import Image, ImageDraw, ImageFilter, ImageFont, UnidentifiedImageError

from houseplanfiles.utils.media import is_absolute_url


logger = logging.getLogger(__name__)

PREVIEW_MAX_WIDTH = 800
BLUR_RADIUS = 5
CHECKER_SIZE = 20
CHECKER_ALPHA = 40
WATERMARK_TITLE = 'PREVIEW ONLY'
WATERMARK_SUBTITLE = 'BUY TO VIEW CLEARLY'
TILE_TEXT = 'HousePlanFiles'
FETCH_TIMEOUT = 6


class PreviewError(RuntimeError):
    """The source image could not be loaded or decoded."""


@dataclass(frozen=True)
class Preview:
    data: bytes
    mimetype: str = 'image/jpeg'


def load_source(image_url: str, upload_folder: str) -> bytes:
    """Fetch remote images over HTTP; read local ``uploads/...`` paths from disk."""
    if is_absolute_url(image_url):
        try:
            resp = requests.get(image_url, timeout=FETCH_TIMEOUT)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise PreviewError(f'Could not fetch {image_url}: {exc}') from exc
        return resp.content

    rel = image_url.replace('\\', '/').lstrip('/')
    if rel.startswith('uploads/'):
        rel = rel[len('uploads/'):]
    root = os.path.realpath(upload_folder)
    path = os.path.realpath(os.path.join(root, rel))
    if not path.startswith(root + os.sep) or not os.path.isfile(path):
        raise PreviewError(f'Local image not found: {image_url}')
    with open(path, 'rb') as handle:
        return handle.read()


def _downscale(img: Image.Image, max_width: int) -> Image.Image:
    if img.width <= max_width:
        return img
    ratio = max_width / img.width
    return img.resize((max_width, max(1, int(img.height * ratio))), Image.Resampling.LANCZOS)


def _checker_overlay(size) -> Image.Image:
    overlay = Image.new('RGBA', size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    width, height = size
    for top in range(0, height, CHECKER_SIZE):
        for left in range(0, width, CHECKER_SIZE):
            if (left // CHECKER_SIZE + top // CHECKER_SIZE) % 2 == 0:
                draw.rectangle(
                    (left, top, left + CHECKER_SIZE - 1, top + CHECKER_SIZE - 1),
                    fill=(0, 0, 0, CHECKER_ALPHA),
                )
    return overlay


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> tuple[int, int]:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    return right - left, bottom - top


def _watermark_overlay(size) -> Image.Image:
    overlay = Image.new('RGBA', size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    font = ImageFont.load_default()
    width, height = size

    tile_w, tile_h = _text_size(draw, TILE_TEXT, font)
    step_x, step_y = tile_w + 60, tile_h + 50
    for row, top in enumerate(range(0, height, step_y)):
        offset = (row % 2) * (step_x // 2)
        for left in range(-offset, width, step_x):
            draw.text((left, top), TILE_TEXT, font=font, fill=(255, 255, 255, 70))

    band_h = max(40, height // 6)
    band_top = (height - band_h) // 2
    draw.rectangle((0, band_top, width, band_top + band_h), fill=(0, 0, 0, 120))
    title_w, title_h = _text_size(draw, WATERMARK_TITLE, font)
    sub_w, _ = _text_size(draw, WATERMARK_SUBTITLE, font)
    draw.text(((width - title_w) // 2, band_top + band_h // 2 - title_h - 2), WATERMARK_TITLE,
              font=font, fill=(255, 255, 255, 230))
    draw.text(((width - sub_w) // 2, band_top + band_h // 2 + 2), WATERMARK_SUBTITLE,
              font=font, fill=(255, 255, 255, 200))
    return overlay


def render_preview(source: bytes, max_width: int = PREVIEW_MAX_WIDTH) -> Preview:
    try:
        with Image.open(io.BytesIO(source)) as im:
            img = im.convert('RGB')
    except (UnidentifiedImageError, OSError) as exc:
        raise PreviewError(f'Unreadable image: {exc}') from exc

    img = _downscale(img, max_width).filter(ImageFilter.GaussianBlur(BLUR_RADIUS))
    composed = img.convert('RGBA')
    composed = Image.alpha_composite(composed, _checker_overlay(composed.size))
    composed = Image.alpha_composite(composed, _watermark_overlay(composed.size))

    out = io.BytesIO()
    composed.convert('RGB').save(out, format='JPEG', quality=60)
    return Preview(data=out.getvalue())


def build_preview(image_url: Optional[str], upload_folder: str) -> Preview:
    if not image_url:
        raise PreviewError('Gallery item has no image')
    return render_preview(load_source(image_url, upload_folder))
