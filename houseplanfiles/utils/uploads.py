"""Shared helpers for safely persisting user uploads."""

from __future__ import annotations

import mimetypes
import os
from datetime import datetime
from typing import Iterable, Optional

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from houseplanfiles.utils.storage import cloud_enabled, upload_to_cloud


# Content types accepted after sniffing the file header.
SAFE_MIME_TYPES = {
    'image/jpeg': ['.jpg', '.jpeg'],
    'image/png': ['.png'],
    'image/gif': ['.gif'],
    'image/webp': ['.webp'],
    'application/pdf': ['.pdf'],
    'application/dwg': ['.dwg'],
    'image/vnd.dwg': ['.dwg'],
    'application/msword': ['.doc'],
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': ['.docx'],
}


def _sniff_mime(header: bytes, filename: str) -> Optional[str]:
    if header.startswith(b'%PDF'):
        return 'application/pdf'
    if header.startswith(b'\xff\xd8\xff'):
        return 'image/jpeg'
    if header.startswith(b'\x89PNG\r\n\x1a\n'):
        return 'image/png'
    if header.startswith(b'GIF89a') or header.startswith(b'GIF87a'):
        return 'image/gif'
    if header.startswith(b'RIFF') and b'WEBP' in header[:32]:
        return 'image/webp'
    guessed, _ = mimetypes.guess_type(filename)
    return guessed


def _validate_file_content(file: FileStorage, filename: str) -> None:
    """Reject files whose content does not match their extension."""
    stream = file.stream
    original_pos = stream.tell()
    stream.seek(0)
    header = stream.read(8192)
    stream.seek(original_pos)

    actual_mime = _sniff_mime(header, filename)
    if actual_mime not in SAFE_MIME_TYPES:
        raise ValueError(
            f'File content type ({actual_mime}) is not allowed. '
            'Only images, PDFs, and documents are permitted.'
        )

    ext = '.' + filename.rsplit('.', 1)[1].lower()
    if ext not in SAFE_MIME_TYPES[actual_mime]:
        raise ValueError(f'File extension {ext} does not match content type {actual_mime}.')


def _file_size(file: FileStorage) -> int:
    stream = file.stream
    original_pos = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(original_pos)
    return size


def save_uploaded_file(
    file: Optional[FileStorage],
    folder: str = 'uploads',
    allowed_extensions: Optional[Iterable[str]] = None,
) -> Optional[str]:
    """Validate and persist an incoming file.

    Returns a Cloudinary URL when cloud storage is configured, otherwise the
    relative path ``uploads/<folder>/<name>`` served by the ``/uploads`` route.
    Raises ``ValueError`` with a user-facing message on invalid input.
    """

    if file is None or not getattr(file, 'filename', ''):
        return None

    filename = secure_filename(file.filename)
    if not filename or '.' not in filename:
        raise ValueError('The uploaded file must include a valid filename and extension.')

    base, ext = filename.rsplit('.', 1)
    ext = ext.lower()
    filename = f"{(base or 'upload').replace('.', '_')}.{ext}"

    allowed = allowed_extensions or current_app.config.get('ALLOWED_EXTENSIONS', set())
    if allowed and ext not in {e.lower() for e in allowed}:
        raise ValueError(f'File type .{ext} is not allowed. Allowed types: {", ".join(sorted(allowed))}')

    _validate_file_content(file, filename)

    size_limit = int(current_app.config.get('MAX_CONTENT_LENGTH') or 0)
    if size_limit and _file_size(file) > size_limit:
        raise ValueError(f'File too large. Maximum allowed size is {size_limit / (1024 * 1024):.1f} MB.')

    folder = secure_filename(folder) or 'uploads'

    if cloud_enabled():
        try:
            return upload_to_cloud(file, folder)
        except Exception as exc:
            current_app.logger.warning('Cloud upload failed; falling back to local storage: %s', exc)

    upload_path = os.path.join(current_app.config['UPLOAD_FOLDER'], folder)
    os.makedirs(upload_path, exist_ok=True)

    safe_name = f"{datetime.utcnow().strftime('%Y%m%d%H%M%S%f')}_{filename}"
    file.stream.seek(0)
    file.save(os.path.join(upload_path, safe_name))
    return f"uploads/{folder}/{safe_name}"
