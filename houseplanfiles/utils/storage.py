"""Cloud storage helpers.

Uploads go to Cloudinary when CLOUDINARY_URL is configured (production);
otherwise callers fall back to the local uploads folder.
"""

from __future__ import annotations

import os
from typing import Optional

from flask import current_app
from werkzeug.datastructures import FileStorage


IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}


class CloudStorageConfigurationError(RuntimeError):
    """Raised when persistent storage credentials are missing."""


def cloud_enabled() -> bool:
    return bool(os.environ.get("CLOUDINARY_URL") or current_app.config.get("CLOUDINARY_URL"))


def upload_to_cloud(file: FileStorage, folder: str) -> Optional[str]:
    """Upload a file to Cloudinary and return its https URL."""

    if not file or not getattr(file, "filename", ""):
        return None

    cloudinary_url = os.environ.get("CLOUDINARY_URL") or current_app.config.get("CLOUDINARY_URL")
    if not cloudinary_url:
        raise CloudStorageConfigurationError("CLOUDINARY_URL is not configured.")

    import cloudinary
    import cloudinary.uploader

    cloudinary.config(cloudinary_url=cloudinary_url)
    file.stream.seek(0)

    filename = (file.filename or "upload").strip()
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    resource_type = "image" if ext in IMAGE_EXTENSIONS else "raw"

    result = cloudinary.uploader.upload(
        file,
        folder=f"houseplanfiles/{folder}",
        resource_type=resource_type,
        use_filename=True,
        unique_filename=True,
        overwrite=False,
    )

    secure_url = result.get("secure_url") or result.get("url")
    if not secure_url:
        raise RuntimeError("Cloudinary upload did not return a public URL.")
    return secure_url
