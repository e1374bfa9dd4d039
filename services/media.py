import logging
from typing import Optional
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader

from config import CLOUDINARY_FOLDER, CLOUDINARY_URL

logger = logging.getLogger(__name__)

if CLOUDINARY_URL:
    # cloudinary://<api_key>:<api_secret>@<cloud_name>
    _parts = urlparse(CLOUDINARY_URL)
    cloudinary.config(
        cloud_name=_parts.hostname,
        api_key=_parts.username,
        api_secret=_parts.password,
        secure=True,
    )


def is_configured() -> bool:
    return bool(CLOUDINARY_URL)


def upload_photo(upload) -> Optional[str]:
    """
    Upload a student photo and return its secure URL.
    Returns None when nothing was uploaded or uploads are not configured.
    """
    if upload is None or not getattr(upload, "filename", ""):
        return None
    if not is_configured():
        logger.warning("Photo '%s' ignored: CLOUDINARY_URL is not set", upload.filename)
        return None

    result = cloudinary.uploader.upload(upload.file, folder=CLOUDINARY_FOLDER)
    return result.get("secure_url")
