"""
Event image storage.

Uploads organizer images to a Supabase Storage bucket under
collision-resistant, sanitized keys.
"""

import re
import time
import uuid
from typing import Optional

from supabase import Client

_UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9]")

IMAGE_PREFIX = "events"


def sanitize_filename(filename: str) -> str:
    """
    Make a file name safe to use as part of a storage key.

    Directory components are dropped and every non-alphanumeric
    character of the stem and extension is replaced with '_', so the
    result cannot traverse paths or contain invalid key characters.

    Example:
        >>> sanitize_filename("../My Poster (final).JPG")
        'My_Poster__final_.JPG'
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, extension = name.rpartition(".")
    if not dot:
        stem, extension = name, ""

    stem = _UNSAFE_CHARACTERS.sub("_", stem) or "image"
    extension = _UNSAFE_CHARACTERS.sub("_", extension)
    return f"{stem}.{extension}" if extension else stem


def build_storage_key(filename: str, timestamp_ms: Optional[int] = None) -> str:
    """
    Build the storage key for an uploaded image.

    Format: events/<epoch milliseconds>_<8 hex chars>_<sanitized name>
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    token = uuid.uuid4().hex[:8]
    return f"{IMAGE_PREFIX}/{timestamp_ms}_{token}_{sanitize_filename(filename)}"


class AssetStore:
    """Puts image bytes into a storage bucket and returns their public URL."""

    def __init__(self, db: Client, bucket: str):
        self._db = db
        self._bucket = bucket

    def put(self, path: str, content: bytes, content_type: Optional[str] = None) -> str:
        """
        Upload bytes under path.

        Returns:
            Public URL of the stored object
        """
        bucket = self._db.storage.from_(self._bucket)
        options = {"content-type": content_type} if content_type else None
        bucket.upload(path, content, options)
        return bucket.get_public_url(path)
