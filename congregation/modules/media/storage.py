"""Supabase Storage bucket for blog, sermon and group images and videos."""
import logging
import time
from typing import Optional

from congregation.config import settings
from congregation.database.gateway import DataGateway
from congregation.modules.media.schemas import MediaKind

logger = logging.getLogger(__name__)


def build_object_name(kind: MediaKind, filename: Optional[str], now: Optional[float] = None) -> str:
    """`<kind>_<epoch millis>.<ext>`, keeping the uploaded file's extension."""
    millis = int((now if now is not None else time.time()) * 1000)
    ext = ""
    if filename and "." in filename:
        ext = "." + filename.rsplit(".", 1)[1].lower()
    return f"{kind.value}_{millis}{ext}"


class MediaStorage:
    def __init__(self, gateway: DataGateway, bucket_name: Optional[str] = None):
        self.bucket_name = bucket_name or settings.media_bucket
        if not self.bucket_name:
            raise ValueError("media_bucket must be configured")
        self._bucket = gateway.storage(self.bucket_name)

    def upload_file(self, file_content: bytes, path: str, content_type: str) -> str:
        """Upload to the bucket and return the object's public URL"""
        try:
            self._bucket.upload(path, file_content, {"content-type": content_type})
        except Exception as e:
            logger.error(f"Failed to upload {path} to bucket {self.bucket_name}: {e}")
            raise
        return self._bucket.get_public_url(path)

