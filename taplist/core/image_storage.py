"""Supabase Storage bucket for label and background images."""
import logging
import os
import uuid
from typing import Optional

from fastapi import HTTPException, UploadFile
from supabase import Client

from taplist.config import settings

logger = logging.getLogger(__name__)


class ImageStorage:
    def __init__(self, supabase: Client, bucket_name: str):
        self.supabase = supabase
        self.bucket_name = bucket_name

    @staticmethod
    def build_key(prefix: str, filename: Optional[str]) -> str:
        """Unique key per upload so display clients never see a cached image for a new upload."""
        extension = os.path.splitext(filename or "")[1].lower() or ".img"
        return f"{prefix}/{uuid.uuid4().hex}{extension}"

    def upload_image(self, content: bytes, key: str, content_type: Optional[str]) -> str:
        """Upload image bytes and return the public URL"""
        if not content_type or not content_type.startswith("image/"):
            raise HTTPException(status_code=400, detail="File must be an image")
        if not content:
            raise HTTPException(status_code=400, detail="File is empty")
        if len(content) > settings.max_image_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"Image exceeds {settings.max_image_bytes} bytes"
            )
        bucket = self.supabase.storage.from_(self.bucket_name)
        try:
            bucket.upload(
                key,
                content,
                file_options={"content-type": content_type, "upsert": "true"}
            )
        except Exception as e:
            logger.error(f"Supabase Storage upload failed ({self.bucket_name}/{key}): {str(e)}")
            raise HTTPException(status_code=500, detail=f"Failed to upload to storage: {str(e)}")
        logger.info(f"Uploaded image to Supabase Storage: {self.bucket_name}/{key}")
        return bucket.get_public_url(key)

    async def upload_file(self, file: UploadFile, prefix: str) -> str:
        # One byte past the limit is enough to reject an oversized file
        content = await file.read(settings.max_image_bytes + 1)
        key = self.build_key(prefix, file.filename)
        return self.upload_image(content, key, file.content_type)

    def key_from_url(self, url: Optional[str]) -> Optional[str]:
        """Object key for a public URL of this bucket; None for foreign or empty URLs."""
        if not url:
            return None
        marker = f"/object/public/{self.bucket_name}/"
        if marker not in url:
            return None
        return url.split(marker, 1)[1].split("?", 1)[0] or None

    def delete_image(self, url: Optional[str]) -> bool:
        """Delete the object behind a public URL. Failures are logged, not raised."""
        key = self.key_from_url(url)
        if not key:
            return False
        try:
            self.supabase.storage.from_(self.bucket_name).remove([key])
            logger.info(f"Deleted image from Supabase Storage: {self.bucket_name}/{key}")
            return True
        except Exception as e:
            logger.warning(f"Failed to delete image from Supabase Storage ({self.bucket_name}/{key}): {e}")
            return False
