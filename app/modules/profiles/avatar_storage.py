import boto3
from botocore.exceptions import ClientError
from supabase import Client
from app.config import settings
import logging
from typing import List

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
}


def avatar_path(user_id: str, content_type: str) -> str:
    """Object key for a user's avatar: <user_id>/avatar.<ext>, ext from the validated content type"""
    return f"{user_id}/avatar.{ALLOWED_CONTENT_TYPES[content_type]}"


def stale_avatar_paths(key: str) -> List[str]:
    """Keys of the same avatar stored under the other allowed extensions"""
    stem = key.rsplit(".", 1)[0]
    return [f"{stem}.{ext}" for ext in sorted(set(ALLOWED_CONTENT_TYPES.values())) if f"{stem}.{ext}" != key]


class SupabaseAvatarStorage:
    """Avatars in the public Supabase Storage bucket."""

    def __init__(self, supabase: Client, bucket_name: str = None):
        self.supabase = supabase
        self.bucket_name = bucket_name or settings.avatars_bucket

    def upload_file(self, file_content: bytes, key: str, content_type: str) -> str:
        """Upload (overwriting) and return the public URL"""
        bucket = self.supabase.storage.from_(self.bucket_name)
        bucket.remove(stale_avatar_paths(key))
        bucket.upload(
            path=key,
            file=file_content,
            file_options={"content-type": content_type, "upsert": "true"},
        )
        return bucket.get_public_url(key)


class S3AvatarStorage:
    def __init__(self):
        if not settings.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name

    def upload_file(self, file_content: bytes, key: str, content_type: str) -> str:
        """Upload file to S3 and return its public URL"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=f"avatars/{key}",
                Body=file_content,
                ContentType=content_type
            )
            self.s3_client.delete_objects(
                Bucket=self.bucket_name,
                Delete={"Objects": [{"Key": f"avatars/{k}"} for k in stale_avatar_paths(key)]}
            )
            return f"https://{self.bucket_name}.s3.{settings.aws_region}.amazonaws.com/avatars/{key}"
        except ClientError as e:
            logger.error(f"Failed to upload avatar to S3: {str(e)}")
            raise


def get_avatar_storage(supabase: Client):
    """S3 when fully configured, otherwise the Supabase avatars bucket."""
    if settings.s3_configured:
        try:
            return S3AvatarStorage()
        except Exception as e:
            logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
    return SupabaseAvatarStorage(supabase)
