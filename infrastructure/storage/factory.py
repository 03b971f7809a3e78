from functools import lru_cache

from core.config.settings import settings
from domain.services.media_store import MediaStore


@lru_cache(maxsize=1)
def get_media_store() -> MediaStore:
    """Build the media store selected by settings.storage_backend"""
    if settings.storage_backend == "s3":
        from infrastructure.storage.s3_media_store import S3MediaStore
        return S3MediaStore(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
            public_url=settings.s3_public_url,
            timeout=settings.media_timeout
        )

    if settings.storage_backend == "local":
        from infrastructure.storage.local_media_store import LocalMediaStore
        return LocalMediaStore(root=settings.media_root, base_url=settings.media_base_url)

    raise ValueError(f"Unsupported storage backend: {settings.storage_backend}")
