import asyncio
import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Optional

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import MediaDeleteError, UploadError
from domain.services.media_store import MediaKind, MediaStore, MediaUpload
from infrastructure.storage.video_probe import probe_duration

logger = logging.getLogger(__name__)


class S3MediaStore(MediaStore):
    """S3/MinIO compatible media store"""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        public_url: Optional[str] = None,
        timeout: float = 120.0,
        client=None
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.public_url = public_url.rstrip("/") if public_url else None

        if client is None:
            client_kwargs = {
                "service_name": "s3",
                "region_name": region,
                "aws_access_key_id": access_key,
                "aws_secret_access_key": secret_key,
                "config": BotoConfig(
                    connect_timeout=timeout,
                    read_timeout=timeout,
                    signature_version="s3v4",
                    s3={"addressing_style": "path" if endpoint_url else "auto"},
                ),
            }
            # For MinIO or other S3-compatible storage
            if endpoint_url:
                client_kwargs["endpoint_url"] = endpoint_url
            client = boto3.client(**client_kwargs)
        self._client = client

    def get_url(self, key: str) -> str:
        if self.public_url:
            return f"{self.public_url}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def upload(self, local_path: str, kind: MediaKind) -> MediaUpload:
        source = Path(local_path)
        if not source.is_file():
            raise UploadError(f"File to upload does not exist: {local_path}")

        key = f"{kind.value}s/{uuid.uuid4().hex}{source.suffix.lower()}"
        content_type = mimetypes.guess_type(source.name)[0] or "application/octet-stream"

        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                lambda: self._client.upload_file(
                    str(source), self.bucket, key, ExtraArgs={"ContentType": content_type}
                )
            )
        except (BotoCoreError, ClientError, S3UploadFailedError) as e:
            logger.error(f"Error uploading {local_path} to s3://{self.bucket}/{key}: {str(e)}")
            raise UploadError(f"Error while uploading {kind.value}") from e

        duration = await probe_duration(local_path) if kind == MediaKind.VIDEO else None
        logger.info(f"Uploaded {kind.value} to s3://{self.bucket}/{key}")

        return MediaUpload(url=self.get_url(key), public_id=key, duration=duration)

    async def delete(self, public_id: str, kind: MediaKind) -> None:
        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                lambda: self._client.delete_object(Bucket=self.bucket, Key=public_id)
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                logger.info(f"{kind.value} {public_id} already absent")
                return
            logger.error(f"Error deleting s3://{self.bucket}/{public_id}: {str(e)}")
            raise MediaDeleteError(f"Error while deleting {kind.value}") from e
        except BotoCoreError as e:
            logger.error(f"Error deleting s3://{self.bucket}/{public_id}: {str(e)}")
            raise MediaDeleteError(f"Error while deleting {kind.value}") from e

        logger.info(f"Deleted {kind.value} s3://{self.bucket}/{public_id}")
