import asyncio
import logging
import shutil
import uuid
from pathlib import Path

from core.exceptions import MediaDeleteError, UploadError
from domain.services.media_store import MediaKind, MediaStore, MediaUpload
from infrastructure.storage.video_probe import probe_duration

logger = logging.getLogger(__name__)


class LocalMediaStore(MediaStore):
    """Stores media under a local directory served as static files"""

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, public_id: str) -> Path:
        path = (self.root / public_id).resolve()
        if self.root.resolve() not in path.parents:
            raise ValueError(f"Key escapes media root: {public_id}")
        return path

    def _copy(self, source: Path, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)

    async def upload(self, local_path: str, kind: MediaKind) -> MediaUpload:
        source = Path(local_path)
        if not source.is_file():
            raise UploadError(f"File to upload does not exist: {local_path}")

        public_id = f"{kind.value}s/{uuid.uuid4().hex}{source.suffix.lower()}"
        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._copy, source, self._path_for(public_id))
        except OSError as e:
            logger.error(f"Error storing {local_path} locally: {str(e)}")
            raise UploadError(f"Error while uploading {kind.value}") from e

        duration = await probe_duration(local_path) if kind == MediaKind.VIDEO else None
        logger.info(f"Stored {kind.value} as {public_id}")

        return MediaUpload(
            url=f"{self.base_url}/{public_id}",
            public_id=public_id,
            duration=duration
        )

    async def delete(self, public_id: str, kind: MediaKind) -> None:
        try:
            path = self._path_for(public_id)
            path.unlink(missing_ok=True)
        except (OSError, ValueError) as e:
            logger.error(f"Error deleting {kind.value} {public_id}: {str(e)}")
            raise MediaDeleteError(f"Error while deleting {kind.value}") from e

        logger.info(f"Deleted {kind.value} {public_id}")
