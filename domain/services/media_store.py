from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class MediaKind(str, Enum):
    VIDEO = "video"
    IMAGE = "image"


class MediaUpload(BaseModel):
    """Result of uploading a local file to the media store"""
    url: str
    public_id: str
    duration: Optional[float] = None


class MediaStore(ABC):
    """Remote host for raw video and thumbnail files"""

    @abstractmethod
    async def upload(self, local_path: str, kind: MediaKind) -> MediaUpload:
        """Upload a local file, raising UploadError on failure"""
        pass

    @abstractmethod
    async def delete(self, public_id: str, kind: MediaKind) -> None:
        """Delete a stored object; deleting a missing key is a no-op"""
        pass
