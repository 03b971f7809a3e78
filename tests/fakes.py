"""In-memory stand-ins for the repository and media store"""

import asyncio
from datetime import datetime
from typing import Dict, List, Optional

from core.exceptions import MediaDeleteError, UploadError
from domain.entities.identifiers import new_id
from domain.entities.video import Video, VideoDetail, VideoFilter, VideoOwner
from domain.repositories.video_repository import VideoRepository
from domain.services.media_store import MediaKind, MediaStore, MediaUpload


class InMemoryVideoRepository(VideoRepository):

    def __init__(self, owners: Optional[Dict[str, VideoOwner]] = None):
        self.videos: Dict[str, Video] = {}
        self.owners = owners or {}

    def _matching(self, video_filter: VideoFilter) -> List[Video]:
        videos = list(self.videos.values())
        if video_filter.query:
            needle = video_filter.query.lower()
            videos = [v for v in videos if needle in v.title.lower()]
        if video_filter.owner_id:
            videos = [v for v in videos if v.owner == video_filter.owner_id]
        return videos

    async def count(self, video_filter: VideoFilter) -> int:
        return len(self._matching(video_filter))

    async def find(self, video_filter, sort_by, descending, skip, limit) -> List[Video]:
        videos = sorted(self._matching(video_filter), key=lambda v: v.id)
        videos.sort(key=lambda v: getattr(v, sort_by), reverse=descending)
        return videos[skip:skip + limit]

    async def get_by_id(self, video_id: str) -> Optional[Video]:
        return self.videos.get(video_id)

    async def get_detail_by_id(self, video_id: str) -> Optional[VideoDetail]:
        video = self.videos.get(video_id)
        if not video:
            return None
        owner = self.owners.get(video.owner) or VideoOwner(id=video.owner, username="owner")
        return VideoDetail(**video.model_dump(exclude={"owner"}), owner=owner)

    async def create(self, video: Video) -> Video:
        now = datetime.utcnow()
        video = video.model_copy(update={"id": new_id(), "created_at": now, "updated_at": now})
        self.videos[video.id] = video
        return video

    async def save(self, video: Video) -> Video:
        video = video.model_copy(update={"updated_at": datetime.utcnow()})
        self.videos[video.id] = video
        return video

    async def delete(self, video_id: str) -> bool:
        return self.videos.pop(video_id, None) is not None


class InMemoryMediaStore(MediaStore):

    def __init__(self, duration: Optional[float] = 12.5):
        self.duration = duration
        self.objects: Dict[str, str] = {}
        self.uploads: List[str] = []
        self.deletes: List[str] = []
        self.failing_uploads = set()
        self.fail_deletes = False
        self.hang = False
        self._counter = 0

    async def upload(self, local_path: str, kind: MediaKind) -> MediaUpload:
        if self.hang:
            await asyncio.sleep(3600)
        self.uploads.append(local_path)
        if kind in self.failing_uploads:
            raise UploadError(f"Error while uploading {kind.value}")

        self._counter += 1
        public_id = f"{kind.value}s/{self._counter}"
        self.objects[public_id] = local_path
        return MediaUpload(
            url=f"https://media.test/{public_id}",
            public_id=public_id,
            duration=self.duration if kind == MediaKind.VIDEO else None
        )

    async def delete(self, public_id: str, kind: MediaKind) -> None:
        self.deletes.append(public_id)
        if self.fail_deletes:
            raise MediaDeleteError(f"Error while deleting {kind.value}")
        self.objects.pop(public_id, None)


def make_video(owner: str, **overrides) -> Video:
    fields = {
        "title": "A video",
        "description": "Some description",
        "video_file": "https://media.test/videos/seed",
        "video_file_public_id": "videos/seed",
        "thumbnail": "https://media.test/images/seed",
        "thumbnail_public_id": "images/seed",
        "duration": 10,
        "owner": owner,
    }
    fields.update(overrides)
    return Video(**fields)
