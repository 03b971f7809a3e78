from abc import ABC, abstractmethod
from typing import List, Optional
from domain.entities.video import Video, VideoDetail, VideoFilter


class VideoRepository(ABC):

    @abstractmethod
    async def count(self, video_filter: VideoFilter) -> int:
        """Count videos matching the filter"""
        pass

    @abstractmethod
    async def find(
        self,
        video_filter: VideoFilter,
        sort_by: str,
        descending: bool,
        skip: int,
        limit: int
    ) -> List[Video]:
        """Get one sorted page of videos matching the filter"""
        pass

    @abstractmethod
    async def get_by_id(self, video_id: str) -> Optional[Video]:
        """Get video by ID"""
        pass

    @abstractmethod
    async def get_detail_by_id(self, video_id: str) -> Optional[VideoDetail]:
        """Get video by ID with its owner expanded"""
        pass

    @abstractmethod
    async def create(self, video: Video) -> Video:
        """Create a new video record"""
        pass

    @abstractmethod
    async def save(self, video: Video) -> Video:
        """Persist the mutable fields of an existing video"""
        pass

    @abstractmethod
    async def delete(self, video_id: str) -> bool:
        """Delete video record"""
        pass
