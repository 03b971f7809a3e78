import math
import asyncio
import logging
from typing import Optional

from core.config.settings import settings
from core.exceptions import (
    ForbiddenError,
    InvalidIdError,
    MediaDeleteError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from domain.entities.api_response import ApiResponse
from domain.entities.identifiers import is_valid_id
from domain.entities.request_context import AuthContext, UploadedFiles
from domain.entities.video import (
    Pagination,
    Video,
    VideoDetail,
    VideoFilter,
    VideoPage,
    resolve_sort_field,
)
from domain.repositories.video_repository import VideoRepository
from domain.services.media_store import MediaKind, MediaStore, MediaUpload

logger = logging.getLogger(__name__)


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


class VideoUseCases:
    """Business logic for video operations"""

    def __init__(
        self,
        video_repository: VideoRepository,
        media_store: MediaStore,
        media_timeout: Optional[float] = None
    ):
        self.video_repository = video_repository
        self.media_store = media_store
        self.media_timeout = media_timeout if media_timeout is not None else settings.media_timeout

    async def _upload(self, local_path: str, kind: MediaKind) -> MediaUpload:
        try:
            return await asyncio.wait_for(
                self.media_store.upload(local_path, kind), timeout=self.media_timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Uploading {kind.value} {local_path} timed out")
            raise UploadError(f"Timed out while uploading {kind.value}") from e

    async def _delete_media(self, public_id: str, kind: MediaKind) -> None:
        try:
            await asyncio.wait_for(
                self.media_store.delete(public_id, kind), timeout=self.media_timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Deleting {kind.value} {public_id} timed out")
            raise MediaDeleteError(f"Timed out while deleting {kind.value}") from e

    async def _get_owned_video(self, video_id: str, auth: AuthContext, action: str) -> Video:
        if not is_valid_id(video_id):
            raise InvalidIdError("Invalid video ID")

        video = await self.video_repository.get_by_id(video_id)
        if not video:
            raise NotFoundError("Video not found")

        if video.owner != auth.user_id:
            logger.warning(f"User {auth.user_id} tried to {action} video {video_id} owned by {video.owner}")
            raise ForbiddenError(f"You are not allowed to {action} this video")

        return video

    async def list_videos(
        self,
        query: Optional[str] = None,
        user_id: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
        sort_by: str = "views",
        sort_type: str = "desc"
    ) -> ApiResponse[VideoPage]:
        """
        Get one page of videos matching a title search and/or owner

        An invalid user_id is ignored rather than rejected. page and limit
        are clamped to sane bounds and unknown sort fields fall back to views.
        """
        video_filter = VideoFilter(
            query=query or None,
            owner_id=user_id if user_id and is_valid_id(user_id) else None
        )

        page = max(page or 1, 1)
        if not limit or limit < 1:
            limit = settings.default_page_limit
        limit = min(limit, settings.max_page_limit)

        total_videos = await self.video_repository.count(video_filter)
        videos = await self.video_repository.find(
            video_filter,
            sort_by=resolve_sort_field(sort_by),
            descending=sort_type != "asc",
            skip=(page - 1) * limit,
            limit=limit
        )

        return ApiResponse[VideoPage](
            status_code=200,
            data=VideoPage(
                videos=videos,
                pagination=Pagination(
                    total_result=total_videos,
                    total_pages=math.ceil(total_videos / limit),
                    current_page=page,
                    limit=limit
                )
            ),
            message="Videos fetched successfully"
        )

    async def publish_video(
        self,
        title: Optional[str],
        description: Optional[str],
        files: UploadedFiles,
        auth: AuthContext
    ) -> ApiResponse[Video]:
        """
        Upload a video with its thumbnail and create the record

        Args:
            title: Video title, required
            description: Video description, required
            files: Local paths of the received video and thumbnail files
            auth: Authenticated caller, recorded as owner

        Returns:
            Envelope holding the created Video

        Raises:
            ValidationError: If a field or file is missing
            UploadError: If either upload fails; no record is created
        """
        if not _has_text(title) or not _has_text(description):
            raise ValidationError("Title and description are required")

        if not files.video_file_path or not files.thumbnail_path:
            raise ValidationError("Video file and thumbnail files are required")

        # A thumbnail failure leaves the uploaded video in the store
        video_upload = await self._upload(files.video_file_path, MediaKind.VIDEO)
        thumbnail_upload = await self._upload(files.thumbnail_path, MediaKind.IMAGE)

        video = await self.video_repository.create(
            Video(
                title=title.strip(),
                description=description.strip(),
                video_file=video_upload.url,
                video_file_public_id=video_upload.public_id,
                thumbnail=thumbnail_upload.url,
                thumbnail_public_id=thumbnail_upload.public_id,
                duration=video_upload.duration or 0,
                owner=auth.user_id
            )
        )

        logger.info(f"Video {video.id} published by {auth.user_id}")
        return ApiResponse[Video](
            status_code=201, data=video, message="Video published successfully"
        )

    async def get_video_by_id(self, video_id: str) -> ApiResponse[VideoDetail]:
        """Get video by ID with its owner's public profile"""
        if not is_valid_id(video_id):
            raise InvalidIdError("Invalid video ID")

        video = await self.video_repository.get_detail_by_id(video_id)
        if not video:
            raise NotFoundError("Video not found")

        return ApiResponse[VideoDetail](
            status_code=200, data=video, message="Video fetched successfully"
        )

    async def update_video(
        self,
        video_id: str,
        auth: AuthContext,
        title: Optional[str] = None,
        description: Optional[str] = None,
        files: Optional[UploadedFiles] = None
    ) -> ApiResponse[Video]:
        """
        Update the details and/or media of a video owned by the caller

        Replaced remote objects are not deleted from the media store.
        """
        video = await self._get_owned_video(video_id, auth, "update")
        files = files or UploadedFiles()
        changes = {}

        if files.thumbnail_path:
            thumbnail_upload = await self._upload(files.thumbnail_path, MediaKind.IMAGE)
            changes["thumbnail"] = thumbnail_upload.url
            changes["thumbnail_public_id"] = thumbnail_upload.public_id

        if files.video_file_path:
            video_upload = await self._upload(files.video_file_path, MediaKind.VIDEO)
            changes["video_file"] = video_upload.url
            changes["video_file_public_id"] = video_upload.public_id
            changes["duration"] = video_upload.duration or 0

        if _has_text(title):
            changes["title"] = title.strip()
        if _has_text(description):
            changes["description"] = description.strip()

        video = await self.video_repository.save(video.model_copy(update=changes))

        logger.info(f"Video {video_id} updated: {sorted(changes)}")
        return ApiResponse[Video](
            status_code=200, data=video, message="Video updated successfully"
        )

    async def delete_video(self, video_id: str, auth: AuthContext) -> ApiResponse[dict]:
        """
        Delete a video owned by the caller and both of its remote objects

        Remote objects go first; a failed remote delete leaves the record.
        """
        video = await self._get_owned_video(video_id, auth, "delete")

        if video.video_file_public_id:
            await self._delete_media(video.video_file_public_id, MediaKind.VIDEO)
        if video.thumbnail_public_id:
            await self._delete_media(video.thumbnail_public_id, MediaKind.IMAGE)

        await self.video_repository.delete(video_id)

        logger.info(f"Video {video_id} deleted by {auth.user_id}")
        return ApiResponse[dict](
            status_code=200, data={}, message="Video deleted successfully"
        )

    async def toggle_publish_status(self, video_id: str, auth: AuthContext) -> ApiResponse[Video]:
        video = await self._get_owned_video(video_id, auth, "change publish status for")

        video = await self.video_repository.save(
            video.model_copy(update={"is_published": not video.is_published})
        )

        status = "Published" if video.is_published else "Unpublished"
        return ApiResponse[Video](
            status_code=200, data=video, message=f"Video is now {status}"
        )
