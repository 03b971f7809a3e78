from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
import logging

from core.exceptions import NotFoundError, PersistenceError
from domain.repositories.video_repository import VideoRepository
from domain.entities.video import Video, VideoDetail, VideoFilter, VideoOwner
from infrastructure.database.models import VideoModel

logger = logging.getLogger(__name__)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class VideoRepositoryImpl(VideoRepository):
    """SQLAlchemy implementation of VideoRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _apply_filter(self, statement, video_filter: VideoFilter):
        if video_filter.query:
            pattern = f"%{_escape_like(video_filter.query)}%"
            statement = statement.where(VideoModel.title.ilike(pattern, escape="\\"))
        if video_filter.owner_id:
            statement = statement.where(VideoModel.owner == video_filter.owner_id)
        return statement

    async def count(self, video_filter: VideoFilter) -> int:
        """Count videos matching the filter"""
        try:
            statement = self._apply_filter(
                select(func.count()).select_from(VideoModel), video_filter
            )
            result = await self.session.execute(statement)
            return result.scalar_one()

        except SQLAlchemyError as e:
            logger.error(f"Error counting videos: {str(e)}")
            raise PersistenceError("Error while counting videos") from e

    async def find(
        self,
        video_filter: VideoFilter,
        sort_by: str,
        descending: bool,
        skip: int,
        limit: int
    ) -> List[Video]:
        """Get one sorted page of videos matching the filter"""
        try:
            column = getattr(VideoModel, sort_by)
            order = column.desc() if descending else column.asc()
            statement = (
                self._apply_filter(select(VideoModel), video_filter)
                .order_by(order, VideoModel.id.asc())
                .offset(skip)
                .limit(limit)
            )
            result = await self.session.execute(statement)
            video_models = result.scalars().all()

            return [self._model_to_entity(model) for model in video_models]

        except SQLAlchemyError as e:
            logger.error(f"Error listing videos: {str(e)}")
            raise PersistenceError("Error while fetching videos") from e

    async def get_by_id(self, video_id: str) -> Optional[Video]:
        """Get video by ID"""
        try:
            video_model = await self.session.get(VideoModel, video_id)
            if video_model:
                return self._model_to_entity(video_model)
            return None

        except SQLAlchemyError as e:
            logger.error(f"Error getting video by ID {video_id}: {str(e)}")
            raise PersistenceError("Error while fetching video") from e

    async def get_detail_by_id(self, video_id: str) -> Optional[VideoDetail]:
        """Get video by ID with its owner expanded"""
        try:
            result = await self.session.execute(
                select(VideoModel)
                .options(selectinload(VideoModel.owner_user))
                .where(VideoModel.id == video_id)
                .execution_options(populate_existing=True)
            )
            video_model = result.scalar_one_or_none()
            if not video_model:
                return None

            entity = self._model_to_entity(video_model)
            return VideoDetail(
                **entity.model_dump(exclude={"owner"}),
                owner=VideoOwner.model_validate(video_model.owner_user)
            )

        except SQLAlchemyError as e:
            logger.error(f"Error getting video detail {video_id}: {str(e)}")
            raise PersistenceError("Error while fetching video") from e

    async def create(self, video: Video) -> Video:
        """Create a new video record"""
        try:
            video_model = VideoModel(
                title=video.title,
                description=video.description,
                video_file=video.video_file,
                video_file_public_id=video.video_file_public_id,
                thumbnail=video.thumbnail,
                thumbnail_public_id=video.thumbnail_public_id,
                duration=video.duration,
                owner=video.owner,
                is_published=video.is_published,
                views=video.views
            )

            self.session.add(video_model)
            await self.session.commit()
            await self.session.refresh(video_model)

            return self._model_to_entity(video_model)

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating video: {str(e)}")
            raise PersistenceError("Error while creating video") from e

    async def save(self, video: Video) -> Video:
        """Persist the mutable fields of an existing video"""
        try:
            video_model = await self.session.get(VideoModel, video.id)
            if video_model is None:
                raise NotFoundError("Video not found")

            # owner is never written after insert
            video_model.title = video.title
            video_model.description = video.description
            video_model.video_file = video.video_file
            video_model.video_file_public_id = video.video_file_public_id
            video_model.thumbnail = video.thumbnail
            video_model.thumbnail_public_id = video.thumbnail_public_id
            video_model.duration = video.duration
            video_model.is_published = video.is_published

            await self.session.commit()
            await self.session.refresh(video_model)

            return self._model_to_entity(video_model)

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating video {video.id}: {str(e)}")
            raise PersistenceError("Error while updating video") from e

    async def delete(self, video_id: str) -> bool:
        """Delete video record"""
        try:
            video_model = await self.session.get(VideoModel, video_id)
            if video_model is None:
                return False

            await self.session.delete(video_model)
            await self.session.commit()
            return True

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting video {video_id}: {str(e)}")
            raise PersistenceError("Error while deleting video") from e

    def _model_to_entity(self, model: VideoModel) -> Video:
        """Convert database model to domain entity"""
        return Video(
            id=model.id,
            title=model.title,
            description=model.description,
            video_file=model.video_file,
            video_file_public_id=model.video_file_public_id,
            thumbnail=model.thumbnail,
            thumbnail_public_id=model.thumbnail_public_id,
            duration=model.duration or 0,
            owner=model.owner,
            is_published=bool(model.is_published),
            views=model.views or 0,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
