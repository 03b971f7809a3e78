from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from infrastructure.database.user_repository_impl import UserRepositoryImpl
from infrastructure.database.video_repository_impl import VideoRepositoryImpl
from infrastructure.database.connection import get_async_db
from infrastructure.storage.factory import get_media_store
from domain.services.media_store import MediaStore
from application.use_cases.user_use_cases import UserUseCases
from application.use_cases.video_use_cases import VideoUseCases


def get_user_use_cases(session: AsyncSession) -> UserUseCases:
    user_repository = UserRepositoryImpl(session)
    return UserUseCases(user_repository)


async def provide_video_use_cases(
    session: AsyncSession = Depends(get_async_db),
    media_store: MediaStore = Depends(get_media_store)
) -> VideoUseCases:
    return VideoUseCases(VideoRepositoryImpl(session), media_store)


async def provide_user_use_cases(session: AsyncSession = Depends(get_async_db)) -> UserUseCases:
    return get_user_use_cases(session)
