from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
import logging

from core.exceptions import PersistenceError
from domain.repositories.user_repository import UserRepository
from domain.entities.user import User
from infrastructure.database.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositoryImpl(UserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        db_user = UserModel(
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar
        )
        try:
            self.session.add(db_user)
            await self.session.commit()
            await self.session.refresh(db_user)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating user {user.username}: {str(e)}")
            raise PersistenceError("Error while creating user") from e
        return User.model_validate(db_user)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await self._get_one(UserModel.id == user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self._get_one(UserModel.username == username)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._get_one(UserModel.email == email)

    async def _get_one(self, condition) -> Optional[User]:
        try:
            result = await self.session.execute(select(UserModel).where(condition))
        except SQLAlchemyError as e:
            logger.error(f"Error getting user: {str(e)}")
            raise PersistenceError("Error while fetching user") from e
        db_user = result.scalar_one_or_none()
        return User.model_validate(db_user) if db_user else None
