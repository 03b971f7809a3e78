from typing import Optional
from core.exceptions import ConflictError, InvalidIdError, NotFoundError, ValidationError
from core.security import create_access_token
from domain.entities.identifiers import is_valid_id
from domain.entities.user import User
from domain.repositories.user_repository import UserRepository


class UserUseCases:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def register_user(self, user: User) -> User:
        if not user.username.strip() or not user.email.strip():
            raise ValidationError("Username and email are required")

        user = user.model_copy(update={
            "username": user.username.strip().lower(),
            "email": user.email.strip().lower()
        })
        if await self.user_repository.get_by_username(user.username):
            raise ConflictError("User with this username already exists")
        if await self.user_repository.get_by_email(user.email):
            raise ConflictError("User with this email already exists")
        return await self.user_repository.create(user)

    async def get_user_by_id(self, user_id: str) -> User:
        if not is_valid_id(user_id):
            raise InvalidIdError("Invalid user ID")
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def find_user(self, user_id: str) -> Optional[User]:
        if not is_valid_id(user_id):
            return None
        return await self.user_repository.get_by_id(user_id)

    async def issue_token(self, username: str) -> str:
        user = await self.user_repository.get_by_username(username.strip().lower())
        if not user:
            raise NotFoundError("User not found")
        return create_access_token(user.id)
