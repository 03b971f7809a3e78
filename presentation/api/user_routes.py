from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional

from application.services.dependency_injection import provide_user_use_cases
from application.use_cases.user_use_cases import UserUseCases
from domain.entities.api_response import ApiResponse
from domain.entities.user import User

router = APIRouter(prefix="/api/users", tags=["users"])


class RegisterUserRequest(BaseModel):
    username: str
    email: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TokenRequest(BaseModel):
    username: str


@router.post("/", status_code=201)
async def register_user(
    request: RegisterUserRequest,
    user_use_cases: UserUseCases = Depends(provide_user_use_cases)
):
    user = await user_use_cases.register_user(User(**request.model_dump()))
    envelope = ApiResponse[User](status_code=201, data=user, message="User registered successfully")
    return JSONResponse(status_code=201, content=envelope.to_wire())


@router.post("/token")
async def issue_token(
    request: TokenRequest,
    user_use_cases: UserUseCases = Depends(provide_user_use_cases)
):
    """Issue an access token for an existing user (development login)"""
    token = await user_use_cases.issue_token(request.username)
    envelope = ApiResponse[dict](
        status_code=200,
        data={"accessToken": token, "tokenType": "bearer"},
        message="Access token issued"
    )
    response = JSONResponse(status_code=200, content=envelope.to_wire())
    response.set_cookie("accessToken", token, httponly=True, samesite="lax")
    return response


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    user_use_cases: UserUseCases = Depends(provide_user_use_cases)
):
    user = await user_use_cases.get_user_by_id(user_id)
    envelope = ApiResponse[User](status_code=200, data=user, message="User fetched successfully")
    return JSONResponse(status_code=200, content=envelope.to_wire())
