import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Cookie, Depends, UploadFile
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from application.services.dependency_injection import provide_user_use_cases
from application.use_cases.user_use_cases import UserUseCases
from core.config.settings import settings
from core.exceptions import UnauthorizedError, ValidationError
from core.security import decode_access_token
from domain.entities.request_context import AuthContext, UploadedFiles

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

CHUNK_SIZE = 1024 * 1024


async def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    access_token: Optional[str] = Cookie(None, alias="accessToken"),
    user_use_cases: UserUseCases = Depends(provide_user_use_cases)
) -> AuthContext:
    """Resolve the caller from a Bearer token or the accessToken cookie"""
    token = credentials.credentials if credentials else access_token
    if not token:
        raise UnauthorizedError("Unauthorized request")

    user_id = decode_access_token(token)
    if not user_id:
        raise UnauthorizedError("Invalid or expired access token")

    user = await user_use_cases.find_user(user_id)
    if not user:
        raise UnauthorizedError("Invalid access token")

    return AuthContext(user_id=user.id)


async def save_upload(upload: Optional[UploadFile]) -> Optional[str]:
    """Write an uploaded file to the temp dir and return its local path"""
    if upload is None or not upload.filename:
        return None

    temp_dir = Path(settings.temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    file_path = temp_dir / f"{uuid.uuid4().hex}{Path(upload.filename).suffix.lower()}"

    size = 0
    try:
        with open(file_path, "wb") as f:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > settings.max_file_size:
                    raise ValidationError(
                        f"File too large. Maximum size: {settings.max_file_size} bytes"
                    )
                f.write(chunk)
    except Exception:
        file_path.unlink(missing_ok=True)
        raise
    finally:
        await upload.close()

    return str(file_path)


@asynccontextmanager
async def received_files(
    video_file: Optional[UploadFile] = None,
    thumbnail: Optional[UploadFile] = None
):
    """Spool request files to disk for the duration of one operation"""
    paths = []
    try:
        video_file_path = await save_upload(video_file)
        if video_file_path:
            paths.append(video_file_path)
        thumbnail_path = await save_upload(thumbnail)
        if thumbnail_path:
            paths.append(thumbnail_path)

        yield UploadedFiles(video_file_path=video_file_path, thumbnail_path=thumbnail_path)
    finally:
        for path in paths:
            try:
                Path(path).unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove temp file {path}: {str(e)}")
