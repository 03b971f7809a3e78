from fastapi import APIRouter, Depends, UploadFile, File, Form, Query
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from application.services.dependency_injection import provide_video_use_cases
from application.use_cases.video_use_cases import VideoUseCases
from domain.entities.api_response import ApiResponse
from domain.entities.request_context import AuthContext
from presentation.api.dependencies import get_auth_context, received_files

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/videos", tags=["videos"])


def render(envelope: ApiResponse) -> JSONResponse:
    return JSONResponse(status_code=envelope.status_code, content=envelope.to_wire())


@router.get("/")
async def get_all_videos(
    page: int = Query(1),
    limit: int = Query(10),
    query: Optional[str] = Query(None),
    sort_by: str = Query("views", alias="sortBy"),
    sort_type: str = Query("desc", alias="sortType"),
    user_id: Optional[str] = Query(None, alias="userId"),
    video_use_cases: VideoUseCases = Depends(provide_video_use_cases)
):
    """List videos with title search, owner filter, sorting and pagination"""
    return render(await video_use_cases.list_videos(
        query=query,
        user_id=user_id,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_type=sort_type
    ))


@router.post("/", status_code=201)
async def publish_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(None),
    auth: AuthContext = Depends(get_auth_context),
    video_use_cases: VideoUseCases = Depends(provide_video_use_cases)
):
    """
    Publish a video

    Expects multipart form data with title, description, videoFile and
    thumbnail. Both files are uploaded to the media store before the
    record is created.
    """
    async with received_files(video_file, thumbnail) as files:
        envelope = await video_use_cases.publish_video(
            title=title,
            description=description,
            files=files,
            auth=auth
        )
    return render(envelope)


@router.get("/{video_id}")
async def get_video(
    video_id: str,
    video_use_cases: VideoUseCases = Depends(provide_video_use_cases)
):
    """Get video by ID"""
    return render(await video_use_cases.get_video_by_id(video_id))


@router.patch("/{video_id}")
async def update_video(
    video_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(None),
    auth: AuthContext = Depends(get_auth_context),
    video_use_cases: VideoUseCases = Depends(provide_video_use_cases)
):
    """Update title, description, thumbnail and/or video file"""
    async with received_files(video_file, thumbnail) as files:
        envelope = await video_use_cases.update_video(
            video_id,
            auth,
            title=title,
            description=description,
            files=files
        )
    return render(envelope)


@router.delete("/{video_id}")
async def delete_video(
    video_id: str,
    auth: AuthContext = Depends(get_auth_context),
    video_use_cases: VideoUseCases = Depends(provide_video_use_cases)
):
    """Delete a video and its remote media"""
    return render(await video_use_cases.delete_video(video_id, auth))


@router.patch("/toggle/publish/{video_id}")
async def toggle_publish_status(
    video_id: str,
    auth: AuthContext = Depends(get_auth_context),
    video_use_cases: VideoUseCases = Depends(provide_video_use_cases)
):
    return render(await video_use_cases.toggle_publish_status(video_id, auth))
