from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


class VideoOwner(BaseModel):
    """Public profile of the user who published a video"""
    id: str
    username: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class Video(BaseModel):
    id: Optional[str] = None
    title: str
    description: str
    video_file: str
    video_file_public_id: Optional[str] = None
    thumbnail: str
    thumbnail_public_id: Optional[str] = None
    duration: float = 0
    owner: str
    is_published: bool = False
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class VideoDetail(Video):
    """Video with the owner relation expanded"""
    owner: VideoOwner


class VideoFilter(BaseModel):
    query: Optional[str] = None
    owner_id: Optional[str] = None


class Pagination(BaseModel):
    total_result: int
    total_pages: int
    current_page: int
    limit: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class VideoPage(BaseModel):
    videos: List[Video] = Field(default_factory=list)
    pagination: Pagination

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# Wire names accepted for sorting, mapped onto Video fields
SORTABLE_FIELDS = {
    "views": "views",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
    "title": "title",
    "duration": "duration",
}
DEFAULT_SORT_FIELD = "views"


def resolve_sort_field(sort_by: Optional[str]) -> str:
    return SORTABLE_FIELDS.get(sort_by or DEFAULT_SORT_FIELD, DEFAULT_SORT_FIELD)
