from pydantic import BaseModel
from typing import Optional


class AuthContext(BaseModel):
    """Identity of the authenticated caller"""
    user_id: str

    class Config:
        frozen = True


class UploadedFiles(BaseModel):
    """Local paths of files received with a request"""
    video_file_path: Optional[str] = None
    thumbnail_path: Optional[str] = None

    class Config:
        frozen = True
