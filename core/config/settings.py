from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    app_name: str = "Video Sharing Backend"
    app_version: str = "1.0.0"
    debug: bool = True
    log_level: str = "INFO"

    # Database settings
    async_database_url: str = "sqlite+aiosqlite:///./backend.db"

    # JWT settings
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # File upload settings
    temp_dir: str = "temp"
    max_file_size: int = 500 * 1024 * 1024  # 500MB

    # Listing
    default_page_limit: int = 10
    max_page_limit: int = 100

    # Media storage: "local" or "s3"
    storage_backend: str = "local"
    media_root: str = "media"
    media_base_url: str = "/media"
    media_timeout: float = 120.0

    s3_bucket: str = ""
    s3_region: str = "us-east-1"
    s3_endpoint_url: Optional[str] = None
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_public_url: Optional[str] = None

    class Config:
        env_file = ".env"


settings = Settings()
