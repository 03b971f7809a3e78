from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
import logging

from core.config.logging_config import configure_logging
from core.config.settings import settings
from infrastructure.database.connection import create_tables
from presentation.api import user_routes, video_routes
from presentation.api.error_handlers import add_exception_handlers
from presentation.middleware.cors import add_cors_middleware

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info(f"{settings.app_name} {settings.app_version} started with {settings.storage_backend} media storage")
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan
)

add_cors_middleware(app)
add_exception_handlers(app)

app.include_router(user_routes.router)
app.include_router(video_routes.router)

if settings.storage_backend == "local" and settings.media_base_url.startswith("/"):
    Path(settings.media_root).mkdir(parents=True, exist_ok=True)
    app.mount(settings.media_base_url, StaticFiles(directory=settings.media_root), name="media")


@app.get("/")
async def root():
    return {"message": "Video Sharing Backend", "version": settings.app_version}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
