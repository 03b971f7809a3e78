import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def get_video_duration(file_path: str) -> Optional[float]:
    """Extract video duration using moviepy (runs in thread pool)"""
    try:
        from moviepy import VideoFileClip
        with VideoFileClip(file_path) as video_clip:
            return video_clip.duration
    except Exception as e:
        logger.warning(f"Could not extract duration from {file_path}: {str(e)}")
        return None


async def probe_duration(file_path: str) -> Optional[float]:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, get_video_duration, file_path)
