from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from app.dependencies import get_post_repository
from app.repositories.post_repository import PostRepository

router = APIRouter()

@router.get("/posts", response_model=List[Dict[str, Any]])
async def list_posts(posts: PostRepository = Depends(get_post_repository)):
    """All posts, newest first."""
    return await posts.list_posts()

@router.get("/videos", response_model=List[Dict[str, Any]])
async def list_videos(posts: PostRepository = Depends(get_post_repository)):
    """Video posts only, newest first."""
    return await posts.list_videos()
