import logging
from typing import Any, Dict, List

from postgrest.exceptions import APIError
from supabase import AsyncClient

from app.exceptions.base_exception import StorageException

logger = logging.getLogger(__name__)


class PostRepository:
    """Read-only queries over the Supabase ``posts`` table."""

    TABLE = "posts"

    def __init__(self, client: AsyncClient):
        self.client = client

    async def list_posts(self) -> List[Dict[str, Any]]:
        query = (
            self.client.table(self.TABLE)
            .select("*")
            .order("created_at", desc=True)
        )
        return await self._execute(query)

    async def list_videos(self) -> List[Dict[str, Any]]:
        query = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("is_video", True)
            .order("created_at", desc=True)
        )
        return await self._execute(query)

    async def _execute(self, query) -> List[Dict[str, Any]]:
        try:
            response = await query.execute()
        except APIError as e:
            logger.error("Error querying %s: %s", self.TABLE, e)
            raise StorageException(e.message or str(e)) from e
        return response.data or []
