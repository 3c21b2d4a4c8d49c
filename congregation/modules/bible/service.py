import datetime as dt
import logging
from typing import Optional
from urllib.parse import quote

import httpx
from fastapi import HTTPException

from congregation.config import settings
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.bible.schemas import (
    ReadingProgress, ReadingProgressResponse, SaveProgressResponse, PassageResponse
)

logger = logging.getLogger(__name__)

PASSAGE_TIMEOUT_SEC = 10.0


class BibleService:
    """Reading progress is best effort: a missing progress table never fails the reader."""

    def __init__(self, gateway: DataGateway, http_client: Optional[httpx.AsyncClient] = None):
        self.gateway = gateway
        self.http_client = http_client

    def get_progress(self, session: SessionContext) -> Optional[ReadingProgressResponse]:
        try:
            result = self.gateway.execute(
                self.gateway.table("user_bible_progress").select("*").eq("user_id", session.user_id).limit(1),
                "Load reading progress"
            )
        except GatewayError as e:
            logger.info(f"No reading progress for {session.user_id} ({e.kind.value})")
            return None
        if not result.data:
            return None
        return ReadingProgressResponse(**result.data[0])

    def save_progress(self, session: SessionContext, progress: ReadingProgress) -> SaveProgressResponse:
        record = {
            "user_id": session.user_id,
            "book": progress.book,
            "chapter": progress.chapter,
            "last_read_at": dt.datetime.now(dt.timezone.utc).isoformat(),
        }
        try:
            self.gateway.execute(
                self.gateway.table("user_bible_progress").upsert(record, on_conflict="user_id"),
                "Save reading progress"
            )
        except GatewayError as e:
            logger.info(f"Reading progress not saved for {session.user_id} ({e.kind.value})")
            return SaveProgressResponse(saved=False)
        return SaveProgressResponse(saved=True, progress=ReadingProgressResponse(**record))

    async def fetch_passage(self, book: str, chapter: int) -> PassageResponse:
        url = f"{settings.bible_api_url.rstrip('/')}/{quote(book)}+{chapter}"
        client = self.http_client or httpx.AsyncClient(timeout=PASSAGE_TIMEOUT_SEC)
        try:
            response = await client.get(url)
            response.raise_for_status()
            return PassageResponse(**response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Passage lookup failed for {book} {chapter}: {e}")
            raise HTTPException(status_code=502, detail="Text not found.")
        finally:
            if self.http_client is None:
                await client.aclose()
