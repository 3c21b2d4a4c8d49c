from fastapi import APIRouter, Depends, Query
from congregation.modules.bible.schemas import (
    ReadingProgress, ReadingProgressResponse, SaveProgressResponse, PassageResponse
)
from congregation.modules.bible.service import BibleService
from congregation.core.dependencies import require_authenticated
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway
from typing import Optional

router = APIRouter(prefix="/bible", tags=["bible"])


def get_bible_service(gateway: DataGateway = Depends(get_gateway)) -> BibleService:
    return BibleService(gateway)


@router.get("/passage", response_model=PassageResponse)
async def get_passage(
    book: str,
    chapter: int = Query(1, ge=1),
    service: BibleService = Depends(get_bible_service)
):
    """Chapter text from bible-api.com"""
    return await service.fetch_passage(book, chapter)


@router.get("/progress", response_model=Optional[ReadingProgressResponse])
async def get_progress(
    session: SessionContext = Depends(require_authenticated),
    service: BibleService = Depends(get_bible_service)
):
    """Where the caller stopped reading, or null"""
    return service.get_progress(session)


@router.put("/progress", response_model=SaveProgressResponse)
async def save_progress(
    progress: ReadingProgress,
    session: SessionContext = Depends(require_authenticated),
    service: BibleService = Depends(get_bible_service)
):
    return service.save_progress(session, progress)
