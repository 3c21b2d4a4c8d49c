import logging
import re
from typing import List, Optional

from fastapi import HTTPException

from congregation.core.errors import raise_http_error
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.sermons.schemas import SermonCreate, SermonUpdate, SermonResponse

logger = logging.getLogger(__name__)

_YOUTUBE_URL = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=|shorts/)([^#&?]*).*")


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """11-character YouTube video id for any common YouTube URL shape, else None."""
    if not url:
        return None
    match = _YOUTUBE_URL.match(url)
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def _to_response(row: dict) -> SermonResponse:
    return SermonResponse(**{**row, "youtube_id": extract_youtube_id(row.get("video_url"))})


class SermonService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    def list_sermons(self, limit: Optional[int] = None) -> List[SermonResponse]:
        """Sermons, most recently preached first"""
        query = self.gateway.table("sermons").select("*").order("date_preached", desc=True)
        if limit:
            query = query.limit(limit)
        try:
            result = self.gateway.execute(query, "List sermons")
        except GatewayError as e:
            raise_http_error(e, "List sermons")
        return [_to_response(row) for row in result.data or []]

    def latest_sermon(self) -> Optional[SermonResponse]:
        try:
            result = self.gateway.execute(
                self.gateway.table("sermons").select("*").order("created_at", desc=True).limit(1),
                "Latest sermon"
            )
        except GatewayError as e:
            logger.warning(f"Could not load latest sermon: {e.message}")
            return None
        return _to_response(result.data[0]) if result.data else None

    def create_sermon(self, sermon_data: SermonCreate) -> SermonResponse:
        try:
            result = self.gateway.execute(
                self.gateway.table("sermons").insert(sermon_data.model_dump(mode="json")),
                "Save sermon"
            )
        except GatewayError as e:
            raise_http_error(e, "Save sermon")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save sermon")
        return _to_response(result.data[0])

    def update_sermon(self, sermon_id: str, sermon_data: SermonUpdate) -> SermonResponse:
        update_data = sermon_data.model_dump(exclude_none=True, mode="json")
        if not update_data:
            raise HTTPException(status_code=400, detail="Nothing to update")
        try:
            result = self.gateway.execute(
                self.gateway.table("sermons").update(update_data).eq("id", sermon_id),
                "Save sermon"
            )
        except GatewayError as e:
            raise_http_error(e, "Save sermon")
        if not result.data:
            raise HTTPException(status_code=404, detail="Sermon not found")
        return _to_response(result.data[0])

    def delete_sermon(self, sermon_id: str) -> bool:
        try:
            result = self.gateway.execute(
                self.gateway.table("sermons").delete().eq("id", sermon_id),
                "Delete sermon"
            )
        except GatewayError as e:
            raise_http_error(e, "Delete sermon")
        if not result.data:
            raise HTTPException(status_code=404, detail="Sermon not found")
        return True
