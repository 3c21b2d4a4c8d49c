from pydantic import BaseModel
from typing import Optional
import datetime as dt


class SermonCreate(BaseModel):
    title: str
    preacher: str
    date_preached: dt.date
    duration: Optional[str] = None
    video_url: str
    thumbnail_url: Optional[str] = None


class SermonUpdate(BaseModel):
    title: Optional[str] = None
    preacher: Optional[str] = None
    date_preached: Optional[dt.date] = None
    duration: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None


class SermonResponse(BaseModel):
    id: str
    title: str
    preacher: str
    date_preached: dt.date
    duration: Optional[str] = None
    video_url: str
    thumbnail_url: Optional[str] = None
    youtube_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
