from enum import Enum
from pydantic import BaseModel
from typing import List, Optional
import datetime as dt


class TrackType(str, Enum):
    MUSIC = "MUSIC"
    PODCAST = "PODCAST"


class TrackCreate(BaseModel):
    title: str
    artist: str
    url: str
    duration: Optional[str] = None
    type: TrackType = TrackType.MUSIC


class TrackResponse(BaseModel):
    id: str
    title: str
    artist: str
    url: str
    duration: Optional[str] = None
    type: TrackType = TrackType.MUSIC

    class Config:
        from_attributes = True


class PlaylistCreate(BaseModel):
    title: str


class PlaylistTrackAdd(BaseModel):
    track_id: str


class PlaylistResponse(BaseModel):
    id: str
    title: str
    user_id: str
    tracks: List[TrackResponse] = []
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
