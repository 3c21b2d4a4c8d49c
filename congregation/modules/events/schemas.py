from enum import Enum
from pydantic import BaseModel
from typing import Optional
import datetime as dt


class EventType(str, Enum):
    EVENT = "EVENT"
    ANNOUNCEMENT = "ANNOUNCEMENT"


class RsvpStatus(str, Enum):
    YES = "Yes"
    NO = "No"
    MAYBE = "Maybe"
    NONE = "None"


class EventCreate(BaseModel):
    title: str
    date: dt.date
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    type: EventType = EventType.EVENT


class EventUpdate(BaseModel):
    title: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    type: Optional[EventType] = None


class EventResponse(BaseModel):
    id: str
    title: str
    date: dt.date
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    type: EventType = EventType.EVENT
    created_at: Optional[dt.datetime] = None
    rsvp_status: RsvpStatus = RsvpStatus.NONE

    class Config:
        from_attributes = True


class RsvpRequest(BaseModel):
    status: RsvpStatus


class RsvpResponse(BaseModel):
    event_id: str
    user_id: str
    status: RsvpStatus
