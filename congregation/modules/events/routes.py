from fastapi import APIRouter, Depends
from congregation.modules.events.schemas import (
    EventCreate, EventUpdate, EventResponse, RsvpRequest, RsvpResponse
)
from congregation.modules.events.service import EventService
from congregation.core.dependencies import get_session, require_admin
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway
from typing import List

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(gateway: DataGateway = Depends(get_gateway)) -> EventService:
    return EventService(gateway)


@router.get("", response_model=List[EventResponse])
async def list_events(
    session: SessionContext = Depends(get_session),
    service: EventService = Depends(get_event_service)
):
    """Events and announcements, soonest first, with your RSVP"""
    return service.list_events(session)


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    event_data: EventCreate,
    session: SessionContext = Depends(require_admin),
    service: EventService = Depends(get_event_service)
):
    return service.create_event(event_data)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    session: SessionContext = Depends(require_admin),
    service: EventService = Depends(get_event_service)
):
    return service.update_event(event_id, event_data)


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: str,
    session: SessionContext = Depends(require_admin),
    service: EventService = Depends(get_event_service)
):
    service.delete_event(event_id)
    return None


@router.put("/{event_id}/rsvp", response_model=RsvpResponse)
async def submit_rsvp(
    event_id: str,
    rsvp: RsvpRequest,
    session: SessionContext = Depends(get_session),
    service: EventService = Depends(get_event_service)
):
    """RSVP Yes, No or Maybe; answering again replaces the previous answer"""
    return service.submit_rsvp(session, event_id, rsvp.status)
