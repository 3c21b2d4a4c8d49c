import datetime as dt
import logging
from typing import Dict, List

from fastapi import HTTPException

from congregation.core.errors import raise_http_error
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.events.schemas import (
    EventCreate, EventUpdate, EventResponse, RsvpStatus, RsvpResponse
)

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    def list_events(self, session: SessionContext) -> List[EventResponse]:
        """Events by date with the caller's RSVP merged in"""
        try:
            result = self.gateway.execute(
                self.gateway.table("events").select("*").order("date"),
                "List events"
            )
        except GatewayError as e:
            raise_http_error(e, "List events")
        rsvps = self._my_rsvps(session)
        return [
            EventResponse(**event, rsvp_status=rsvps.get(event["id"], RsvpStatus.NONE))
            for event in result.data or []
        ]

    def upcoming_events(self, limit: int = 3) -> List[EventResponse]:
        today = dt.date.today().isoformat()
        try:
            result = self.gateway.execute(
                self.gateway.table("events").select("*").gte("date", today).order("date").limit(limit),
                "Upcoming events"
            )
        except GatewayError as e:
            logger.warning(f"Could not load upcoming events: {e.message}")
            return []
        return [EventResponse(**event) for event in result.data or []]

    def submit_rsvp(self, session: SessionContext, event_id: str, status: RsvpStatus) -> RsvpResponse:
        """Record the caller's RSVP; one answer per member and event"""
        if not session.is_authenticated:
            raise HTTPException(status_code=401, detail="Please login to RSVP.")
        if status == RsvpStatus.NONE:
            raise HTTPException(status_code=400, detail="Choose Yes, No or Maybe")
        try:
            self.gateway.execute(
                self.gateway.table("event_rsvps").upsert(
                    {"event_id": event_id, "user_id": session.user_id, "status": status.value},
                    on_conflict="event_id,user_id"
                ),
                "Submit RSVP"
            )
        except GatewayError as e:
            raise_http_error(e, "Submit RSVP")
        return RsvpResponse(event_id=event_id, user_id=session.user_id, status=status)

    def create_event(self, event_data: EventCreate) -> EventResponse:
        try:
            result = self.gateway.execute(
                self.gateway.table("events").insert(event_data.model_dump(mode="json")),
                "Create event"
            )
        except GatewayError as e:
            raise_http_error(e, "Create event")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create event")
        return EventResponse(**result.data[0])

    def update_event(self, event_id: str, event_data: EventUpdate) -> EventResponse:
        update_data = event_data.model_dump(exclude_none=True, mode="json")
        if not update_data:
            raise HTTPException(status_code=400, detail="Nothing to update")
        try:
            result = self.gateway.execute(
                self.gateway.table("events").update(update_data).eq("id", event_id),
                "Update event"
            )
        except GatewayError as e:
            raise_http_error(e, "Update event")
        if not result.data:
            raise HTTPException(status_code=404, detail="Event not found")
        return EventResponse(**result.data[0])

    def delete_event(self, event_id: str) -> bool:
        try:
            result = self.gateway.execute(
                self.gateway.table("events").delete().eq("id", event_id),
                "Delete event"
            )
        except GatewayError as e:
            raise_http_error(e, "Delete event")
        if not result.data:
            raise HTTPException(status_code=404, detail="Event not found")
        return True

    def _my_rsvps(self, session: SessionContext) -> Dict[str, RsvpStatus]:
        if not session.is_authenticated:
            return {}
        try:
            result = self.gateway.execute(
                self.gateway.table("event_rsvps").select("event_id, status").eq("user_id", session.user_id),
                "Load RSVPs"
            )
        except GatewayError as e:
            logger.warning(f"Could not load RSVPs for {session.user_id}: {e.message}")
            return {}
        return {row["event_id"]: RsvpStatus(row["status"]) for row in result.data or []}
