from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


GRAPH_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


class EventRecord(BaseModel):
    """Event metadata as returned by the event API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    start_time: datetime = Field(alias="startTime")


class Attendee(BaseModel):
    email: str  # not syntax-checked; directory lookup is the only gate
    name: Optional[str] = None
    type: Literal["required", "optional", "resource"] = "required"

    def to_graph(self) -> Dict[str, Any]:
        return {
            "emailAddress": {"address": self.email, "name": self.name},
            "type": self.type,
        }


class DateTimeTimeZone(BaseModel):
    date_time: str  # wall-clock "YYYY-MM-DDTHH:MM:SS"
    time_zone: str

    @classmethod
    def from_datetime(cls, value: datetime, time_zone: str) -> "DateTimeTimeZone":
        return cls(date_time=value.strftime(GRAPH_DATETIME_FORMAT), time_zone=time_zone)

    def to_graph(self) -> Dict[str, str]:
        return {"dateTime": self.date_time, "timeZone": self.time_zone}


class CalendarEvent(BaseModel):
    subject: str
    body: str
    start: DateTimeTimeZone
    end: DateTimeTimeZone
    attendees: List[Attendee] = []
    allow_new_time_proposals: bool = True

    def to_graph(self) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "body": {"contentType": "HTML", "content": self.body},
            "start": self.start.to_graph(),
            "end": self.end.to_graph(),
            "attendees": [a.to_graph() for a in self.attendees],
            "allowNewTimeProposals": self.allow_new_time_proposals,
        }


class AttendeeResolution(BaseModel):
    attendees: List[Attendee] = []
    skipped: List[Tuple[str, str]] = []  # (email, reason)
