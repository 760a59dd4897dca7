"""
Calendar event creation.

Builds a calendar event from the event API (or the default event when the
API cannot deliver), adds every recipient the directory can resolve as a
required attendee, and submits it for the signed-in user.
"""
from datetime import timedelta
from typing import Optional, Tuple

from event_connect.calendar.attendees import resolve_attendees
from event_connect.calendar.timezones import DEFAULT_TIMEZONE, resolve_timezone_name, to_wall_time
from event_connect.calendar.types import Attendee, CalendarEvent, DateTimeTimeZone, EventRecord
from event_connect.data.default_event import DEFAULT_EVENT, DEFAULT_EVENT_ID
from event_connect.directory.client import DirectoryClient
from event_connect.directory.types import Profile
from event_connect.events.source import EventSourceClient
from event_connect.observability.logger import log_error, log_event, log_warning, timing
from event_connect.services.recipients import parse_recipients


def build_default_event(me: Profile) -> CalendarEvent:
    """The fallback event, with the calling user as its only attendee."""
    return CalendarEvent(
        subject=DEFAULT_EVENT["subject"],
        body=DEFAULT_EVENT["body"],
        start=DateTimeTimeZone(date_time=DEFAULT_EVENT["start"], time_zone=DEFAULT_EVENT["time_zone"]),
        end=DateTimeTimeZone(date_time=DEFAULT_EVENT["end"], time_zone=DEFAULT_EVENT["time_zone"]),
        attendees=[
            Attendee(
                email=me.user_principal_name or me.mail or "",
                name=me.display_name,
                type="required",
            )
        ],
    )


def event_from_record(record: EventRecord, timezone_name: str, duration: timedelta) -> CalendarEvent:
    """Map an event API record to a calendar event ending `duration` after it starts."""
    start = to_wall_time(record.start_time, timezone_name)
    end = start + duration
    return CalendarEvent(
        subject=record.name,
        body=record.description or record.name,
        start=DateTimeTimeZone.from_datetime(start, timezone_name),
        end=DateTimeTimeZone.from_datetime(end, timezone_name),
        attendees=[],
    )


class CalendarEventWorkflow:
    def __init__(
        self,
        directory: DirectoryClient,
        event_source: EventSourceClient,
        default_event_id: str = DEFAULT_EVENT_ID,
        duration: timedelta = timedelta(minutes=60),
        fallback_timezone: str = DEFAULT_TIMEZONE,
    ):
        self.directory = directory
        self.event_source = event_source
        self.default_event_id = default_event_id
        self.duration = duration
        self.fallback_timezone = fallback_timezone

    def build_event(self, event_id: str, me: Profile) -> Tuple[CalendarEvent, str, str]:
        """
        Fetch and map the event, substituting the default event on any failure.

        Returns (event, timezone name, source) where source is 'event_api' or 'default'.
        """
        try:
            record = self.event_source.get_event(event_id)
            timezone_name = resolve_timezone_name(record.start_time, default=self.fallback_timezone)
            return event_from_record(record, timezone_name, self.duration), timezone_name, "event_api"
        except Exception as exc:
            log_warning(
                "Event API unavailable, using default event",
                {"event_id": event_id, "error_type": type(exc).__name__, "error": str(exc)},
            )
            return build_default_event(me), DEFAULT_EVENT["time_zone"], "default"

    def create_event(self, recipients: Optional[str], event_id: Optional[str] = None) -> bool:
        """
        Create the calendar event for `recipients` (semicolon-delimited).

        Returns True only when the directory accepted the event. Empty input
        returns False without any outbound call; every other failure is
        logged and reported as False.
        """
        if not recipients:
            log_warning("create_event called without recipients")
            return False

        event_id = event_id or self.default_event_id
        requested = parse_recipients(recipients)
        try:
            with timing() as t:
                me = self.directory.get_me()
                event, timezone_name, source = self.build_event(event_id, me)

                resolution = resolve_attendees(self.directory, requested)
                event.attendees.extend(resolution.attendees)

                self.directory.create_event(event, timezone_name)
        except Exception as exc:
            log_error(exc, {"action": "create_event", "event_id": event_id})
            return False

        log_event(
            action="created",
            workflow="create_event",
            subject=event.subject,
            recipients_count=len(requested),
            event_source=source,
            duration_ms=t.elapsed_ms,
            attendees_count=len(event.attendees),
            skipped_count=len(resolution.skipped),
            timezone=timezone_name,
        )
        return True
