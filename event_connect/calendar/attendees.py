from typing import Iterable

from event_connect.calendar.types import Attendee, AttendeeResolution
from event_connect.directory.client import DirectoryClient
from event_connect.directory.errors import DirectoryError
from event_connect.observability.logger import log_warning


def resolve_attendees(directory: DirectoryClient, recipients: Iterable[str]) -> AttendeeResolution:
    """
    Resolve each recipient's display name through the directory.

    A recipient that fails to resolve is skipped and recorded with its
    reason; the remaining recipients are still processed.
    """
    resolution = AttendeeResolution()
    for email in recipients:
        try:
            profile = directory.lookup_user(email)
        except DirectoryError as exc:
            resolution.skipped.append((email, exc.kind.value))
            continue
        except Exception as exc:
            resolution.skipped.append((email, type(exc).__name__))
            continue

        resolution.attendees.append(Attendee(email=email, name=profile.display_name, type="required"))

    if resolution.skipped:
        log_warning(
            "Skipped attendees that could not be resolved",
            {"skipped_count": len(resolution.skipped), "reasons": sorted({reason for _, reason in resolution.skipped})},
        )

    return resolution
