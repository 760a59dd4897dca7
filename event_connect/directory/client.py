from typing import Any, Dict, Optional, Protocol

from event_connect.calendar.types import CalendarEvent
from event_connect.directory.types import MailMessage, Profile


class DirectoryClient(Protocol):
    """
    Directory operations the workflows depend on.

    Failures are raised as DirectoryError carrying a DirectoryErrorKind.
    """

    def get_profile(self, email: str) -> Profile:
        ...

    def lookup_user(self, email: str) -> Profile:
        ...

    def get_photo(self, email: str) -> Optional[bytes]:
        ...

    def get_me(self) -> Profile:
        ...

    def get_my_photo(self) -> Optional[bytes]:
        ...

    def send_mail(self, message: MailMessage) -> None:
        ...

    def create_event(self, event: CalendarEvent, timezone_name: str) -> Dict[str, Any]:
        ...
