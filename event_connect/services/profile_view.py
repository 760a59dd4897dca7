import base64
import json
from dataclasses import dataclass
from typing import Optional

from event_connect.auth.identity import ReauthenticationRequired
from event_connect.directory.client import DirectoryClient
from event_connect.directory.errors import DirectoryError, DirectoryErrorKind, MISSING_PHOTO_KINDS
from event_connect.observability.logger import log_error


PLACEHOLDER_IMAGE = (
    "data:image/svg+xml;base64,"
    "PHN2ZyB4bWxucz0iaHR0cDovL3d3dy53My5vcmcvMjAwMC9zdmciIHdpZHRoPSI5NiIgaGVpZ2h0PSI5NiIgdmlld0JveD0iMCAw"
    "IDk2IDk2Ij48cmVjdCB3aWR0aD0iOTYiIGhlaWdodD0iOTYiIGZpbGw9IiNFNEU2RTciLz48Y2lyY2xlIGN4PSI0OCIgY3k9IjM4"
    "IiByPSIxOCIgZmlsbD0iI0FFQjRCNyIvPjxwYXRoIGQ9Ik0xNiA5MmMyLTE4IDE2LTMwIDMyLTMwczMwIDEyIDMyIDMweiIgZmls"
    "bD0iI0FFQjRCNyIvPjwvc3ZnPg=="
)


def _message_json(message: str) -> str:
    return json.dumps({"Message": message}, indent=2)


@dataclass
class ProfileViewResult:
    email: Optional[str]
    profile_json: str
    picture: Optional[str]


class ProfileView:
    """Loads a user's profile and photo for display, turning directory errors into messages."""

    def __init__(self, directory: DirectoryClient):
        self.directory = directory

    def profile_json(self, email: Optional[str]) -> str:
        if email is None:
            return _message_json("Email address cannot be null.")

        try:
            profile = self.directory.get_profile(email)
        except DirectoryError as exc:
            if exc.kind is DirectoryErrorKind.NOT_FOUND:
                return _message_json(f"User '{email}' was not found.")
            if exc.kind is DirectoryErrorKind.INVALID_USER:
                return _message_json(f"The requested user '{email}' is invalid.")
            if exc.kind is DirectoryErrorKind.AUTHENTICATION_FAILED:
                return _message_json(exc.message or "Authentication failed.")
            if exc.kind is DirectoryErrorKind.TOKEN_EXPIRED:
                raise ReauthenticationRequired(exc.message or exc.code) from exc
            log_error(exc, {"action": "get_profile", "code": exc.code})
            return _message_json("An unknown error has occurred.")

        return json.dumps(profile.raw, indent=2)

    def picture(self, email: Optional[str]) -> Optional[str]:
        """Photo as a data URI; the placeholder when the user has none, None when it could not be loaded."""
        if email is None:
            return None

        try:
            photo = self.directory.get_photo(email)
        except DirectoryError as exc:
            if exc.kind in MISSING_PHOTO_KINDS:
                return PLACEHOLDER_IMAGE
            if exc.kind is DirectoryErrorKind.TOKEN_EXPIRED:
                raise ReauthenticationRequired(exc.message or exc.code) from exc
            log_error(exc, {"action": "get_photo", "code": exc.code})
            return None

        if not photo:
            return PLACEHOLDER_IMAGE
        return "data:image/jpeg;base64," + base64.b64encode(photo).decode("ascii")

    def load(self, email: Optional[str]) -> ProfileViewResult:
        return ProfileViewResult(email=email, profile_json=self.profile_json(email), picture=self.picture(email))
