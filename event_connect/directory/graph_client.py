from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from event_connect.auth.identity import IdentityContext
from event_connect.calendar.types import CalendarEvent
from event_connect.core.config import load_config
from event_connect.directory.errors import DirectoryError, DirectoryErrorKind, error_from_response
from event_connect.directory.types import MailMessage, Profile


GRAPH_BETA_BASE_URL = "https://graph.microsoft.com/beta"


class GraphDirectoryClient:
    """Microsoft Graph client acting on behalf of the signed-in user (delegated token)."""

    def __init__(self, access_token: str, base_url: str = "https://graph.microsoft.com/v1.0", timeout: float = 15.0,
                 beta_base_url: str = GRAPH_BETA_BASE_URL):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.beta_base_url = beta_base_url.rstrip("/")
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        base_url: Optional[str] = None,
    ) -> httpx.Response:
        url = f"{base_url or self.base_url}{path}"
        request_headers = {"Authorization": f"Bearer {self.access_token}"}
        if json is not None:
            request_headers["Content-Type"] = "application/json"
        if headers:
            request_headers.update(headers)

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.request(method, url, headers=request_headers, json=json)
        except httpx.HTTPError as exc:
            raise DirectoryError(DirectoryErrorKind.UNKNOWN, code="TransportError", message=str(exc)) from exc

        if response.status_code >= 400:
            raise error_from_response(response)
        return response

    @staticmethod
    def _user_path(email: str) -> str:
        return f"/users/{quote(email, safe='@.')}"

    def get_profile(self, email: str) -> Profile:
        response = self._request("GET", self._user_path(email))
        return Profile.from_graph(response.json())

    def lookup_user(self, email: str) -> Profile:
        response = self._request("GET", f"{self._user_path(email)}?$select=displayName,mail,userPrincipalName")
        return Profile.from_graph(response.json())

    def get_me(self) -> Profile:
        response = self._request("GET", "/me")
        return Profile.from_graph(response.json())

    def _get_photo(self, owner_path: str) -> Optional[bytes]:
        path = f"{owner_path}/photo/$value"
        try:
            response = self._request("GET", path)
        except DirectoryError as exc:
            if exc.kind is not DirectoryErrorKind.PHOTO_UNSUPPORTED:
                raise
            # Personal accounts only serve photos from the beta endpoint
            response = self._request("GET", path, base_url=self.beta_base_url)
        return response.content or None

    def get_photo(self, email: str) -> Optional[bytes]:
        return self._get_photo(self._user_path(email))

    def get_my_photo(self) -> Optional[bytes]:
        return self._get_photo("/me")

    def send_mail(self, message: MailMessage) -> None:
        payload = {"message": message.to_graph(), "saveToSentItems": True}
        self._request("POST", "/me/sendMail", json=payload)

    def create_event(self, event: CalendarEvent, timezone_name: str) -> Dict[str, Any]:
        headers = {"Prefer": f'outlook.timezone="{timezone_name}"'}
        response = self._request("POST", "/me/events", json=event.to_graph(), headers=headers)
        try:
            return response.json()
        except ValueError:
            return {}


def create_directory_client(identity: IdentityContext) -> GraphDirectoryClient:
    """Factory function to create a GraphDirectoryClient for the signed-in user."""
    config = load_config()
    return GraphDirectoryClient(
        access_token=identity.access_token,
        base_url=config.graph_base_url,
        timeout=config.graph_timeout,
    )
