from typing import Optional

import httpx
from pydantic import ValidationError

from event_connect.calendar.types import EventRecord
from event_connect.core.config import load_config


class EventSourceError(Exception):
    """The event API could not return a usable event."""


class EventSourceClient:
    """Client for the third-party event API (GET /api/Events/{id})."""

    def __init__(self, api_key: Optional[str], base_url: str, timeout: float = 5.0):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get_event(self, event_id: str) -> EventRecord:
        url = f"{self.base_url}/api/Events/{event_id}"
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise EventSourceError(f"Event API request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise EventSourceError(f"Event API returned {response.status_code} for event {event_id}")

        try:
            payload = response.json()
            return EventRecord.model_validate(payload)
        except (ValueError, ValidationError) as exc:
            raise EventSourceError(f"Malformed event payload for event {event_id}: {exc}") from exc


def create_event_source_client() -> EventSourceClient:
    """Factory function to create EventSourceClient from environment variables."""
    config = load_config()
    return EventSourceClient(
        api_key=config.event_api_key,
        base_url=config.event_api_base_url,
        timeout=config.event_api_timeout,
    )
