import os
from typing import Optional

from pydantic import BaseModel


DEFAULT_GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_EVENT_API_BASE_URL = "https://api.infernocore.jolokia.com"
DEFAULT_SCOPES = ["User.Read", "User.ReadBasic.All", "Mail.Send", "Calendars.ReadWrite"]
DEFAULT_MAIL_SUBJECT = "Sent from the Microsoft Graph Connect sample"


class AppConfig(BaseModel):
    event_api_key: Optional[str] = None
    event_api_base_url: str = DEFAULT_EVENT_API_BASE_URL
    event_api_timeout: float = 5.0
    default_event_id: str = "248d8ea0-b518-493d-b9c1-0a9f3e4e94c7"
    event_duration_minutes: int = 60
    fallback_timezone: str = "Pacific Standard Time"
    graph_base_url: str = DEFAULT_GRAPH_BASE_URL
    graph_timeout: float = 15.0
    ms_tenant_id: str = "common"
    ms_client_id: Optional[str] = None
    ms_client_secret: Optional[str] = None
    ms_redirect_uri: str = "http://localhost:8000/auth/callback"
    ms_scopes: list[str] = DEFAULT_SCOPES
    session_secret: str = "dev-session-secret"
    mail_subject: str = DEFAULT_MAIL_SUBJECT
    host: str = "127.0.0.1"
    port: int = 8000


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def load_config() -> AppConfig:
    scopes_raw = os.getenv("MS_SCOPES", "")
    scopes = [s.strip() for s in scopes_raw.split(",") if s.strip()] or DEFAULT_SCOPES
    duration_str = os.getenv("EVENT_DURATION_MINUTES", "")
    duration = int(duration_str) if duration_str.isdigit() else 60
    port_str = os.getenv("PORT", "")
    return AppConfig(
        event_api_key=os.getenv("EVENT_API_KEY"),
        event_api_base_url=os.getenv("EVENT_API_BASE_URL", DEFAULT_EVENT_API_BASE_URL).rstrip("/"),
        event_api_timeout=_float_env("EVENT_API_TIMEOUT", 5.0),
        default_event_id=os.getenv("DEFAULT_EVENT_ID", "248d8ea0-b518-493d-b9c1-0a9f3e4e94c7"),
        event_duration_minutes=duration,
        fallback_timezone=os.getenv("FALLBACK_TIMEZONE", "Pacific Standard Time"),
        graph_base_url=os.getenv("GRAPH_BASE_URL", DEFAULT_GRAPH_BASE_URL).rstrip("/"),
        graph_timeout=_float_env("GRAPH_TIMEOUT", 15.0),
        ms_tenant_id=os.getenv("MS_TENANT_ID", "common"),
        ms_client_id=os.getenv("MS_CLIENT_ID"),
        ms_client_secret=os.getenv("MS_CLIENT_SECRET"),
        ms_redirect_uri=os.getenv("MS_REDIRECT_URI", "http://localhost:8000/auth/callback"),
        ms_scopes=scopes,
        session_secret=os.getenv("SESSION_SECRET", "dev-session-secret"),
        mail_subject=os.getenv("MAIL_SUBJECT", DEFAULT_MAIL_SUBJECT),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(port_str) if port_str.isdigit() else 8000,
    )
