"""
Signed-in principal and delegated token handling.

The session cookie only carries the user's claims and an opaque session id;
access tokens live in a process-local TTL cache keyed by that id so they
expire together with the token issued by the identity provider.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from starlette.requests import Request

from event_connect.utils.cache import TTLCache


SESSION_ID_KEY = "sid"
SESSION_USER_KEY = "user"

token_store = TTLCache(default_ttl_seconds=3600)


class ReauthenticationRequired(Exception):
    """Raised when the delegated token is missing or rejected by the directory."""


@dataclass(frozen=True)
class IdentityContext:
    email: str
    name: Optional[str]
    access_token: str


def sign_in(request: Request, email: str, name: Optional[str], access_token: str, expires_in: int) -> IdentityContext:
    """
    Attach a freshly acquired token to the current session.

    Any token held under the session's previous id is dropped, and expired
    tokens from abandoned sessions are purged from the store.
    """
    previous_id = request.session.get(SESSION_ID_KEY)
    if previous_id:
        token_store.delete(previous_id)
    token_store.cleanup_expired()

    session_id = uuid.uuid4().hex
    token_store.set(session_id, access_token, ttl_seconds=expires_in)
    request.session[SESSION_ID_KEY] = session_id
    request.session[SESSION_USER_KEY] = {"email": email, "name": name}
    return IdentityContext(email=email, name=name, access_token=access_token)


def sign_out(request: Request) -> None:
    session_id = request.session.get(SESSION_ID_KEY)
    if session_id:
        token_store.delete(session_id)
    request.session.clear()


def current_identity(request: Request) -> Optional[IdentityContext]:
    """Return the signed-in principal, or None when the session has no live token."""
    user = request.session.get(SESSION_USER_KEY)
    session_id = request.session.get(SESSION_ID_KEY)
    if not user or not session_id:
        return None

    access_token = token_store.get(session_id)
    if access_token is None:
        return None

    return IdentityContext(email=user.get("email", ""), name=user.get("name"), access_token=access_token)


def require_identity(request: Request) -> IdentityContext:
    identity = current_identity(request)
    if identity is None:
        raise ReauthenticationRequired("Caller needs to authenticate.")
    return identity
