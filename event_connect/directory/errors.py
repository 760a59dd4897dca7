from enum import Enum
from typing import Optional

import httpx


class DirectoryErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_USER = "invalid_user"
    AUTHENTICATION_FAILED = "authentication_failed"
    TOKEN_EXPIRED = "token_expired"
    PHOTO_UNSUPPORTED = "photo_unsupported"
    UNKNOWN = "unknown"


_KIND_BY_CODE = {
    "Request_ResourceNotFound": DirectoryErrorKind.NOT_FOUND,
    "ResourceNotFound": DirectoryErrorKind.NOT_FOUND,
    "ErrorItemNotFound": DirectoryErrorKind.NOT_FOUND,
    "itemNotFound": DirectoryErrorKind.NOT_FOUND,
    "ImageNotFound": DirectoryErrorKind.NOT_FOUND,
    "ErrorInvalidUser": DirectoryErrorKind.INVALID_USER,
    "AuthenticationFailure": DirectoryErrorKind.AUTHENTICATION_FAILED,
    "TokenNotFound": DirectoryErrorKind.TOKEN_EXPIRED,
    "InvalidAuthenticationToken": DirectoryErrorKind.TOKEN_EXPIRED,
    "Caller needs to authenticate.": DirectoryErrorKind.TOKEN_EXPIRED,
    "GetUserPhoto": DirectoryErrorKind.PHOTO_UNSUPPORTED,
}

# Photo lookups treat an unknown or invalid user the same as a missing photo
MISSING_PHOTO_KINDS = frozenset({DirectoryErrorKind.NOT_FOUND, DirectoryErrorKind.INVALID_USER})


class DirectoryError(Exception):
    """A directory API call failed; `kind` is the closed classification of the provider code."""

    def __init__(self, kind: DirectoryErrorKind, code: str = "", message: str = "", status_code: Optional[int] = None):
        super().__init__(message or code or kind.value)
        self.kind = kind
        self.code = code
        self.message = message
        self.status_code = status_code


def classify_error_code(code: str, status_code: Optional[int] = None) -> DirectoryErrorKind:
    kind = _KIND_BY_CODE.get(code)
    if kind is not None:
        return kind
    if status_code == 401:
        return DirectoryErrorKind.TOKEN_EXPIRED
    if status_code == 404:
        return DirectoryErrorKind.NOT_FOUND
    return DirectoryErrorKind.UNKNOWN


def error_from_response(response: httpx.Response) -> DirectoryError:
    """Build a DirectoryError from a Graph error body ({"error": {"code", "message"}})."""
    code = ""
    message = ""
    try:
        error = response.json().get("error") or {}
        code = error.get("code") or ""
        message = error.get("message") or ""
    except (ValueError, AttributeError):
        message = response.text or ""

    return DirectoryError(
        kind=classify_error_code(code, response.status_code),
        code=code,
        message=message,
        status_code=response.status_code,
    )
