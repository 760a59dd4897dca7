from typing import Optional

from fastapi import Depends
from starlette.requests import Request

from event_connect.auth.identity import IdentityContext, current_identity, require_identity
from event_connect.directory.client import DirectoryClient
from event_connect.directory.graph_client import create_directory_client
from event_connect.events.source import EventSourceClient, create_event_source_client


def get_optional_identity(request: Request) -> Optional[IdentityContext]:
    return current_identity(request)


def get_identity(request: Request) -> IdentityContext:
    return require_identity(request)


def get_directory_client(identity: IdentityContext = Depends(get_identity)) -> DirectoryClient:
    return create_directory_client(identity)


def get_event_source() -> EventSourceClient:
    return create_event_source_client()
