from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.requests import Request

from event_connect.auth.identity import IdentityContext, ReauthenticationRequired
from event_connect.core.config import load_config
from event_connect.directory.client import DirectoryClient
from event_connect.directory.errors import DirectoryError, DirectoryErrorKind
from event_connect.directory.graph_client import create_directory_client
from event_connect.events.source import EventSourceClient
from event_connect.observability.logger import log_error
from event_connect.rendering.renderer import templates
from event_connect.routes.deps import get_directory_client, get_event_source, get_optional_identity
from event_connect.routes.health import update_last_run
from event_connect.services.calendar_workflow import CalendarEventWorkflow
from event_connect.services.mail_workflow import MailWorkflow
from event_connect.services.profile_view import ProfileView
from event_connect.services.recipients import parse_recipients


router = APIRouter()

RECIPIENTS_REQUIRED = "Please add a valid email address to the recipients list!"
MAIL_SENT = "Success! Your mail was sent."
EVENT_CREATED = "Success! Your calendar event was created."
EVENT_FAILED = "Sorry, the calendar event could not be created."
GENERIC_ERROR = "Something went wrong while talking to the directory. Please try again."


def _flash(request: Request, message: str) -> None:
    request.session["message"] = message


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


def _redirect_error() -> RedirectResponse:
    return RedirectResponse(url="/error", status_code=303)


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    email: Optional[str] = Query(None, description="User to look up; defaults to the signed-in user"),
    identity: Optional[IdentityContext] = Depends(get_optional_identity),
):
    """Home page; shows a directory profile and photo when signed in."""
    context = {
        "identity": identity,
        "message": request.session.pop("message", None),
        "email": None,
        "response": None,
        "picture": None,
    }

    if identity is not None:
        lookup_email = email or identity.email
        view = ProfileView(create_directory_client(identity)).load(lookup_email)
        context.update(email=view.email, response=view.profile_json, picture=view.picture)

    return templates.TemplateResponse(request, "index.html", context)


@router.post("/send-email")
def send_email(
    request: Request,
    recipients: Optional[str] = Form(None),
    directory: DirectoryClient = Depends(get_directory_client),
):
    if not recipients:
        _flash(request, RECIPIENTS_REQUIRED)
        return _redirect_home()

    config = load_config()
    try:
        MailWorkflow(directory, subject=config.mail_subject).send_mail(recipients)
    except DirectoryError as exc:
        if exc.kind is DirectoryErrorKind.TOKEN_EXPIRED:
            raise ReauthenticationRequired(exc.message or exc.code) from exc
        log_error(exc, {"action": "send_mail", "code": exc.code, "kind": exc.kind.value})
        update_last_run("send_mail", len(parse_recipients(recipients)), success=False, error=exc.kind.value)
        return _redirect_error()

    update_last_run("send_mail", len(parse_recipients(recipients)))
    _flash(request, MAIL_SENT)
    return _redirect_home()


@router.post("/create-event")
def create_event(
    request: Request,
    recipients: Optional[str] = Form(None),
    event_id: Optional[str] = Form(None),
    directory: DirectoryClient = Depends(get_directory_client),
    event_source: EventSourceClient = Depends(get_event_source),
):
    if not recipients:
        _flash(request, RECIPIENTS_REQUIRED)
        return _redirect_home()

    config = load_config()
    workflow = CalendarEventWorkflow(
        directory,
        event_source,
        default_event_id=config.default_event_id,
        duration=timedelta(minutes=config.event_duration_minutes),
        fallback_timezone=config.fallback_timezone,
    )
    created = workflow.create_event(recipients, event_id or None)

    update_last_run("create_event", len(parse_recipients(recipients)), success=created)
    _flash(request, EVENT_CREATED if created else EVENT_FAILED)
    return _redirect_home()


@router.get("/error", response_class=HTMLResponse)
def error_page(request: Request):
    # Provider messages are logged, never rendered
    return templates.TemplateResponse(request, "error.html", {"message": GENERIC_ERROR})


@router.get("/privacy", response_class=HTMLResponse)
def privacy(request: Request):
    return templates.TemplateResponse(request, "privacy.html", {})
