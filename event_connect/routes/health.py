import os
from typing import Dict, Any, Optional
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from event_connect.core.config import load_config
from event_connect.observability.logger import init_sentry, _utc_timestamp

router = APIRouter()

# Last workflow run, reported by /healthz
_last_run: Optional[Dict[str, Any]] = None


def update_last_run(
    workflow: str,
    recipients_count: int,
    success: bool = True,
    error: Optional[str] = None,
    **details: Any,
) -> None:
    """
    Record the outcome of the most recent workflow run.

    Args:
        workflow: The workflow that ran ('send_mail' or 'create_event')
        recipients_count: Number of recipients requested
        success: Whether the workflow succeeded
        error: Optional error summary
        **details: Additional non-PII fields to expose
    """
    global _last_run

    _last_run = {
        "time": _utc_timestamp(),
        "workflow": workflow,
        "recipients_count": recipients_count,
        "success": success,
    }
    _last_run.update(details)

    if error is not None:
        _last_run["error"] = error


def get_last_run() -> Optional[Dict[str, Any]]:
    return _last_run


@router.get("/healthz")
async def health_check() -> JSONResponse:
    """Health check with last workflow run and observability status."""
    response = {
        "status": "ok",
        "timestamp": _utc_timestamp(),
    }

    last_run = get_last_run()
    if last_run:
        response["last_run"] = last_run

    obs_enabled = os.getenv("OBS_ENABLED", "false").lower() == "true"
    response["observability"] = {
        "enabled": obs_enabled,
        "sentry_configured": bool(os.getenv("SENTRY_DSN")),
    }

    return JSONResponse(status_code=200, content=response)


@router.get("/healthz/ready")
async def readiness_check() -> JSONResponse:
    """
    Readiness check for container orchestration.

    Identity configuration is required; a missing event API key only means
    every created event falls back to the default event.
    """
    config = load_config()
    identity_ok = bool(config.ms_client_id and config.ms_client_secret)
    checks = {
        "identity": "ok" if identity_ok else "missing_config",
        "event_api": "ok" if config.event_api_key else "fallback_only",
    }

    response = {
        "status": "ready" if identity_ok else "not_ready",
        "timestamp": _utc_timestamp(),
        "checks": checks,
    }

    return JSONResponse(status_code=200 if identity_ok else 503, content=response)


@router.get("/healthz/live")
async def liveness_check() -> JSONResponse:
    return JSONResponse(status_code=200, content={"status": "alive", "timestamp": _utc_timestamp()})


# Initialize Sentry on module import if enabled
init_sentry()
