from fastapi import APIRouter
from fastapi.responses import RedirectResponse
from starlette.requests import Request

from event_connect.auth.identity import sign_in, sign_out
from event_connect.auth.msal_flow import complete_auth_code_flow, start_auth_code_flow
from event_connect.core.config import load_config
from event_connect.observability.logger import log_info, log_warning


router = APIRouter()

AUTH_FLOW_KEY = "auth_flow"


@router.get("/login")
def login(request: Request):
    """Start the authorization-code flow with the identity provider."""
    flow = start_auth_code_flow(load_config())
    request.session[AUTH_FLOW_KEY] = flow
    return RedirectResponse(url=flow["auth_uri"], status_code=302)


@router.get("/callback")
def callback(request: Request):
    flow = request.session.pop(AUTH_FLOW_KEY, None)
    if not flow:
        log_warning("Auth callback without a pending flow")
        return RedirectResponse(url="/", status_code=302)

    result = complete_auth_code_flow(load_config(), flow, dict(request.query_params))
    if "error" in result or "access_token" not in result:
        log_warning("Sign-in failed", {"error": result.get("error", "missing_access_token")})
        return RedirectResponse(url="/error", status_code=302)

    claims = result.get("id_token_claims") or {}
    email = claims.get("preferred_username") or claims.get("email") or ""
    sign_in(
        request,
        email=email,
        name=claims.get("name"),
        access_token=result["access_token"],
        expires_in=int(result.get("expires_in", 3600)),
    )
    log_info("User signed in")
    return RedirectResponse(url="/", status_code=302)


@router.get("/logout")
def logout(request: Request):
    sign_out(request)
    return RedirectResponse(url="/", status_code=302)
