from typing import Any, Dict

import msal
from fastapi import HTTPException

from event_connect.core.config import AppConfig


def build_msal_app(config: AppConfig) -> msal.ConfidentialClientApplication:
    """Create the MSAL confidential client used for the authorization-code flow."""
    if not config.ms_client_id or not config.ms_client_secret:
        raise HTTPException(
            status_code=503,
            detail="Identity configuration missing: MS_CLIENT_ID and MS_CLIENT_SECRET required"
        )

    return msal.ConfidentialClientApplication(
        client_id=config.ms_client_id,
        client_credential=config.ms_client_secret,
        authority=f"https://login.microsoftonline.com/{config.ms_tenant_id}",
        timeout=10,
    )


def start_auth_code_flow(config: AppConfig) -> Dict[str, Any]:
    app = build_msal_app(config)
    return app.initiate_auth_code_flow(config.ms_scopes, redirect_uri=config.ms_redirect_uri)


def complete_auth_code_flow(config: AppConfig, flow: Dict[str, Any], auth_response: Dict[str, str]) -> Dict[str, Any]:
    """
    Redeem the authorization response for tokens.

    Returns the MSAL result dict; it carries an "error" key when redemption failed.
    """
    app = build_msal_app(config)
    try:
        return app.acquire_token_by_auth_code_flow(flow, auth_response)
    except ValueError as exc:
        # MSAL raises ValueError on state mismatch or a replayed response
        return {"error": "invalid_auth_response", "error_description": str(exc)}
