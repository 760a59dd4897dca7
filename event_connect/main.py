import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request

load_dotenv()

from event_connect.auth.identity import ReauthenticationRequired
from event_connect.core.config import load_config
from event_connect.routes.auth import router as auth_router
from event_connect.routes.health import router as health_router
from event_connect.routes.home import router as home_router

logger = logging.getLogger("event_connect")
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Event Connect")
app.add_middleware(SessionMiddleware, secret_key=load_config().session_secret, same_site="lax")


@app.exception_handler(ReauthenticationRequired)
async def _reauthenticate(request: Request, exc: ReauthenticationRequired):
    logger.info("Re-authentication required: %s", exc)
    return RedirectResponse(url="/auth/login", status_code=303)


# Routes
app.include_router(home_router, tags=["home"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(health_router, tags=["health"])


def run() -> None:
    """Serve the app with uvicorn on HOST:PORT."""
    import uvicorn

    config = load_config()
    uvicorn.run("event_connect.main:app", host=config.host, port=config.port, log_level="info")


if __name__ == "__main__":
    run()
