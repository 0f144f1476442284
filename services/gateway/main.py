"""
GLPI Bridge Gateway
Opens GLPI sessions and serves simplified user and ticket listings
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.schemas.ticket import FormattedTicket
from shared.schemas.user import FormattedUser

from . import config
from .client import GLPIClient
from .errors import NotFoundError, UpstreamError, ValidationError, require
from .pipeline import collect_tickets, collect_users, session_credentials

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the GLPI client on startup"""
    logger.info("Starting GLPI Bridge", glpi_url=config.GLPI_URL, verify_tls=config.GLPI_VERIFY_TLS)
    app.state.glpi_client = GLPIClient(
        config.GLPI_URL,
        user_token=config.USER_TOKEN,
        verify_tls=config.GLPI_VERIFY_TLS,
        timeout=config.GLPI_TIMEOUT,
        max_pages=config.GLPI_MAX_PAGES,
    )
    yield
    await app.state.glpi_client.close()
    logger.info("Shutting down GLPI Bridge")


app = FastAPI(
    title="GLPI Bridge",
    description="Simplified GLPI users and tickets for client apps",
    version="0.1.0",
    lifespan=lifespan,
)


class InitSessionRequest(BaseModel):
    """Credentials forwarded to GLPI /initSession"""
    Authorization: Optional[str] = None
    AppToken: Optional[str] = None


class SessionRequest(BaseModel):
    """Tokens of an already opened GLPI session"""
    sessionToken: Optional[str] = None
    AppToken: Optional[str] = None


class InitSessionResponse(BaseModel):
    message: str
    sessionToken: str


def _message(status_code: int, message: str, error=None) -> JSONResponse:
    content = {"message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


@app.get("/health")
async def health_check():
    """Check that GLPI is reachable"""
    glpi_ok = await app.state.glpi_client.check_health()
    return {
        "status": "healthy" if glpi_ok else "degraded",
        "glpi_reachable": glpi_ok,
        "glpi_url": config.GLPI_URL,
    }


@app.post("/initSession", response_model=InitSessionResponse)
async def init_session(request: InitSessionRequest):
    """Open a GLPI session with a user's Authorization header and App-Token"""
    try:
        require(bool(request.Authorization) and bool(request.AppToken),
                "Authorization e App-Token são necessários")
        token = await app.state.glpi_client.init_session(request.Authorization, request.AppToken)
    except ValidationError as e:
        return _message(400, str(e))
    except UpstreamError as e:
        logger.error("Failed to open session", error=e.payload)
        return _message(500, "Erro ao iniciar sessão", e.payload)

    return InitSessionResponse(message="Sessão iniciada com sucesso", sessionToken=token)


@app.post("/users", response_model=list[FormattedUser])
async def list_users(request: SessionRequest):
    """All GLPI users with name, surname and email, sorted by name"""
    try:
        credentials = session_credentials(request.sessionToken, request.AppToken)
        return await collect_users(app.state.glpi_client, credentials)
    except ValidationError as e:
        return _message(400, str(e))
    except NotFoundError as e:
        return _message(404, str(e))
    except UpstreamError as e:
        logger.error("Failed to list users", error=e.payload)
        return _message(500, "Erro ao buscar dados dos usuários", e.payload)


@app.post("/tickets", response_model=list[FormattedTicket])
async def list_tickets(request: SessionRequest):
    """All GLPI tickets with decoded status and author name, newest first"""
    try:
        credentials = session_credentials(request.sessionToken, request.AppToken)
        return await collect_tickets(
            app.state.glpi_client,
            credentials,
            concurrency=config.GLPI_AUTHOR_CONCURRENCY,
        )
    except ValidationError as e:
        return _message(400, str(e))
    except NotFoundError as e:
        return _message(404, str(e))
    except UpstreamError as e:
        logger.error("Failed to list tickets", error=e.payload)
        return _message(500, "Erro ao buscar dados dos tickets", e.payload)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
