"""
GuildLog - FastAPI Application
==============================

FastAPI application factory and configuration.
"""

from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from guildlog import __version__
from guildlog.core.logger import logger
from guildlog.api.config import get_api_config
from guildlog.api.dependencies import set_bot
from guildlog.api.errors import APIError, ErrorCode, error_response
from guildlog.api.routers import auth_router, guilds_router, health_router
from guildlog.api.services.oauth import get_oauth_client


API_DESCRIPTION = """
## GuildLog Dashboard API

Configure which log categories are enabled per server and which channel
each category posts to.

### Authentication

Sign in at `/auth/discord`. The session is stored in an httponly cookie
and is also accepted as `Authorization: Bearer <token>`. Only servers
where you hold **Administrator** can be configured.

### Error Responses

```json
{
    "success": false,
    "error_code": "PERMISSION_DENIED",
    "message": "You do not have permission to manage this server",
    "details": null
}
```
"""

OPENAPI_TAGS = [
    {"name": "Health", "description": "Health check and status endpoints"},
    {"name": "Auth", "description": "Discord OAuth2 login and session"},
    {"name": "Guilds", "description": "Per-server logging configuration"},
]


# =============================================================================
# Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.tree("API Starting", [
        ("Version", __version__),
    ], emoji="🚀")

    yield

    logger.tree("API Stopping", [], emoji="🛑")
    await get_oauth_client().close()


# =============================================================================
# Application Factory
# =============================================================================

def create_app(bot: Optional[Any] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        bot: Optional Discord bot instance for dependency injection

    Returns:
        Configured FastAPI application
    """
    config = get_api_config()

    app = FastAPI(
        title="GuildLog API",
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
        openapi_url="/openapi.json" if config.debug else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    if bot:
        set_bot(bot)

    # ==========================================================================
    # Middleware
    # ==========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==========================================================================
    # Exception Handlers
    # ==========================================================================

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.debug("Request Validation Failed", [
            ("Path", str(request.url.path)[:50]),
            ("Errors", str(len(errors))),
        ])
        return error_response(ErrorCode.VALIDATION_ERROR, details={"errors": errors})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions with consistent error format."""
        logger.error("Unhandled API Error", [
            ("Path", str(request.url.path)[:50]),
            ("Method", request.method),
            ("Error Type", type(exc).__name__),
            ("Error", str(exc)[:100]),
        ])

        return error_response(
            ErrorCode.SERVER_ERROR,
            details={"path": str(request.url.path)} if config.debug else None,
        )

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(guilds_router)

    return app


__all__ = ["create_app"]
