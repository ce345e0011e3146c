"""
GuildLog - Auth Router
======================

Discord OAuth2 login, logout and the landing routes.
"""

import secrets
from typing import Optional

import aiohttp
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from guildlog.core.constants import SESSION_COOKIE_NAME
from guildlog.core.logger import logger
from guildlog.api.config import get_api_config
from guildlog.api.dependencies import get_session
from guildlog.api.errors import APIError, ErrorCode
from guildlog.api.models.auth import SessionPayload, SessionUser
from guildlog.api.models.base import APIResponse
from guildlog.api.services.auth import get_session_service
from guildlog.api.services.oauth import OAuthError, get_oauth_client


router = APIRouter(tags=["Auth"])

STATE_COOKIE_NAME = "guildlog_oauth_state"
STATE_MAX_AGE = 600


def _secure_cookies() -> bool:
    return get_api_config().callback_url.startswith("https://")


# =============================================================================
# Landing
# =============================================================================

@router.get("/")
async def index(session: Optional[SessionPayload] = Depends(get_session)):
    """Send signed-in admins to the dashboard; everyone else gets the login link."""
    if session is not None:
        return RedirectResponse("/dashboard", status_code=302)
    return APIResponse(
        success=True,
        message="Sign in with Discord to manage server logs",
        data={"authenticated": False, "login_url": "/auth/discord"},
    )


@router.get("/dashboard")
async def dashboard(session: Optional[SessionPayload] = Depends(get_session)):
    if session is None:
        return RedirectResponse("/", status_code=302)
    return APIResponse[SessionUser](
        success=True,
        data=SessionUser(
            id=str(session.sub),
            username=session.username,
            guilds=session.guilds,
            expires_at=session.exp,
        ),
    )


# =============================================================================
# OAuth2
# =============================================================================

@router.get("/auth/discord")
async def login() -> RedirectResponse:
    """Redirect to Discord's consent screen."""
    if not get_api_config().oauth_configured:
        raise APIError(ErrorCode.AUTH_OAUTH_NOT_CONFIGURED)

    state = secrets.token_urlsafe(16)
    response = RedirectResponse(get_oauth_client().authorize_url(state), status_code=302)
    response.set_cookie(
        STATE_COOKIE_NAME,
        state,
        max_age=STATE_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=_secure_cookies(),
    )
    return response


@router.get("/auth/discord/callback")
async def callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
) -> RedirectResponse:
    """
    Finish the OAuth2 flow and start a session.

    Any failure sends the browser back to "/" without a session.
    """
    failure = RedirectResponse("/", status_code=302)
    failure.delete_cookie(STATE_COOKIE_NAME)

    expected_state = request.cookies.get(STATE_COOKIE_NAME)
    if error or not code:
        logger.warning("OAuth Callback Rejected", [("Reason", error or "missing code")])
        return failure
    if not state or not expected_state or not secrets.compare_digest(state, expected_state):
        logger.warning("OAuth State Mismatch", [("Has Cookie", str(bool(expected_state)))])
        return failure

    client = get_oauth_client()
    try:
        access_token = await client.exchange_code(code)
        user = await client.fetch_user(access_token)
        guilds = await client.fetch_guilds(access_token)
    except OAuthError as e:
        logger.warning("OAuth Failed", [
            ("Step", e.step),
            ("Status", str(e.status)),
        ])
        return failure
    except (aiohttp.ClientError, TimeoutError) as e:
        logger.warning("OAuth Request Failed", [
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:100]),
        ])
        return failure

    token, _ = get_session_service().issue(user, guilds)

    response = RedirectResponse("/dashboard", status_code=302)
    response.delete_cookie(STATE_COOKIE_NAME)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=get_api_config().session_expiry_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=_secure_cookies(),
    )
    return response


@router.get("/logout")
async def logout() -> RedirectResponse:
    response = RedirectResponse("/", status_code=302)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


__all__ = ["router"]
