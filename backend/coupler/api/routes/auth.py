"""Auth Routes: sign in (sets the session cookie) and sign out (clears it)."""

import logging

from fastapi import APIRouter, Depends, Response, status

from coupler.api.dependencies import get_app_settings, get_services
from coupler.config import Settings
from coupler.schemas.auth import SessionResponse, SignInRequest
from coupler.services.container import Services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signin", response_model=SessionResponse)
async def sign_in(
    body: SignInRequest,
    response: Response,
    services: Services = Depends(get_services),
    settings: Settings = Depends(get_app_settings),
):
    token, claims = await services.auth.sign_in(body.email, body.password)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return SessionResponse.from_claims(claims)


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(settings: Settings = Depends(get_app_settings)):
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    logger.info("Session cookie cleared")
    return response
