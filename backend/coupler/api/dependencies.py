"""API Dependencies: service container access, session principal, role gates.

Invariants:
    - The session token is read from the session cookie first, then from
      `Authorization: Bearer <token>`
    - Missing or invalid tokens raise AuthenticationError (401); wrong role raises
      AuthorizationError (403)
"""

from fastapi import Depends, Request

from coupler.config import Settings
from coupler.core.access import Principal, require_role
from coupler.core.domain_types import Role
from coupler.core.errors import AuthenticationError
from coupler.services.container import Services


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _session_token(request: Request, cookie_name: str) -> str | None:
    token = request.cookies.get(cookie_name)
    if token:
        return token
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def get_principal(
    request: Request,
    services: Services = Depends(get_services),
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    token = _session_token(request, settings.session_cookie_name)
    if token is None:
        raise AuthenticationError("not signed in")
    return services.auth.authenticate(token)


async def get_student(principal: Principal = Depends(get_principal)) -> Principal:
    return require_role(principal, Role.STUDENT)


async def get_representative(principal: Principal = Depends(get_principal)) -> Principal:
    return require_role(principal, Role.REPRESENTATIVE)
