"""Request dependencies — adapters from ``app.state`` and the bearer session."""

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.identity.auth_port import ShopperSession

_bearer = HTTPBearer(auto_error=False)


def get_store(request: Request):
    return request.app.state.store


def get_auth(request: Request):
    return request.app.state.auth


def get_settings(request: Request):
    return request.app.state.settings


def get_dispatcher(request: Request):
    return request.app.state.dispatcher


async def current_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> ShopperSession:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Please sign in to continue")
    session = await request.app.state.auth.resolve(credentials.credentials)
    if session is None:
        raise HTTPException(status_code=401, detail="Session expired, please sign in again")
    return session


async def admin_session(
    request: Request,
    session: ShopperSession = Depends(current_session),
) -> ShopperSession:
    if not request.app.state.settings.is_admin(session.email):
        raise HTTPException(status_code=403, detail="Admin access required")
    return session
