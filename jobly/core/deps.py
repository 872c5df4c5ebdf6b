"""
FastAPI dependencies for authentication and authorization.

`get_caller` turns an optional bearer token into a Caller. A missing or
undecodable token is not an error here: the request simply proceeds as
anonymous and the authorization policy decides what it may do.
"""

from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.permissions import ANONYMOUS, Action, Caller, Role, authorize
from jobly.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


async def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Caller:
    """Classify the caller as anonymous, user or admin from the JWT."""
    if not credentials:
        return ANONYMOUS

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        return ANONYMOUS

    username = payload.get("sub")
    if not username:
        return ANONYMOUS

    role = Role.ADMIN if payload.get("is_admin") is True else Role.USER
    return Caller(role=role, username=username)


def require(action: Action) -> Callable:
    """
    Build a dependency that enforces `action` before the route body runs.

    Routes on a user's own resources pass the `username` path parameter
    through as the owner.

    Usage:
        @router.post("", dependencies=[Depends(require(Action.CREATE_JOB))])
    """
    async def dependency(request: Request, caller: Caller = Depends(get_caller)) -> Caller:
        authorize(caller, action, owner=request.path_params.get("username"))
        return caller

    return dependency
