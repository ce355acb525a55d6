"""Bearer-token authentication dependencies.

Usage:
    @router.get("/protected")
    async def protected_route(current_user: CurrentUser = Depends(get_current_user)):
        return {"user_id": current_user.user_id}

    @router.get("/admin-only")
    async def admin_route(current_user: CurrentUser = Depends(require_admin)):
        ...
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.identity.authentication import user_from_token
from storefront.identity.errors import AuthenticationError
from storefront.identity.user import Role

# auto_error=False so a missing header is reported as 401, not 403
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity of the caller, resolved from the access token."""

    user_id: str
    email: str
    full_name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    try:
        user = user_from_token(credentials.credentials)
    except AuthenticationError as exc:
        raise _unauthorized(exc.message) from exc

    return CurrentUser(
        user_id=str(user.id),
        email=user.email,
        full_name=user.full_name,
        role=user.role,
    )


async def require_admin(current_user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return current_user


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def register_authentication_handler(app: FastAPI) -> None:
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
