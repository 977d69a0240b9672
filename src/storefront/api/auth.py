"""Bearer-token dependencies for FastAPI routes.

``protect`` identifies the caller; ``admin`` additionally requires the
catalogue-management capability. Both are meant for ``Depends()``.
"""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.identity.user.authentication import resolve_bearer
from storefront.identity.user.user import Capability, User

_bearer = HTTPBearer(auto_error=False)


async def protect(credentials: HTTPAuthorizationCredentials | None = Depends(_bearer)) -> User:
    token = credentials.credentials if credentials else None
    return resolve_bearer(token)


async def admin(user: User = Depends(protect)) -> User:
    if not user.can(Capability.MANAGE_CATALOGUE):
        raise HTTPException(status_code=403, detail="Admin only")
    return user
