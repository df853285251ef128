# auth/dependencies.py
from dataclasses import dataclass

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fastfood.core.config import settings
from fastfood.core.errors import Forbidden, Unauthorized

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    id: str
    role: str  # "customer" or "seller"


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> Principal:
    """Turn the Bearer token issued by the auth service into a principal."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authenticated")

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        raise Unauthorized("Invalid token")
    return Principal(id=str(user_id), role=str(role))


def require_role(role: str):
    async def _dep(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role != role:
            raise Forbidden(f"{role.capitalize()} access only")
        return principal
    return _dep


get_current_customer = require_role("customer")
get_current_seller = require_role("seller")


def issue_token(user_id: str, role: str) -> str:
    """Local helper for scripts; production tokens come from the auth service."""
    return jwt.encode({"sub": user_id, "role": role}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
