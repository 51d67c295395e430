"""Request principal and role guards

Authentication happens at the gateway, which forwards the user id and role
as X-User-Id / X-User-Role headers.
"""

from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Header, Request
from src.app.errors import ErrorCode, error
from src.api.error import ClientError
from src.domain.user import UserRole


@dataclass(frozen=True)
class Principal:
    user_id: Optional[int]
    role: UserRole


SYSTEM_PRINCIPAL = Principal(user_id=None, role=UserRole.ADMIN)


async def get_principal(
    request: Request,
    x_user_id: Optional[int] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Principal:
    if getattr(request.app.state.config, "AUTH_DISABLED", False):
        return SYSTEM_PRINCIPAL

    if not x_user_role:
        raise ClientError(error(ErrorCode.UNAUTHENTICATED, "Authentication required"))

    try:
        role = UserRole(x_user_role.strip().lower())
    except ValueError:
        raise ClientError(error(ErrorCode.UNAUTHENTICATED, f"Unknown role '{x_user_role}'"))

    return Principal(user_id=x_user_id, role=role)


def require_roles(*roles: UserRole):
    """Dependency factory admitting only the given roles"""
    allowed = set(roles)

    async def guard(principal: Principal = Depends(get_principal)) -> Principal:
        if principal.role not in allowed:
            names = ", ".join(sorted(role.value for role in allowed))
            raise ClientError(
                error(ErrorCode.FORBIDDEN, f"Requires one of the roles: {names}")
            )
        return principal

    return guard


require_kitchen_staff = require_roles(UserRole.ADMIN, UserRole.KITCHEN)
require_reception = require_roles(UserRole.ADMIN, UserRole.RECEPTION)
require_admin = require_roles(UserRole.ADMIN)
