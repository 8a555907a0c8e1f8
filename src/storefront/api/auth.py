"""Bearer-token authentication and role guards for the API."""

from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.exceptions import AuthExpiredError, ForbiddenError
from storefront.user.session import resolve_session

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    id: str
    role: str
    email: str
    session_id: str
    cart_id: str | None = None
    first_name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise AuthExpiredError({"token": ["Authentication required"]})

    session, user = resolve_session(credentials.credentials)
    return Principal(
        id=str(user.id),
        role=user.role,
        email=user.email,
        session_id=str(session.id),
        cart_id=str(user.cart_id) if user.cart_id else None,
        first_name=user.first_name,
    )


def require_roles(*roles: str):
    """Dependency that admits only principals holding one of ``roles``."""

    async def guard(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in roles:
            raise ForbiddenError({"role": [f"Requires one of: {', '.join(roles)}"]})
        return principal

    return guard


def ensure_self_or_admin(principal: Principal, user_id: str) -> None:
    if not principal.is_admin and principal.id != str(user_id):
        raise ForbiddenError({"user": ["You can only act on your own account"]})
