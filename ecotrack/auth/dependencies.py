from dataclasses import dataclass

import jwt
from fastapi import Depends, Request

from ecotrack.auth import jwt_handler
from ecotrack.core.config import Settings, get_settings

TOKEN_COOKIE = "token"


@dataclass(frozen=True)
class AuthContext:
    """Verified claims of the caller's session token."""

    role: str
    user_id: int | None = None
    email: str | None = None
    name: str | None = None
    avatar: str | None = None

    @property
    def is_user(self) -> bool:
        return self.role == "user"

    @property
    def is_guest(self) -> bool:
        return self.role == "guest"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def resolve_auth_context(settings: Settings, token: str | None) -> AuthContext | None:
    if not token:
        return None
    try:
        payload = jwt_handler.decode_session_token(settings, token)
    except jwt.PyJWTError:
        return None

    role = payload.get("role")
    if role not in jwt_handler.ROLES:
        return None
    return AuthContext(
        role=role,
        user_id=payload.get("id"),
        email=payload.get("email"),
        name=payload.get("name"),
        avatar=payload.get("avatar"),
    )


def get_auth_context(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AuthContext | None:
    return resolve_auth_context(settings, request.cookies.get(TOKEN_COOKIE))
