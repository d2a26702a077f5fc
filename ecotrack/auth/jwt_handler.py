from datetime import datetime, timedelta, timezone

import jwt

from ecotrack.core.config import Settings

ROLES = ("guest", "user", "admin")


def create_session_token(
    settings: Settings,
    role: str,
    claims: dict | None = None,
    expires_minutes: int | None = None,
) -> str:
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")
    expire_minutes = expires_minutes or settings.token_lifetimes[role]
    now = datetime.now(timezone.utc)
    payload = dict(claims or {})
    payload.update({"role": role, "exp": now + timedelta(minutes=expire_minutes), "iat": now})
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(settings: Settings, token: str) -> dict:
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
