from datetime import datetime, timedelta, timezone

import jwt

from taskboard.core import config
from taskboard.core.errors import TokenFailure, Unauthorized


def create_access_token(user_id: str, role: str, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str | None) -> dict:
    if not token:
        raise Unauthorized(TokenFailure.MISSING)
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise Unauthorized(TokenFailure.EXPIRED) from exc
    except jwt.InvalidSignatureError as exc:
        raise Unauthorized(TokenFailure.INVALID_SIGNATURE) from exc
    except jwt.InvalidTokenError as exc:
        raise Unauthorized(TokenFailure.MALFORMED) from exc

    if not isinstance(payload.get("sub"), str) or not payload["sub"]:
        raise Unauthorized(TokenFailure.MALFORMED)
    return payload
