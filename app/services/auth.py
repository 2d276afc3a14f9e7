import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from app.core.config import ADMIN_PASSWORD, ADMIN_SESSION_TTL, ADMIN_USERNAME
from app.core.redis_config import get_redis_client

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "admin_session:"


class AuthError(Exception):
    pass


@dataclass(frozen=True)
class AdminSession:
    """Capability handed to every organizer-only operation."""

    token: str
    username: str


def _session_key(token: str) -> str:
    return f"{SESSION_KEY_PREFIX}{token}"


def check_credentials(username: str, password: str) -> bool:
    # Compare both parts so a wrong user and a wrong password cost the same
    user_ok = hmac.compare_digest(username.encode(), ADMIN_USERNAME.encode())
    pass_ok = hmac.compare_digest(password.encode(), ADMIN_PASSWORD.encode())
    return user_ok and pass_ok


def login(username: str, password: str) -> AdminSession:
    if not check_credentials(username, password):
        logger.warning("Failed admin login attempt")
        raise AuthError("Invalid credentials")

    token = secrets.token_urlsafe(32)
    redis_client = get_redis_client()
    redis_client.set(_session_key(token), username, ex=ADMIN_SESSION_TTL or None)
    logger.info("Admin session opened for %s", username)
    return AdminSession(token=token, username=username)


def resolve_session(token: Optional[str]) -> AdminSession:
    if not token:
        raise AuthError("Not authenticated")

    username = get_redis_client().get(_session_key(token))
    if username is None:
        raise AuthError("Not authenticated")
    return AdminSession(token=token, username=username)


def logout(session: AdminSession) -> None:
    get_redis_client().delete(_session_key(session.token))
    logger.info("Admin session closed for %s", session.username)
