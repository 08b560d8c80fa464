import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from fastapi import Depends, Header, Request
from itsdangerous import URLSafeSerializer, BadData
from passlib.context import CryptContext
from pydantic import BaseModel

from .errors import AuthenticationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

NO_TOKEN_MESSAGE = "No token provided, authorization denied"
INVALID_TOKEN_MESSAGE = "Invalid token, authorization denied"


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class Identity(BaseModel):
    id: int
    email: str
    role: Role


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        # Unrecognised or truncated hash
        return False


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    The payload carries the identity plus an ``exp`` claim in unix seconds.
    Nothing is stored server side, so a token stays valid until it expires.
    """

    def __init__(self, secret_key: str, ttl: timedelta = timedelta(hours=8)):
        self.ttl = ttl
        self._serializer = URLSafeSerializer(secret_key, salt="hotelbook-auth")

    def issue(self, identity: Identity, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "id": identity.id,
            "email": identity.email,
            "role": identity.role.value,
            "exp": int((now + self.ttl).timestamp()),
        }
        return self._serializer.dumps(payload)

    def verify(self, token: str, now: Optional[datetime] = None) -> Optional[Identity]:
        try:
            data = self._serializer.loads(token)
        except BadData:
            return None
        if not isinstance(data, dict):
            return None
        try:
            expires_at = int(data["exp"])
            identity = Identity(id=data["id"], email=data["email"], role=data["role"])
        except (KeyError, TypeError, ValueError):
            return None
        now = now or datetime.now(timezone.utc)
        if expires_at <= now.timestamp():
            return None
        return identity


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def require_role(role: Role):
    """
    Build a dependency that admits only bearer tokens issued for ``role``.
    The decoded identity is stored on ``request.state.identity`` and returned.
    """

    def dependency(
        request: Request,
        authorization: Optional[str] = Header(None),
        tokens: TokenService = Depends(get_token_service),
    ) -> Identity:
        if not authorization:
            raise AuthenticationError(NO_TOKEN_MESSAGE)
        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() == "bearer" and not token:
            raise AuthenticationError(NO_TOKEN_MESSAGE)
        identity = tokens.verify(token) if scheme.lower() == "bearer" else None
        # User and admin tokens are deliberately not interchangeable
        if identity is None or identity.role != role:
            logger.warning("Rejected %s token on %s", role.value, request.url.path)
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)
        request.state.identity = identity
        return identity

    dependency.__name__ = f"require_{role.value}"
    return dependency


require_user = require_role(Role.USER)
require_admin = require_role(Role.ADMIN)
