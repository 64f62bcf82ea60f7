# core/security.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from models.user import Role


DEFAULT_TOKEN_TTL = timedelta(days=7)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


# -------------------------------
# Passwords
# -------------------------------

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------
# Identity tokens
# -------------------------------

class TokenError(Exception):
    """Base class for tokens that must not be trusted."""


class InvalidToken(TokenError):
    """Bad signature, malformed token or unexpected claims."""


class ExpiredToken(TokenError):
    """Signature is valid but the token is past its expiry."""


@dataclass(frozen=True)
class Identity:
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class TokenService:
    """
    Issues and verifies signed, time-limited identity tokens.

    The signing secret is fixed for the lifetime of the service. Verification is
    all-or-nothing: either a complete Identity comes back or a TokenError is raised.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = DEFAULT_TOKEN_TTL):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: str, role: Role, ttl: timedelta | None = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (ttl if ttl is not None else self.ttl)
        claims = {
            "userId": str(user_id),
            "role": Role(role).value,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        if not token:
            raise InvalidToken("empty token")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as e:
            raise ExpiredToken(str(e)) from e
        except JWTError as e:
            raise InvalidToken(str(e)) from e

        user_id = payload.get("userId")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidToken("token has no userId")
        try:
            role = Role(payload.get("role"))
        except ValueError as e:
            raise InvalidToken("token has an unknown role") from e

        return Identity(user_id=user_id, role=role)
