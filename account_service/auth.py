from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
import jwt

from .config import Settings
from .errors import ConfigurationError, UnauthenticatedError

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class PasswordHasher:
    """Salted, deliberately slow password hashing (pbkdf2_sha256)."""

    def __init__(self, rounds: int = 29000):
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not plaintext or not hashed:
            return False
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            # Unrecognised or corrupt stored hash
            return False

    def dummy_verify(self) -> None:
        """Burn one verification's worth of work when there is no stored hash."""
        self._context.dummy_verify()


def _require_secret(settings: Settings) -> str:
    secret = settings.JWT_SECRET
    if not secret or not secret.strip():
        raise ConfigurationError("JWT_SECRET is not set; refusing to sign or verify tokens")
    return secret


def _require_hmac_algorithm(settings: Settings) -> str:
    algorithm = settings.JWT_ALGORITHM
    if algorithm not in HMAC_ALGORITHMS:
        raise ConfigurationError(
            f"JWT_ALGORITHM must be one of {', '.join(HMAC_ALGORITHMS)} when signing with a shared secret, got {algorithm!r}"
        )
    return algorithm


class TokenIssuer:
    def __init__(self, settings: Settings):
        self._secret = _require_secret(settings)
        self._algorithm = _require_hmac_algorithm(settings)
        self._lifetime = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

    def issue(self, user_id: int) -> str:
        issued_at = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)


class TokenVerifier:
    def __init__(self, settings: Settings):
        self._secret = _require_secret(settings)
        self._algorithm = _require_hmac_algorithm(settings)

    def verify(self, token: str) -> int:
        """
        Check signature and expiry of a bearer token.

        Returns:
            The user id carried in the token subject

        Raises:
            UnauthenticatedError: If the token is forged, expired or malformed
        """
        try:
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.PyJWTError as exc:
            raise UnauthenticatedError("Not authorized, invalid token") from exc

        try:
            return int(data["sub"])
        except (TypeError, ValueError) as exc:
            raise UnauthenticatedError("Not authorized, invalid token") from exc


def extract_bearer_token(authorization: str) -> str:
    """Pull the token out of an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.strip():
        raise UnauthenticatedError("Not authorized, no token provided")

    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthenticatedError("Not authorized, no token provided")
    return parts[1]
