"""
User authentication with bcrypt password hashing and signed bearer tokens.

Users live in the identity store (a JSON array file). Passwords are hashed
with bcrypt before storage. ``login`` issues an HS256 JWT carrying the user's
email, valid for ``settings.token_ttl_sec`` seconds; ``verify`` checks the
signature and expiry of a presented ``Authorization: Bearer`` header. Tokens
are stateless and cannot be revoked.
"""

import asyncio
import time

import bcrypt
import jwt

from config import Settings, configure_logging
from errors import (
    AuthError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from storage.users import UserStore

JWT_ALGORITHM = "HS256"
BCRYPT_MAX_BYTES = 72


def encode_password(password: str) -> bytes:
    """UTF-8 bytes of a password; bcrypt refuses anything past 72 bytes."""
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise ValidationError("Password too long")
    return raw


class AuthGate:
    def __init__(self, settings: Settings, users: UserStore):
        self.log = configure_logging("auth-gate", settings.log_level, settings.log_json)
        self._users = users
        self._secret = settings.jwt_secret
        self._ttl = settings.token_ttl_sec
        self._rounds = settings.bcrypt_rounds

    async def signup(self, name: str | None, email: str | None, password: str | None) -> dict:
        """Register a new user. No token is issued."""
        if not name or not email or not password:
            raise ValidationError("Missing fields")

        hashed = await asyncio.to_thread(
            bcrypt.hashpw, encode_password(password), bcrypt.gensalt(rounds=self._rounds)
        )
        await self._users.add({"name": name, "email": email, "password": hashed.decode("utf-8")})
        self.log.info("user_registered", email=email)
        return {"status": "registered"}

    async def login(self, email: str | None, password: str | None) -> str:
        """Check credentials and return a signed token bound to the email."""
        if not email or not password:
            raise ValidationError("Missing fields")
        raw = encode_password(password)

        user = await self._users.find(email)
        if user is None:
            raise NotFoundError("User not found")

        stored_hash = user["password"].encode("utf-8")
        ok = await asyncio.to_thread(bcrypt.checkpw, raw, stored_hash)
        if not ok:
            self.log.warning("login_failed", email=email)
            raise InvalidCredentialsError("Invalid credentials")

        self.log.info("login_succeeded", email=email)
        return self.issue_token(email)

    def issue_token(self, email: str, issued_at: float | None = None) -> str:
        iat = int(issued_at if issued_at is not None else time.time())
        claims = {"email": email, "iat": iat, "exp": iat + self._ttl}
        return jwt.encode(claims, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, authorization: str | None) -> str:
        """Validate an Authorization header value and return the authenticated email."""
        if not authorization or not authorization.strip():
            raise AuthError("Missing token")

        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise AuthError("Malformed authorization header")

        try:
            claims = jwt.decode(
                parts[1],
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["email", "iat", "exp"]},
            )
        except jwt.InvalidTokenError as e:
            self.log.info("token_rejected", reason=type(e).__name__)
            raise AuthError("Invalid or expired token") from e
        return claims["email"]
