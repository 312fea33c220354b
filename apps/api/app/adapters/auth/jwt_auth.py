"""Signed JWT verifier adapter."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from app.adapters.auth.base import TokenVerifier
from app.schemas.auth import Identity

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class JwtTokenVerifier(TokenVerifier):
    """Issues and verifies HMAC-signed JWTs with a process-wide secret.

    Expiry is checked against the injected clock rather than PyJWT's own
    wall-clock check so that issuance and verification agree on "now".
    """

    def __init__(self, secret: str, *, algorithm: str = "HS256", clock: Clock = _utc_now) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def issue_token(self, subject: str, ttl: timedelta) -> str:
        if ttl <= timedelta(0):
            raise ValueError("Token ttl must be positive")
        issued_at = self._clock()
        claims = {
            "sub": subject,
            "iat": int(issued_at.timestamp()),
            "exp": (issued_at + ttl).timestamp(),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str) -> Identity | None:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp"]},
            )
        except jwt.PyJWTError:
            return None

        expires_at = claims.get("exp")
        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            return None
        if self._clock().timestamp() >= expires_at:
            return None

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject.strip():
            return None
        return Identity(subject=subject)


__all__ = ["JwtTokenVerifier"]
