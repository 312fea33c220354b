"""Authentication provider interfaces."""

from abc import ABC, abstractmethod
from datetime import timedelta

from app.schemas.auth import Identity


class TokenVerifier(ABC):
    """Provider-neutral token issuance and verification interface."""

    @abstractmethod
    def issue_token(self, subject: str, ttl: timedelta) -> str:
        """Return a signed token for ``subject`` expiring ``ttl`` from now."""

    @abstractmethod
    def verify_token(self, token: str) -> Identity | None:
        """Return the token's identity, or ``None`` when it does not verify."""


__all__ = ["TokenVerifier"]
