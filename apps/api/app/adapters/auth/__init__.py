"""Auth verifier adapters."""

from .base import TokenVerifier
from .jwt_auth import JwtTokenVerifier

__all__ = [
    "TokenVerifier",
    "JwtTokenVerifier",
]
