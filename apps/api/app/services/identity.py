"""Request identity resolution from token carriers."""

from __future__ import annotations

from collections.abc import Sequence

from app.adapters.auth.base import TokenVerifier
from app.schemas.auth import Identity


def extract_token(raw: str | None) -> str | None:
    """Return the last whitespace-delimited word of a carrier value.

    Accepts both ``<token>`` and ``<scheme> <token>`` forms.
    """
    if raw is None:
        return None
    parts = raw.split()
    if not parts:
        return None
    return parts[-1]


def resolve_identity(carriers: Sequence[str | None], verifier: TokenVerifier) -> Identity | None:
    """Return the identity of the first carrier holding a valid token.

    Carriers are given in precedence order (cookie first, then header).
    """
    for raw in carriers:
        token = extract_token(raw)
        if token is None:
            continue
        identity = verifier.verify_token(token)
        if identity is not None:
            return identity
    return None


__all__ = ["extract_token", "resolve_identity"]
