"""Route modules."""

from .auth import router as auth_router
from .meta import router as meta_router
from .movies import router as movies_router

__all__ = ["auth_router", "meta_router", "movies_router"]
