# Core modules

from .config import settings
from .session import CartSession, SessionManager

__all__ = ["settings", "CartSession", "SessionManager"]
