"""Session management for shopping carts"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..services.cart_engine import CartEngine, CatalogLookup, Clock, utc_now


@dataclass
class CartSession:
    """Browsing session owning exactly one cart"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    cart: CartEngine
    last_order_id: Optional[str] = None

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


class SessionManager:
    """Creates carts at session start and discards them when sessions end"""

    def __init__(self, catalog_lookup: CatalogLookup, clock: Clock = utc_now):
        self._catalog_lookup = catalog_lookup
        self._clock = clock
        self.sessions: dict[str, CartSession] = {}

    def create_session(self) -> CartSession:
        """Create a new session with an empty cart"""
        now = datetime.now(timezone.utc)
        session = CartSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            cart=CartEngine(self._catalog_lookup, clock=self._clock),
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[CartSession]:
        """Get session by ID"""
        return self.sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Clear and drop a session's cart"""
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.cart.clear()
        return True

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Remove sessions idle for longer than max_age_hours"""
        now = datetime.now(timezone.utc)
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            self.end_session(sid)
        return len(old_sessions)
