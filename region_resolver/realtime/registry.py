"""
Connection registry for realtime delivery.

Tracks which socket connections belong to which user. One registry instance
is owned by the server process and shared by the Socket.IO handlers; every
operation runs under a single lock.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Set

from ..exceptions import create_validation_error


def is_valid_user_id(user_id: Any) -> bool:
    """Check that a user id is a positive integer (booleans excluded)."""
    return isinstance(user_id, int) and not isinstance(user_id, bool) and user_id > 0


class ConnectionRegistry:
    """
    Maps socket ids to user ids and back.

    Registration is idempotent: registering the same (sid, user) pair twice
    changes nothing, and registering a known sid for another user moves it.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._user_by_sid: Dict[str, int] = {}
        self._sids_by_user: Dict[int, Set[str]] = {}

    def register(self, sid: str, user_id: int) -> bool:
        """
        Register a socket connection for a user.

        Args:
            sid: Socket connection id
            user_id: Owning user id

        Returns:
            True if the registry changed, False if the pair was already registered

        Raises:
            ValidationError: If the user id is not a positive integer or sid is blank
        """
        if not is_valid_user_id(user_id):
            raise create_validation_error(
                'userId', user_id, ['positive integer'], message="Invalid user id"
            )
        if not sid:
            raise create_validation_error('sid', sid, ['non-empty'], message="Invalid socket id")

        with self._lock:
            current = self._user_by_sid.get(sid)
            if current == user_id:
                return False
            if current is not None:
                self._discard(sid, current)
                self.logger.info(f"Socket {sid} moved from user {current} to user {user_id}")

            self._user_by_sid[sid] = user_id
            self._sids_by_user.setdefault(user_id, set()).add(sid)

        self.logger.debug(f"Registered socket {sid} for user {user_id}")
        return True

    def unregister(self, sid: str) -> Optional[int]:
        """
        Remove a socket connection.

        Returns:
            The user id the socket belonged to, or None if it was unknown
        """
        with self._lock:
            user_id = self._user_by_sid.pop(sid, None)
            if user_id is not None:
                self._discard(sid, user_id)

        if user_id is not None:
            self.logger.debug(f"Unregistered socket {sid} of user {user_id}")
        return user_id

    def _discard(self, sid: str, user_id: int):
        # caller holds the lock
        sids = self._sids_by_user.get(user_id)
        if sids is None:
            return
        sids.discard(sid)
        if not sids:
            del self._sids_by_user[user_id]

    def user_for(self, sid: str) -> Optional[int]:
        with self._lock:
            return self._user_by_sid.get(sid)

    def sockets_for(self, user_id: int) -> List[str]:
        with self._lock:
            return sorted(self._sids_by_user.get(user_id, ()))

    def is_online(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._sids_by_user

    def online_users(self) -> List[int]:
        with self._lock:
            return sorted(self._sids_by_user)

    def clear(self):
        with self._lock:
            self._user_by_sid.clear()
            self._sids_by_user.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._user_by_sid)
