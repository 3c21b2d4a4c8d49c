"""Thread-safe registry of (user_id, group_id) join requests currently in flight."""
import threading
import logging

logger = logging.getLogger(__name__)
_lock = threading.Lock()
_in_flight: set[tuple[str, str]] = set()


def begin(user_id: str, group_id: str) -> bool:
    """Mark a join as in flight. Returns False if one is already running for the pair."""
    with _lock:
        key = (user_id, group_id)
        if key in _in_flight:
            logger.debug(f"Join already in flight for user {user_id} in group {group_id}")
            return False
        _in_flight.add(key)
        return True


def finish(user_id: str, group_id: str) -> None:
    with _lock:
        _in_flight.discard((user_id, group_id))

