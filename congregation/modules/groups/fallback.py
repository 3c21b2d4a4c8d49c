"""
Local membership store used while the group_memberships table is unavailable.

One JSON document per user holds that user's entries; it is read and
rewritten whole on every operation. Entries are never pushed to Supabase
once the table comes back.
"""
import json
import logging
import re
import threading
from pathlib import Path
from typing import List, Optional

from congregation.config import settings
from congregation.modules.groups.schemas import FallbackMembership, MembershipStatus

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class FallbackMembershipStore:
    def __init__(self, directory: str):
        self.directory = Path(directory)
        self._lock = threading.Lock()

    def _path(self, user_id: str) -> Path:
        return self.directory / f"group_memberships_{_UNSAFE_CHARS.sub('_', user_id)}.json"

    def load(self, user_id: str) -> List[FallbackMembership]:
        path = self._path(user_id)
        if not path.exists():
            return []
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return [FallbackMembership(**entry) for entry in raw]
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Ignoring unreadable fallback store {path}: {e}")
            return []

    def save(self, user_id: str, entries: List[FallbackMembership]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = [entry.model_dump(mode="json") for entry in entries]
        self._path(user_id).write_text(json.dumps(payload), encoding="utf-8")

    def add_pending(self, user_id: str, group_id: str) -> bool:
        """Append a Pending entry unless the group already has one. Returns True if written."""
        with self._lock:
            entries = self.load(user_id)
            if any(entry.group_id == group_id for entry in entries):
                return False
            entries.append(FallbackMembership(group_id=group_id, user_id=user_id, status=MembershipStatus.PENDING))
            self.save(user_id, entries)
            logger.info(f"Stored local pending membership for user {user_id} in group {group_id}")
            return True

    def approved(self, user_id: str) -> List[FallbackMembership]:
        return [entry for entry in self.load(user_id) if entry.status == MembershipStatus.APPROVED]


_store: Optional[FallbackMembershipStore] = None


def get_fallback_store() -> FallbackMembershipStore:
    global _store
    if _store is None:
        _store = FallbackMembershipStore(settings.membership_fallback_dir)
    return _store
