"""Id Generator: prefixed short ids such as ORD-1a2b3c4d.

Invariants:
    - new_id(prefix) returns "<PREFIX>-<8 hex chars>"
    - Ids never repeat within the process lifetime (collisions are retried)
"""

import threading
import uuid


class UuidIdGenerator:
    """Implements core.collaborator_protocols.IdGenerator."""

    def __init__(self, length: int = 8):
        self.length = length
        self._issued: set[str] = set()
        self._lock = threading.Lock()

    def new_id(self, prefix: str) -> str:
        with self._lock:
            while True:
                candidate = f"{prefix}-{uuid.uuid4().hex[:self.length]}"
                if candidate not in self._issued:
                    self._issued.add(candidate)
                    return candidate
