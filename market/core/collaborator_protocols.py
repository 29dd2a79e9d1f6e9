"""Boundary Protocols: contracts between the core and its IO collaborators.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - Implementations are provided at startup by dependency injection

Design Decisions:
    - Protocols, not ABCs; test doubles do not inherit
"""

from typing import Protocol


class PasswordHasher(Protocol):
    """Contract for password digests."""
    def hash(self, plaintext: str) -> str: ...
    def verify(self, plaintext: str, digest: str) -> bool: ...


class IdGenerator(Protocol):
    """Contract for entity ids, unique within the process lifetime."""
    def new_id(self, prefix: str) -> str: ...


class SnapshotStore(Protocol):
    """Contract for whole-repository persistence."""
    def save(self) -> bool: ...
    def load(self) -> bool: ...


class FieldPrompt(Protocol):
    """Contract for interactive field input (one answer per call)."""
    def ask(self, label: str, secret: bool = False) -> str: ...


class Emitter(Protocol):
    """Contract for user-facing output lines outside a command result."""
    def __call__(self, text: str) -> None: ...
