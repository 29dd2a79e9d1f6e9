"""Core Layer: domain entities, state machines and in-memory stores. No IO.

Invariants:
    - No module in core/ imports from services/, infrastructure/, models/ or db/
    - Collaborators with IO (hashing, ids, persistence, prompts) are reached
      through the Protocols in core/collaborator_protocols.py
"""
