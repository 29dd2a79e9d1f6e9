"""Infrastructure Layer: concrete collaborators for the core protocols.

Invariants:
    - Infrastructure never imports lifecycle or command logic
    - Every module implements one Protocol from core/collaborator_protocols.py
      (plus logging setup)
"""
