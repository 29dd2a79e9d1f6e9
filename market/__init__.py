"""Campus Market Package: text-command marketplace simulator.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
