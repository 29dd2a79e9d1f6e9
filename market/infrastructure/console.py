"""Terminal IO: field prompts and output lines for the interactive loop.

Invariants:
    - ConsolePrompt.ask() returns the stripped answer; end of input yields ""
    - Secret fields are read with getpass (no echo) when stdin is a terminal
"""

import getpass
import sys


class ConsolePrompt:
    """Implements core.collaborator_protocols.FieldPrompt over stdin."""

    def ask(self, label: str, secret: bool = False) -> str:
        try:
            if secret and sys.stdin.isatty():
                return getpass.getpass(f"{label}: ").strip()
            return input(f"{label}: ").strip()
        except EOFError:
            return ""


def emit_line(text: str) -> None:
    """Write one block of user-facing text to stdout."""
    print(text, flush=True)
