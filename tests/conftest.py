"""Root conftest: shared fixtures for driving the market without a terminal.

Invariants:
    - Every test gets its own SQLite snapshot file under tmp_path
    - Passwords use a plain-text test hasher (bcrypt is covered in infrastructure tests)
    - Ids are sequential per prefix: seeded users are USR-00000001 (admin),
      USR-00000002 (buyer1), USR-00000003 (seller1); sample products PRD-00000001..3
"""

import os
from collections import deque

import pytest

from market.config import Settings
from market.main import MarketApp, build_application, start

# Ensure tests never pick up a developer's snapshot settings
for _key in [k for k in os.environ if k.startswith("MARKET_")]:
    del os.environ[_key]


class ScriptedPrompt:
    """FieldPrompt that answers from a queue; unanswered questions get ""."""

    def __init__(self):
        self.answers: deque[str] = deque()
        self.labels: list[str] = []

    def feed(self, *answers: str) -> None:
        self.answers.extend(answers)

    def ask(self, label: str, secret: bool = False) -> str:
        self.labels.append(label)
        return self.answers.popleft() if self.answers else ""


class PlainHasher:
    def hash(self, plaintext: str) -> str:
        return f"plain:{plaintext}"

    def verify(self, plaintext: str, digest: str) -> bool:
        return digest == f"plain:{plaintext}"


class SequentialIds:
    def __init__(self):
        self._counters: dict[str, int] = {}

    def new_id(self, prefix: str) -> str:
        n = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = n
        return f"{prefix}-{n:08d}"


class Harness:
    """A running app plus the prompt and output lines it talks to."""

    def __init__(self, app: MarketApp, prompt: ScriptedPrompt, outputs: list[str]):
        self.app = app
        self.prompt = prompt
        self.outputs = outputs

    @property
    def ctx(self):
        return self.app.context

    @property
    def repo(self):
        return self.app.context.repository

    def run(self, line: str, *answers: str) -> dict:
        self.prompt.feed(*answers)
        return self.app.execute(line)

    def login(self, username: str, password: str = "123456") -> dict:
        if self.ctx.session.is_authenticated():
            self.run("logout")
        return self.run("login", username, password)

    def user_id(self, username: str) -> str:
        return self.repo.find_user_by_username(username).id


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        snapshot_url=str(tmp_path / "market.db"),
        seed_default_data=True,
        default_password="123456",
    )


@pytest.fixture
def prompt() -> ScriptedPrompt:
    return ScriptedPrompt()


@pytest.fixture
def build_app(prompt):
    """Factory for an unstarted app whose output lines go to `outputs`."""
    def build(settings: Settings, outputs: list[str]) -> MarketApp:
        return build_application(
            settings, prompt=prompt, emit=outputs.append,
            hasher=PlainHasher(), ids=SequentialIds(),
        )
    return build


@pytest.fixture
def market(settings, prompt, build_app) -> Harness:
    """Freshly seeded market: admin, buyer1, seller1 and three sample products."""
    outputs: list[str] = []
    app = build_app(settings, outputs)
    start(app, settings)
    outputs.clear()
    return Harness(app, prompt, outputs)
