import random

import pytest

from flashgrid.models import Flashcard, FlashcardSet


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_flashgrid.db")
    return db_path


@pytest.fixture
def make_set():
    """Build an in-memory FlashcardSet from (question, answer) pairs."""
    def _make(pairs, set_id="set-1", title="Test Set"):
        cards = [
            Flashcard(id=f"card-{i}", question=q, answer=a)
            for i, (q, a) in enumerate(pairs)
        ]
        return FlashcardSet(id=set_id, title=title, cards=cards)
    return _make


@pytest.fixture
def rng():
    return random.Random(1234)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds

    def sleep(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
