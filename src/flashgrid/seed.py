"""Seed the database with sample flashcard sets."""
import json
from pathlib import Path

from flashgrid.db import get_connection
from flashgrid.sets import create_set

CONTENT_DIR = Path(__file__).parent / "content"


def is_seeded(db_path: str) -> bool:
    """Check whether any flashcard set exists yet."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM flashcard_sets").fetchone()[0]
    conn.close()
    return count > 0


def seed_sets(db_path: str) -> int:
    """Insert the sample sets from sample_sets.json. Returns how many were added."""
    data = json.loads((CONTENT_DIR / "sample_sets.json").read_text(encoding="utf-8"))
    for card_set in data["sets"]:
        create_set(db_path, card_set["title"], card_set["cards"], description=card_set.get("description", ""))
    return len(data["sets"])


def seed_all(db_path: str) -> None:
    if is_seeded(db_path):
        return
    seed_sets(db_path)
