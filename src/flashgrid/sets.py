"""Flashcard set storage and per-set study settings."""
import logging
import uuid
from datetime import datetime

from flashgrid.db import get_connection
from flashgrid.models import Flashcard, FlashcardSet

logger = logging.getLogger(__name__)

DIRECTION_KEY = "study_direction_{set_id}"


def new_id() -> str:
    return uuid.uuid4().hex


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


def get_direction(db_path: str, set_id: str, default: bool = True) -> bool:
    """Whether the set is studied question-first (type the answer)."""
    value = get_setting(db_path, DIRECTION_KEY.format(set_id=set_id))
    if value is None:
        return default
    return value == "true"


def set_direction(db_path: str, set_id: str, ask_in_question_language: bool) -> None:
    set_setting(db_path, DIRECTION_KEY.format(set_id=set_id), "true" if ask_in_question_language else "false")


def _card_from_row(row) -> Flashcard:
    return Flashcard(
        id=row["id"],
        question=row["question"],
        answer=row["answer"],
        image_url=row["image_url"],
        question_language=row["question_language"],
        answer_language=row["answer_language"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def list_sets(db_path: str) -> list:
    """All sets with their card counts, newest first."""
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT s.*, COUNT(c.id) as card_count
        FROM flashcard_sets s
        LEFT JOIN flashcards c ON c.set_id = s.id
        GROUP BY s.id
        ORDER BY s.created_at DESC, s.title"""
    ).fetchall()
    conn.close()
    return [dict(r) for r in rows]


def load_set(db_path: str, set_id: str) -> FlashcardSet | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM flashcard_sets WHERE id = ?", (set_id,)).fetchone()
    if row is None:
        conn.close()
        logger.warning("Flashcard set %s not found", set_id)
        return None
    cards = conn.execute(
        "SELECT * FROM flashcards WHERE set_id = ? ORDER BY position", (set_id,)
    ).fetchall()
    conn.close()
    return FlashcardSet(
        id=row["id"],
        title=row["title"],
        description=row["description"] or "",
        cards=[_card_from_row(c) for c in cards],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def save_set(db_path: str, card_set: FlashcardSet) -> FlashcardSet:
    """Insert or replace a set together with its cards, in order."""
    now = datetime.now().isoformat()
    card_set.created_at = card_set.created_at or now
    card_set.updated_at = now
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO flashcard_sets (id, title, description, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET title=excluded.title,
            description=excluded.description, updated_at=excluded.updated_at""",
        (card_set.id, card_set.title, card_set.description, card_set.created_at, card_set.updated_at),
    )
    conn.execute("DELETE FROM flashcards WHERE set_id = ?", (card_set.id,))
    for position, card in enumerate(card_set.cards):
        card.created_at = card.created_at or now
        card.updated_at = card.updated_at or now
        conn.execute(
            """INSERT INTO flashcards (id, set_id, position, question, answer, image_url,
                question_language, answer_language, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (card.id, card_set.id, position, card.question, card.answer, card.image_url,
             card.question_language, card.answer_language, card.created_at, card.updated_at),
        )
    conn.commit()
    conn.close()
    logger.info("Saved set %s with %d cards", card_set.id, len(card_set.cards))
    return card_set


def create_set(db_path: str, title: str, cards: list, description: str = "") -> FlashcardSet:
    """Build a set from plain card dicts and save it under a new id."""
    card_set = FlashcardSet(
        id=new_id(),
        title=title,
        description=description,
        cards=[
            Flashcard(
                id=new_id(),
                question=c["question"],
                answer=c["answer"],
                image_url=c.get("image_url"),
                question_language=c.get("question_language"),
                answer_language=c.get("answer_language"),
            )
            for c in cards
        ],
    )
    return save_set(db_path, card_set)


def delete_set(db_path: str, set_id: str) -> bool:
    conn = get_connection(db_path)
    conn.execute("DELETE FROM flashcards WHERE set_id = ?", (set_id,))
    deleted = conn.execute("DELETE FROM flashcard_sets WHERE id = ?", (set_id,)).rowcount
    conn.execute("DELETE FROM user_settings WHERE key = ?", (DIRECTION_KEY.format(set_id=set_id),))
    conn.commit()
    conn.close()
    return deleted > 0
