# tests/test_sets.py
from flashgrid.db import init_db
from flashgrid.models import Flashcard, FlashcardSet
from flashgrid.sets import (
    create_set, delete_set, get_direction, get_setting, list_sets, load_set,
    save_set, set_direction, set_setting,
)

CARDS = [
    {"question": "rojo", "answer": "red", "question_language": "spanish", "answer_language": "english"},
    {"question": "azul", "answer": "blue"},
    {"question": "verde", "answer": "green"},
]


def test_create_and_load_set(tmp_db):
    init_db(tmp_db)
    created = create_set(tmp_db, "Colors", CARDS, description="basic")
    loaded = load_set(tmp_db, created.id)
    assert loaded.title == "Colors"
    assert loaded.description == "basic"
    assert [c.question for c in loaded.cards] == ["rojo", "azul", "verde"]
    assert loaded.cards[0].question_language == "spanish"
    assert loaded.cards[1].question_language is None
    assert loaded.created_at is not None


def test_load_missing_set_returns_none(tmp_db):
    init_db(tmp_db)
    assert load_set(tmp_db, "does-not-exist") is None


def test_save_set_replaces_cards(tmp_db):
    init_db(tmp_db)
    card_set = create_set(tmp_db, "Colors", CARDS)
    card_set.cards = [Flashcard(id="new", question="negro", answer="black")]
    card_set.title = "Dark colors"
    save_set(tmp_db, card_set)
    loaded = load_set(tmp_db, card_set.id)
    assert loaded.title == "Dark colors"
    assert [c.id for c in loaded.cards] == ["new"]


def test_save_set_with_given_id(tmp_db):
    init_db(tmp_db)
    save_set(tmp_db, FlashcardSet(id="fixed", title="Empty"))
    loaded = load_set(tmp_db, "fixed")
    assert loaded.cards == []


def test_list_sets_counts_cards(tmp_db):
    init_db(tmp_db)
    create_set(tmp_db, "Colors", CARDS)
    save_set(tmp_db, FlashcardSet(id="empty", title="Empty"))
    counts = {s["title"]: s["card_count"] for s in list_sets(tmp_db)}
    assert counts == {"Colors": 3, "Empty": 0}


def test_delete_set(tmp_db):
    init_db(tmp_db)
    card_set = create_set(tmp_db, "Colors", CARDS)
    set_direction(tmp_db, card_set.id, False)
    assert delete_set(tmp_db, card_set.id)
    assert load_set(tmp_db, card_set.id) is None
    assert get_direction(tmp_db, card_set.id) is True
    assert not delete_set(tmp_db, card_set.id)


def test_settings_round_trip(tmp_db):
    init_db(tmp_db)
    assert get_setting(tmp_db, "theme", "dark") == "dark"
    set_setting(tmp_db, "theme", "light")
    set_setting(tmp_db, "theme", "blue")
    assert get_setting(tmp_db, "theme") == "blue"


def test_direction_defaults_and_persists_per_set(tmp_db):
    init_db(tmp_db)
    assert get_direction(tmp_db, "a") is True
    set_direction(tmp_db, "a", False)
    assert get_direction(tmp_db, "a") is False
    assert get_direction(tmp_db, "b") is True
