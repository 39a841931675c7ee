# tests/test_importer.py
import json

import pytest

from flashgrid.db import init_db
from flashgrid.importer import import_file, read_cards
from flashgrid.sets import load_set


def test_read_json_object(tmp_path):
    f = tmp_path / "animals.json"
    f.write_text(json.dumps({
        "title": "Animals",
        "description": "pets",
        "cards": [{"question": "perro", "answer": "dog", "answer_language": "english"}],
    }))
    parsed = read_cards(str(f))
    assert parsed["title"] == "Animals"
    assert parsed["cards"] == [{"question": "perro", "answer": "dog", "answer_language": "english"}]


def test_read_json_list_uses_file_name_as_title(tmp_path):
    f = tmp_path / "spanish_food.json"
    f.write_text(json.dumps([{"question": "pan", "answer": "bread"}]))
    parsed = read_cards(str(f))
    assert parsed["title"] == "spanish food"


def test_read_yaml(tmp_path):
    f = tmp_path / "capitals.yaml"
    f.write_text("title: Capitals\ncards:\n  - question: France\n    answer: Paris\n")
    parsed = read_cards(str(f))
    assert parsed["title"] == "Capitals"
    assert parsed["cards"][0]["answer"] == "Paris"


def test_read_tab_separated_text(tmp_path):
    f = tmp_path / "verbs.txt"
    f.write_text("# comment\nser\tto be\tspanish\tenglish\n\ntener\tto have\n")
    parsed = read_cards(str(f))
    assert len(parsed["cards"]) == 2
    assert parsed["cards"][0]["question_language"] == "spanish"
    assert "question_language" not in parsed["cards"][1]


def test_card_without_answer_rejected(tmp_path):
    f = tmp_path / "bad.json"
    f.write_text(json.dumps({"cards": [{"question": "only"}]}))
    with pytest.raises(ValueError):
        read_cards(str(f))


def test_line_without_tab_rejected(tmp_path):
    f = tmp_path / "bad.txt"
    f.write_text("no tab here\n")
    with pytest.raises(ValueError, match="Line 1"):
        read_cards(str(f))


def test_empty_file_rejected(tmp_path):
    f = tmp_path / "empty.txt"
    f.write_text("\n")
    with pytest.raises(ValueError):
        read_cards(str(f))


def test_import_file(tmp_path, tmp_db):
    init_db(tmp_db)
    f = tmp_path / "verbs.txt"
    f.write_text("ser\tto be\ntener\tto have\n")
    result = import_file(tmp_db, str(f), title="Verbs")
    assert result["cards"] == 2
    assert result["filename"] == "verbs.txt"
    loaded = load_set(tmp_db, result["set_id"])
    assert loaded.title == "Verbs"
    assert [c.answer for c in loaded.cards] == ["to be", "to have"]
