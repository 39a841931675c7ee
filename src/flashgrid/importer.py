"""Import flashcard sets from JSON, YAML or tab-separated text files."""
import json
import logging
from pathlib import Path

from flashgrid.sets import create_set

logger = logging.getLogger(__name__)

CARD_FIELDS = ("question", "answer", "image_url", "question_language", "answer_language")


def _parse_structured(data, default_title: str) -> dict:
    if isinstance(data, list):
        data = {"cards": data}
    if not isinstance(data, dict):
        raise ValueError("Expected an object with 'cards' or a list of cards")
    cards = data.get("cards")
    if not cards:
        raise ValueError("No cards found")
    parsed = []
    for i, card in enumerate(cards, 1):
        if not isinstance(card, dict) or not card.get("question") or not card.get("answer"):
            raise ValueError(f"Card {i} needs a question and an answer")
        parsed.append({k: str(card[k]) for k in CARD_FIELDS if card.get(k) is not None})
    return {
        "title": data.get("title") or default_title,
        "description": data.get("description") or "",
        "cards": parsed,
    }


def _parse_lines(text: str, default_title: str) -> dict:
    cards = []
    for line_no, line in enumerate(text.splitlines(), 1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        parts = [p.strip() for p in line.split("\t")]
        if len(parts) < 2 or not parts[0] or not parts[1]:
            raise ValueError(f"Line {line_no}: expected 'question<TAB>answer'")
        card = {"question": parts[0], "answer": parts[1]}
        if len(parts) > 2 and parts[2]:
            card["question_language"] = parts[2]
        if len(parts) > 3 and parts[3]:
            card["answer_language"] = parts[3]
        cards.append(card)
    if not cards:
        raise ValueError("No cards found")
    return {"title": default_title, "description": "", "cards": cards}


def read_cards(file_path: str) -> dict:
    """Parse a file into {"title", "description", "cards"}."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    default_title = path.stem.replace("_", " ").strip() or "Imported set"

    if suffix == ".json":
        return _parse_structured(json.loads(path.read_text(encoding="utf-8")), default_title)
    elif suffix in (".yaml", ".yml"):
        import yaml
        return _parse_structured(yaml.safe_load(path.read_text(encoding="utf-8")), default_title)
    else:
        return _parse_lines(path.read_text(encoding="utf-8"), default_title)


def import_file(db_path: str, file_path: str, title: str | None = None) -> dict:
    """Import a file as a new flashcard set."""
    parsed = read_cards(file_path)
    card_set = create_set(
        db_path, title or parsed["title"], parsed["cards"], description=parsed["description"],
    )
    logger.info("Imported %d cards from %s", len(card_set.cards), file_path)
    return {
        "set_id": card_set.id,
        "title": card_set.title,
        "filename": Path(file_path).name,
        "cards": len(card_set.cards),
    }
