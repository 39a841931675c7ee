"""Flip mode: step through a shuffled set, self-rating or typing answers."""
import logging
import random

from flashgrid.deck import shuffled
from flashgrid.judge import matches
from flashgrid.languages import palette_for
from flashgrid.models import FlipSummary

logger = logging.getLogger(__name__)


class FlipSession:
    """Linear review of a set in an order fixed at start.

    Known and unknown cards are tracked by their index in the set's own card
    list, so the summary does not depend on the shuffled order. A card sits in
    at most one of the two sets; rating it again moves it.
    """

    def __init__(self, rng: random.Random = None, ask_in_question_language: bool = True):
        self.rng = rng or random.Random()
        self.ask_in_question_language = ask_in_question_language
        self.card_set = None
        self.order = []
        self.position = 0
        self.is_flipped = False
        self.user_answer = ""
        self.last_result = None
        self.known = set()
        self.unknown = set()
        self.showing_summary = False

    def start(self, card_set) -> bool:
        """Begin reviewing `card_set`; returns False if there is nothing to review."""
        self.card_set = card_set
        if card_set is None:
            logger.warning("No flashcard set supplied; flip session not started")
            self.order = []
            return False
        self.restart()
        logger.info("Started flip session on set %s (%d cards)", card_set.id, len(self.order))
        return self.has_cards

    def restart(self) -> None:
        count = len(self.card_set.cards) if self.card_set else 0
        self.order = shuffled(range(count), self.rng)
        self.position = 0
        self.known = set()
        self.unknown = set()
        self.showing_summary = False
        self._reset_card_view()

    def _reset_card_view(self) -> None:
        self.is_flipped = False
        self.user_answer = ""
        self.last_result = None

    @property
    def has_cards(self) -> bool:
        return bool(self.order)

    @property
    def total(self) -> int:
        return len(self.order)

    @property
    def card_index(self) -> int | None:
        """Index of the current card in the set's original card list."""
        if not self.has_cards:
            return None
        return self.order[self.position]

    @property
    def current_card(self):
        if not self.has_cards:
            return None
        return self.card_set.cards[self.card_index]

    @property
    def is_last(self) -> bool:
        return self.has_cards and self.position == self.total - 1

    # --- what is on screen ---

    @property
    def prompt(self) -> str | None:
        card = self.current_card
        if card is None:
            return None
        return card.question if self.ask_in_question_language else card.answer

    @property
    def expected(self) -> str | None:
        card = self.current_card
        if card is None:
            return None
        return card.answer if self.ask_in_question_language else card.question

    @property
    def visible_text(self) -> str | None:
        return self.expected if self.is_flipped else self.prompt

    @property
    def visible_language(self) -> str | None:
        card = self.current_card
        if card is None:
            return None
        showing_question = self.ask_in_question_language != self.is_flipped
        return card.question_language if showing_question else card.answer_language

    @property
    def relevant_language(self) -> str | None:
        """Language of the field the player is expected to type."""
        card = self.current_card
        if card is None:
            return None
        typing_answer = self.ask_in_question_language != self.is_flipped
        return card.answer_language if typing_answer else card.question_language

    def palette(self) -> list[str]:
        """Special characters for typing; offered only while the card is unflipped."""
        if self.is_flipped:
            return []
        return palette_for(self.relevant_language)

    # --- navigation ---

    def flip(self) -> bool:
        if self.has_cards:
            self.is_flipped = not self.is_flipped
        return self.is_flipped

    def next(self) -> int:
        if self.has_cards and self.position < self.total - 1:
            self.position += 1
            self._reset_card_view()
        return self.position

    def previous(self) -> int:
        if self.has_cards and self.position > 0:
            self.position -= 1
            self._reset_card_view()
        return self.position

    def toggle_direction(self) -> bool:
        self.ask_in_question_language = not self.ask_in_question_language
        return self.ask_in_question_language

    # --- rating ---

    def _classify(self, known: bool) -> None:
        index = self.card_index
        if known:
            self.unknown.discard(index)
            self.known.add(index)
        else:
            self.known.discard(index)
            self.unknown.add(index)

    def submit_answer(self, text: str) -> bool | None:
        """Check typed text against the expected field and rate the card."""
        if not self.has_cards or not text.strip():
            return None
        self.user_answer = text
        self.last_result = matches(text, self.expected)
        self._classify(self.last_result)
        return self.last_result

    def mark_known(self) -> bool:
        return self._self_rate(True)

    def mark_dont_know(self) -> bool:
        return self._self_rate(False)

    def _self_rate(self, known: bool) -> bool:
        if not self.has_cards or not self.is_flipped:
            return False
        self._classify(known)
        self.next()
        return True

    # --- summary ---

    def view_summary(self) -> FlipSummary | None:
        """Open the summary; only reachable from the last card."""
        if not self.is_last:
            return None
        self.showing_summary = True
        return self.summary()

    def summary(self) -> FlipSummary:
        return FlipSummary(total=self.total, known=len(self.known), unknown=len(self.unknown))
