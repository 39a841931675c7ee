"""Block mode: answer flashcards to earn blocks for the 8x8 puzzle grid."""
import itertools
import logging
import random
from enum import Enum

from flashgrid.deck import Deck
from flashgrid.grid import DEFAULT_COLOR, is_terminal, new_grid, place
from flashgrid.judge import matches
from flashgrid.models import BlockSummary
from flashgrid.scheduler import Scheduler
from flashgrid.shapes import BLOCKS_PER_CORRECT_ANSWER, random_blocks

logger = logging.getLogger(__name__)

CORRECT_ANSWER_POINTS = 10
ANSWER_FEEDBACK_DELAY = 1.5
NEXT_CARD_DELAY = 0.5


class SessionState(Enum):
    NOT_LOADED = "not_loaded"
    NO_CARDS = "no_cards"
    AWAITING_ANSWER = "awaiting_answer"
    BLOCKS_OFFERED = "blocks_offered"
    ADVANCING_CARD = "advancing_card"
    SESSION_OVER = "session_over"


class BlockSession:
    """Drives one block-mode session over a flashcard set.

    A correct answer scores points and offers three blocks; the answer box
    stays closed until every offered block is placed. A wrong answer shows
    feedback, then moves on to the next card after a short delay. The game
    ends when the grid fills up or none of the offered blocks fits.

    Delayed transitions go through `scheduler` and carry the generation they
    were scheduled in. `restart()` starts a new generation, so transitions
    left over from the previous game do nothing.
    """

    def __init__(self, scheduler: Scheduler = None, rng: random.Random = None,
                 ask_in_question_language: bool = True):
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random()
        self.ask_in_question_language = ask_in_question_language
        self.deck = Deck(self.rng)
        self.card_set = None
        self.state = SessionState.NOT_LOADED
        self.generation = 0
        self.current_card = None
        self.last_result = None
        self._reset_game()

    def _reset_game(self) -> None:
        self.grid = new_grid()
        self.score = 0
        self.offers = {}
        self._offer_ids = itertools.count(1)
        self.answered = 0
        self.correct = 0
        self.blocks_placed = 0
        self.lines_cleared = 0

    # --- lifecycle ---

    def start(self, card_set) -> SessionState:
        """Begin a session on `card_set`; None means the set was not found."""
        self.generation += 1
        self.card_set = card_set
        self.current_card = None
        self.last_result = None
        self._reset_game()
        if card_set is None:
            logger.warning("No flashcard set supplied; block session not started")
            self.state = SessionState.NOT_LOADED
            return self.state
        if not card_set.cards:
            logger.info("Set %s has no cards", card_set.id)
            self.state = SessionState.NO_CARDS
            return self.state
        self.current_card = self.deck.start(card_set)
        self.state = SessionState.AWAITING_ANSWER
        logger.info("Started block session on set %s (%d cards)", card_set.id, len(card_set.cards))
        return self.state

    def restart(self) -> SessionState:
        """Reset grid, score, deck and offers; pending transitions are dropped."""
        if self.card_set is None:
            return self.state
        return self.start(self.card_set)

    # --- card side ---

    @property
    def prompt(self) -> str | None:
        """Text shown to the player for the current card."""
        if self.current_card is None:
            return None
        if self.ask_in_question_language:
            return self.current_card.question
        return self.current_card.answer

    @property
    def expected(self) -> str | None:
        """Text the player has to type for the current card."""
        if self.current_card is None:
            return None
        if self.ask_in_question_language:
            return self.current_card.answer
        return self.current_card.question

    @property
    def expected_language(self) -> str | None:
        if self.current_card is None:
            return None
        if self.ask_in_question_language:
            return self.current_card.answer_language
        return self.current_card.question_language

    @property
    def accepts_answer(self) -> bool:
        return self.state == SessionState.AWAITING_ANSWER

    def submit_answer(self, text: str) -> bool | None:
        """Judge an answer. Returns None when no answer can be taken."""
        if not self.accepts_answer or not text.strip():
            return None
        is_correct = matches(text, self.expected)
        self.last_result = is_correct
        self.answered += 1
        if is_correct:
            self.correct += 1
            self.score += CORRECT_ANSWER_POINTS
            self._offer_blocks()
        else:
            self.state = SessionState.ADVANCING_CARD
            self._defer(ANSWER_FEEDBACK_DELAY, self._advance_card)
        return is_correct

    def skip_card(self) -> bool:
        """Swap the current card for the next one without answering it."""
        if not self.accepts_answer:
            return False
        self._advance_card()
        return True

    def _advance_card(self) -> None:
        self.current_card = self.deck.next()
        self.last_result = None
        self.offers = {}
        self.state = SessionState.AWAITING_ANSWER

    # --- grid side ---

    def _offer_blocks(self) -> None:
        shapes = random_blocks(BLOCKS_PER_CORRECT_ANSWER, self.rng)
        self.offers = {next(self._offer_ids): shape for shape in shapes}
        self.state = SessionState.BLOCKS_OFFERED
        logger.debug("Offered blocks %s", sorted(self.offers))
        if is_terminal(self.grid, self.remaining_shapes):
            self.state = SessionState.SESSION_OVER
            logger.info("No offered block fits; block session over with score %d", self.score)

    @property
    def remaining_shapes(self) -> list:
        return list(self.offers.values())

    def place_block(self, offer_id: int, row: int, col: int):
        """Place an offered block. Returns None if that block isn't on offer."""
        if self.state != SessionState.BLOCKS_OFFERED or offer_id not in self.offers:
            return None
        result = place(self.grid, self.offers[offer_id], row, col, DEFAULT_COLOR)
        if not result.placed:
            return result

        self.grid = result.grid
        self.score += result.bonus
        self.blocks_placed += 1
        self.lines_cleared += result.lines_cleared
        del self.offers[offer_id]

        if is_terminal(self.grid, self.remaining_shapes):
            self.state = SessionState.SESSION_OVER
            logger.info("Block session over with score %d", self.score)
        elif not self.offers:
            self.state = SessionState.ADVANCING_CARD
            self._defer(NEXT_CARD_DELAY, self._advance_card)
        return result

    # --- deferred transitions ---

    def _defer(self, delay: float, transition) -> None:
        generation = self.generation

        def run():
            if generation != self.generation:
                logger.debug("Dropped transition from generation %d", generation)
                return
            if self.state != SessionState.ADVANCING_CARD:
                return
            transition()

        self.scheduler.schedule(delay, run)

    @property
    def is_over(self) -> bool:
        return self.state == SessionState.SESSION_OVER

    def summary(self) -> BlockSummary:
        return BlockSummary(
            score=self.score,
            answered=self.answered,
            correct=self.correct,
            blocks_placed=self.blocks_placed,
            lines_cleared=self.lines_cleared,
        )
