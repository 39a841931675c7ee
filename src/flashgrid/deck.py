"""Shuffled, consumable deck of flashcards for one study pass."""
import logging
import random

logger = logging.getLogger(__name__)


def shuffled(items: list, rng: random.Random = None) -> list:
    """Return a uniformly shuffled copy of `items`."""
    copy = list(items)
    (rng or random).shuffle(copy)
    return copy


class Deck:
    """Draws cards from a shuffled copy of a set, reshuffling when exhausted.

    A card never repeats within one shuffle cycle. Each new cycle is a fresh
    shuffle of the original card list, not of what was left over.
    """

    def __init__(self, rng: random.Random = None):
        self.rng = rng or random.Random()
        self.cards: list = []
        self.pending: list = []
        self.current = None
        self.cycles = 0

    def start(self, card_set):
        self.cards = list(card_set.cards)
        self.cycles = 0
        self.pending = []
        self.current = None
        if not self.cards:
            return None
        return self._reshuffle()

    def next(self):
        if not self.cards:
            return None
        if not self.pending:
            return self._reshuffle()
        self.current = self.pending.pop(0)
        return self.current

    def _reshuffle(self):
        order = shuffled(self.cards, self.rng)
        self.cycles += 1
        logger.debug("Shuffled deck of %d cards (cycle %d)", len(order), self.cycles)
        self.current = order[0]
        self.pending = order[1:]
        return self.current

    def __len__(self) -> int:
        return len(self.cards)
