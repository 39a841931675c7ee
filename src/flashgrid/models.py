"""Data classes for flashcards, sets and game results."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Flashcard:
    id: str
    question: str
    answer: str
    image_url: Optional[str] = None
    question_language: Optional[str] = None
    answer_language: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class FlashcardSet:
    id: str
    title: str
    cards: list = field(default_factory=list)
    description: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class PlacementResult:
    placed: bool
    grid: list
    rows_cleared: int = 0
    cols_cleared: int = 0

    @property
    def lines_cleared(self) -> int:
        return self.rows_cleared + self.cols_cleared

    @property
    def bonus(self) -> int:
        from flashgrid.grid import line_clear_bonus
        return line_clear_bonus(self.rows_cleared, self.cols_cleared)


@dataclass
class FlipSummary:
    total: int
    known: int
    unknown: int

    @property
    def unrated(self) -> int:
        return self.total - self.known - self.unknown


@dataclass
class BlockSummary:
    score: int
    answered: int = 0
    correct: int = 0
    blocks_placed: int = 0
    lines_cleared: int = 0
