"""Session state machine for one puzzle.

The input layer forwards four intents (append a letter, delete the last
letter, clear the guess, commit the guess). Commit runs a fixed validation
pipeline with early exit; accepted words are scored, remembered in order and
written back to the injected store under the puzzle's storage key.
"""

import enum
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from .scoring import (
    MIN_WORD_LENGTH,
    RANK_LEVELS,
    RankLevel,
    compute_rank,
    rank_progress,
    score_word,
)
from .ports import GuessStore, storage_key


@dataclass(frozen=True)
class Puzzle:
    letters: str
    center: str
    wordlist: FrozenSet[str]
    total: int

    @property
    def key(self) -> str:
        return storage_key(self.letters)


class RejectionReason(enum.Enum):
    ALREADY_GUESSED = 'Already guessed!'
    TOO_SHORT = 'At least 4 letters!'
    MISSING_CENTER_LETTER = "You didn't use center letter!"
    NOT_IN_WORD_LIST = 'Not in word list'

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class GuessResult:
    word: str
    accepted: bool
    points: int = 0
    reason: Optional[RejectionReason] = None

    def to_dict(self):
        return {
            'word': self.word,
            'accepted': self.accepted,
            'points': self.points,
            'reason': self.reason.name if self.reason else None,
            'message': self.reason.message if self.reason else None,
        }


class SessionController:
    """Mutable session for a single puzzle.

    ``score`` is cached alongside ``guessed_words``; both only change together
    in ``_accept``.
    """

    def __init__(self, puzzle: Puzzle, store: GuessStore, rank_table=RANK_LEVELS):
        self.puzzle = puzzle
        self.store = store
        self.rank_table = rank_table
        self.pending_guess = ''
        self._guessed: List[str] = []
        self._score = 0
        for word in store.read(puzzle.key):
            if word not in self._guessed:
                self._guessed.append(word)
                self._score += score_word(word, puzzle.letters)

    @property
    def guessed_words(self) -> List[str]:
        return list(self._guessed)

    @property
    def score(self) -> int:
        return self._score

    @property
    def rank(self) -> RankLevel:
        return compute_rank(self._score, self.puzzle.total, self.rank_table)

    @property
    def progress(self) -> List[dict]:
        return rank_progress(self._score, self.puzzle.total, self.rank_table)

    # Precondition: ch is a lowercase a-z letter. Callers validate input.
    def append_letter(self, ch: str) -> None:
        self.pending_guess += ch

    def delete_last_letter(self) -> None:
        self.pending_guess = self.pending_guess[:-1]

    def clear_guess(self) -> None:
        self.pending_guess = ''

    def _validate(self, word: str) -> Optional[RejectionReason]:
        if word in self._guessed:
            return RejectionReason.ALREADY_GUESSED
        if len(word) < MIN_WORD_LENGTH:
            return RejectionReason.TOO_SHORT
        if self.puzzle.center not in word:
            return RejectionReason.MISSING_CENTER_LETTER
        if word not in self.puzzle.wordlist:
            return RejectionReason.NOT_IN_WORD_LIST
        return None

    def _accept(self, word: str) -> int:
        points = score_word(word, self.puzzle.letters)
        self._guessed.append(word)
        self._score += points
        self.store.write(self.puzzle.key, list(self._guessed))
        return points

    def commit_guess(self) -> GuessResult:
        word = self.pending_guess
        self.clear_guess()
        reason = self._validate(word)
        if reason is not None:
            return GuessResult(word=word, accepted=False, reason=reason)
        return GuessResult(word=word, accepted=True, points=self._accept(word))

    def to_dict(self):
        rank = self.rank
        return {
            'letters': self.puzzle.letters,
            'center': self.puzzle.center,
            'total': self.puzzle.total,
            'pending_guess': self.pending_guess,
            'guessed_words': self.guessed_words,
            'guessed_count': len(self._guessed),
            'score': self._score,
            'rank': {'name': rank.name, 'fraction': rank.fraction},
            'levels': self.progress,
        }
