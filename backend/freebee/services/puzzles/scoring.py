"""Word scoring and rank progression.

Pure functions only; the session controller and the transport layer both
import from here.
"""

import math
from typing import List, NamedTuple, Sequence


MIN_WORD_LENGTH = 4
PANGRAM_BONUS = 7


class RankLevel(NamedTuple):
    name: str
    fraction: float


# Ascending by fraction. Order matters: compute_rank keeps the last match.
RANK_LEVELS: List[RankLevel] = [
    RankLevel('Newbie', 0),
    RankLevel('Novice', 0.02),
    RankLevel('Fine', 0.05),
    RankLevel('Skilled', 0.08),
    RankLevel('Excellent', 0.15),
    RankLevel('Superb', 0.25),
    RankLevel('Marvellous', 0.4),
    RankLevel('Outstanding', 0.5),
    RankLevel('Queen Bee 🐝', 0.7),
]


def is_pangram(word: str, letters: str) -> bool:
    return all(letter in word for letter in letters)


def score_word(word: str, letters: str) -> int:
    """Point value of a single accepted word.

    Four-letter words are worth 1. Longer words score their length, plus
    PANGRAM_BONUS when they use every puzzle letter at least once.
    """
    if len(word) == MIN_WORD_LENGTH:
        return 1
    if is_pangram(word, letters):
        return len(word) + PANGRAM_BONUS
    return len(word)


def rank_threshold(total: int, fraction: float) -> int:
    return math.floor(total * fraction)


def compute_rank(score: int, total: int, rank_table: Sequence[RankLevel] = RANK_LEVELS) -> RankLevel:
    """Highest rank whose threshold the score has reached.

    The whole table is scanned and every satisfied entry overwrites the
    previous candidate, so the highest fraction wins.
    """
    rank = rank_table[0]
    for level in rank_table:
        if score >= rank_threshold(total, level.fraction):
            rank = level
    return rank


def rank_progress(score: int, total: int, rank_table: Sequence[RankLevel] = RANK_LEVELS) -> List[dict]:
    """Per-level view of the progression bar: reached, current or pending."""
    current = compute_rank(score, total, rank_table)
    progress = []
    for level in rank_table:
        if level.fraction < current.fraction:
            status = 'reached'
        elif level.fraction == current.fraction:
            status = 'current'
        else:
            status = 'pending'
        progress.append({
            'name': level.name,
            'fraction': level.fraction,
            'threshold': rank_threshold(total, level.fraction),
            'status': status,
        })
    return progress
