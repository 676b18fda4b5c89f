"""Puzzle source: JSON parsing, storage and the daily fetch."""

import json
from typing import Optional

import requests

from freebee import db
from freebee.models import DailyPuzzle
from .session import Puzzle


PUZZLE_LETTER_COUNT = 7


class PuzzleFormatError(ValueError):
    pass


def parse_puzzle(data) -> Puzzle:
    """Build a Puzzle from ``{letters, center, wordlist, total}``.

    Raises PuzzleFormatError when the shape is wrong. The word list is
    lowercased; no attempt is made to check words against the letters.
    """
    if not isinstance(data, dict):
        raise PuzzleFormatError('Puzzle must be a JSON object')
    letters = data.get('letters')
    center = data.get('center')
    wordlist = data.get('wordlist')
    total = data.get('total')

    if not isinstance(letters, str) or len(letters) != PUZZLE_LETTER_COUNT:
        raise PuzzleFormatError(f'letters must be a string of {PUZZLE_LETTER_COUNT} characters')
    letters = letters.lower()
    if not letters.isalpha() or len(set(letters)) != PUZZLE_LETTER_COUNT:
        raise PuzzleFormatError('letters must be distinct alphabetic characters')
    if not isinstance(center, str) or len(center) != 1 or center.lower() not in letters:
        raise PuzzleFormatError('center must be one of the puzzle letters')
    if not isinstance(wordlist, list) or not all(isinstance(w, str) for w in wordlist):
        raise PuzzleFormatError('wordlist must be a list of strings')
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise PuzzleFormatError('total must be a non-negative integer')

    return Puzzle(
        letters=letters,
        center=center.lower(),
        wordlist=frozenset(w.lower() for w in wordlist),
        total=total,
    )


def save_puzzle(puzzle: Puzzle) -> DailyPuzzle:
    """Insert the puzzle, or refresh the stored copy with the same letters.

    The saved puzzle becomes the current one.
    """
    row = DailyPuzzle.query.filter_by(letters=puzzle.letters).first()
    if row is not None:
        db.session.delete(row)
        db.session.flush()
    row = DailyPuzzle(
        letters=puzzle.letters,
        center=puzzle.center,
        wordlist=json.dumps(sorted(puzzle.wordlist)),
        total=puzzle.total,
    )
    db.session.add(row)
    db.session.commit()
    return row


def current_puzzle() -> Optional[Puzzle]:
    row = DailyPuzzle.query.order_by(DailyPuzzle.id.desc()).first()
    return row.to_puzzle() if row else None


def fetch_today(url: str, timeout: float = 10) -> Puzzle:
    """GET today's puzzle from ``url``. Network errors propagate."""
    res = requests.get(url, timeout=timeout)
    res.raise_for_status()
    try:
        data = res.json()
    except ValueError as exc:
        raise PuzzleFormatError(f'Puzzle source returned invalid JSON: {exc}') from exc
    return parse_puzzle(data)
