"""Live session controllers, one per player.

Runtime-only state kept in process, like the per-game runtime dicts of the
game server. A player's controller is rebuilt from the store whenever the
current puzzle changes, which discards the old pending guess.

Only players who have sent a mutating intent get a live entry. Entries for
players on an older puzzle are dropped when a new entry is made, and the
least recently used entry goes once MAX_LIVE_SESSIONS is reached. Dropping
an entry loses its pending guess and toast, never its guessed words.
"""

import string
import uuid
from collections import OrderedDict
from typing import Dict, Optional

from flask import current_app, session
from flask_login import current_user

from .notices import ExpiringMessage
from .session import GuessResult, Puzzle, SessionController
from .source import current_puzzle
from .store import SqlGuessStore


_sessions: "OrderedDict[str, SessionController]" = OrderedDict()
_messages: Dict[str, ExpiringMessage] = {}


def current_owner() -> str:
    """Identity that scopes persisted progress: the user, else a guest id."""
    if current_user and current_user.is_authenticated:
        return f"user:{current_user.id}"
    guest_id = session.get('guest_id')
    if not guest_id:
        guest_id = uuid.uuid4().hex
        session['guest_id'] = guest_id
    return f"guest:{guest_id}"


def normalize_letter(value) -> Optional[str]:
    """Lowercased letter when ``value`` is one of A-Z/a-z, else None."""
    if not isinstance(value, str) or len(value) != 1:
        return None
    letter = value.lower()
    return letter if letter in string.ascii_lowercase else None


def get_session(owner: str, create: bool = True) -> Optional[SessionController]:
    """Controller for ``owner`` on the current puzzle, or None without a puzzle.

    With ``create=False`` a player without a live entry gets a throwaway
    controller restored from the store, and nothing is registered.
    """
    puzzle = current_puzzle()
    if puzzle is None:
        return None
    controller = _sessions.get(owner)
    if controller is not None and controller.puzzle == puzzle:
        _sessions.move_to_end(owner)
        return controller
    if controller is not None:
        current_app.logger.info(
            f"[session-reset] owner={owner} puzzle {controller.puzzle.letters} -> {puzzle.letters}"
        )
        _drop(owner)
    if not create:
        return SessionController(puzzle, SqlGuessStore(owner))
    puzzle = _prune(puzzle)
    controller = SessionController(puzzle, SqlGuessStore(owner))
    _sessions[owner] = controller
    return controller


def _drop(owner: str) -> None:
    _sessions.pop(owner, None)
    _messages.pop(owner, None)


def _prune(puzzle: Puzzle) -> Puzzle:
    """Make room for one more entry; returns the Puzzle instance to share."""
    stale = [owner for owner, c in _sessions.items() if c.puzzle != puzzle]
    for owner in stale:
        _drop(owner)
    limit = max(1, int(current_app.config.get('MAX_LIVE_SESSIONS', 1000)))
    while len(_sessions) >= limit:
        oldest = next(iter(_sessions))
        current_app.logger.info(f"[session-evict] owner={oldest} live={len(_sessions)} limit={limit}")
        _drop(oldest)
    if _sessions:
        return next(iter(_sessions.values())).puzzle
    return puzzle


def _message_for(owner: str) -> ExpiringMessage:
    message = _messages.get(owner)
    if message is None:
        message = ExpiringMessage(int(current_app.config.get('MESSAGE_DURATION_MS', 2000)))
        _messages[owner] = message
    return message


def commit(owner: str, controller: SessionController) -> GuessResult:
    message = _message_for(owner)
    message.clear()
    result = controller.commit_guess()
    if result.accepted:
        current_app.logger.info(
            f"[commit] owner={owner} puzzle={controller.puzzle.letters} word={result.word} points={result.points} score={controller.score}"
        )
    else:
        message.show(result.reason.message)
        current_app.logger.info(
            f"[reject] owner={owner} puzzle={controller.puzzle.letters} word={result.word!r} reason={result.reason.name}"
        )
    return result


def session_payload(owner: str, controller: SessionController) -> dict:
    payload = controller.to_dict()
    message = _messages.get(owner)
    payload['message'] = message.current() if message else ''
    return payload


def live_session_count() -> int:
    return len(_sessions)


def reset_sessions() -> None:
    _sessions.clear()
    _messages.clear()
