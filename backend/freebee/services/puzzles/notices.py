"""Ephemeral presentation state with a fixed lifetime.

Nothing here is persisted or read by the session controller. Clients get the
deadlines and render the countdowns themselves, the same way they render
stage deadlines.
"""

import time
from typing import Optional

from .session import GuessResult


class ExpiringMessage:
    """A message that reads as empty once ``duration_ms`` has passed."""

    def __init__(self, duration_ms: int, clock=time.time):
        self.duration_ms = duration_ms
        self._clock = clock
        self.text = ''
        self.expires_at: Optional[float] = None

    def show(self, text: str) -> None:
        self.text = text
        self.expires_at = self._clock() + self.duration_ms / 1000.0 if text else None

    def clear(self) -> None:
        self.show('')

    def current(self) -> str:
        if self.expires_at is None or self._clock() >= self.expires_at:
            return ''
        return self.text


def notice_for(result: GuessResult, config, now: float = None) -> dict:
    """Client-facing notice for one commit attempt."""
    now = time.time() if now is None else now
    if result.accepted:
        return {
            'kind': 'points',
            'points': result.points,
            'phases': {
                'in_until': now + int(config.get('POINTS_IN_MS', 200)) / 1000.0,
                'out_until': now + int(config.get('POINTS_OUT_MS', 400)) / 1000.0,
            },
        }
    return {
        'kind': 'message',
        'message': result.reason.message,
        'expires_at': now + int(config.get('MESSAGE_DURATION_MS', 2000)) / 1000.0,
    }
