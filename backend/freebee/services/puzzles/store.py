"""SQL-backed guessed-word store, one row per (player, storage key)."""

import json
from datetime import datetime, timezone
from typing import List

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from freebee import db
from freebee.models import GuessedWords


class SqlGuessStore:
    """Store backed by the ``guessed_words`` table, scoped to one player.

    Must be used inside an application context. Failures never reach the
    session controller: a failed or unreadable read comes back empty and a
    failed write is rolled back and logged.
    """

    def __init__(self, owner: str):
        self.owner = owner

    def _row(self, key: str):
        return GuessedWords.query.filter_by(owner=self.owner, storage_key=key).first()

    def read(self, key: str) -> List[str]:
        try:
            row = self._row(key)
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.warning(f"[store-read] owner={self.owner} key={key} failed: {exc}")
            return []
        if not row or not row.words:
            return []
        try:
            words = json.loads(row.words)
        except ValueError:
            current_app.logger.warning(f"[store-read] owner={self.owner} key={key} unreadable row, treating as empty")
            return []
        if not isinstance(words, list):
            return []
        return [w for w in words if isinstance(w, str)]

    def write(self, key: str, words: List[str]) -> None:
        try:
            row = self._row(key)
            if row is None:
                row = GuessedWords(owner=self.owner, storage_key=key)
            row.words = json.dumps(list(words))
            row.updated_at = datetime.now(timezone.utc)
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.warning(f"[store-write] owner={self.owner} key={key} failed: {exc}")
