from freebee import db, bcrypt
from flask_login import UserMixin
from freebee.services.puzzles.session import Puzzle
from datetime import datetime, timezone
import json


def _utcnow():
    return datetime.now(timezone.utc)


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class DailyPuzzle(db.Model):
    __tablename__ = 'puzzle'
    id = db.Column(db.Integer, primary_key=True)
    letters = db.Column(db.String(7), unique=True, nullable=False, index=True)
    center = db.Column(db.String(1), nullable=False)
    wordlist = db.Column(db.Text, nullable=False)  # JSON-encoded list of words
    total = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_puzzle(self):
        return Puzzle(
            letters=self.letters,
            center=self.center,
            wordlist=frozenset(json.loads(self.wordlist or '[]')),
            total=self.total,
        )

    def to_dict(self):
        # The word list stays on the server
        return {
            'id': self.id,
            'letters': self.letters,
            'center': self.center,
            'total': self.total,
            'word_count': len(json.loads(self.wordlist or '[]')),
        }


class GuessedWords(db.Model):
    __tablename__ = 'guessed_words'
    __table_args__ = (db.UniqueConstraint('owner', 'storage_key', name='uq_guessed_words_owner_key'),)
    id = db.Column(db.Integer, primary_key=True)
    owner = db.Column(db.String(64), nullable=False, index=True)  # "user:<id>" or "guest:<uuid>"
    storage_key = db.Column(db.String(32), nullable=False)  # "guessed_" + letters
    words = db.Column(db.Text, nullable=False, default='[]')  # JSON-encoded ordered list
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
