"""
HIGHSCORES.PY - Top 5 scores for every game speed
Answers "is this a new high score?" and "what rank would it get?"
and saves the table after every new entry
"""

import re
from dataclasses import dataclass, asdict
from datetime import date
from enum import IntEnum
import numpy as np
from mathrace.Constants import (
    SPEED_NAMES, TOP_SCORES, MIN_HIGH_SCORE, MAX_NAME_LENGTH, DEFAULT_PLAYER_NAME, DEBUG_MODE
)
from mathrace.errors import InvalidArgumentError, StorageUnavailableError


class ScoreTier(IntEnum):
    VERY_SLOW = 0
    SLOW = 1
    NORMAL = 2
    FAST = 3
    VERY_FAST = 4

    @property
    def label(self):
        return SPEED_NAMES[self.value]


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int
    date: str


_NAME_CHARS = re.compile(r'[^a-zA-Z0-9 ]')


def clean_player_name(raw):
    """Letters, digits and spaces only, max 15 chars, 'Anonymous' if nothing is left"""
    name = _NAME_CHARS.sub('', raw or '')[:MAX_NAME_LENGTH].strip()
    return name or DEFAULT_PLAYER_NAME


def today_label(day=None):
    day = day or date.today()
    return f"{day.month}/{day.day}/{day.year}"


def tier_name(tier):
    try:
        return ScoreTier(tier).label
    except ValueError:
        return 'Unknown'


def as_tier(tier):
    if isinstance(tier, bool) or not isinstance(tier, (int, np.integer)):
        raise InvalidArgumentError(f"unknown score tier {tier!r}")
    try:
        return ScoreTier(tier)
    except ValueError:
        raise InvalidArgumentError(f"unknown score tier {tier!r} (expected 0-4)") from None


def format_score_row(rank, entry):
    """One line of the table: rank, name, score, date"""
    name = entry.name if len(entry.name) <= 12 else entry.name[:12] + '...'
    return f"{rank}.".ljust(4) + f"{name:<15} {entry.score:>6}    {entry.date}"


class HighScores:
    def __init__(self, storage=None, today=today_label):
        self.storage = storage
        self.today = today
        self.scores = {tier: [] for tier in ScoreTier}
        if storage is not None:
            self.load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self):
        """Read the table once - any problem just means an empty table"""
        self.scores = {tier: [] for tier in ScoreTier}
        try:
            blob = self.storage.load()
        except StorageUnavailableError as e:
            print(f"Warning: high scores unavailable, starting empty ({e})")
            return
        if blob is None:
            return
        try:
            self.scores = self._parse(blob)
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            print(f"Warning: high score data is malformed, starting empty ({e!r})")
        if DEBUG_MODE:
            print(f"Loaded high scores: { {t.label: len(s) for t, s in self.scores.items()} }")

    @staticmethod
    def _parse(blob):
        scores = {tier: [] for tier in ScoreTier}
        for key, entries in blob.items():
            try:
                tier = ScoreTier(int(key))
            except ValueError:
                print(f"Warning: ignoring scores for unknown tier {key!r}")
                continue
            try:
                parsed = [ScoreEntry(str(e['name']), int(e['score']), str(e['date'])) for e in entries]
            except (TypeError, ValueError, KeyError) as e:
                # Only this speed loses its scores, the others still load
                print(f"Warning: high scores for {tier.label} are malformed, skipping them ({e!r})")
                continue
            scores[tier] = sorted(parsed, key=lambda e: e.score, reverse=True)[:TOP_SCORES]
        return scores

    def to_blob(self):
        return {str(int(tier)): [asdict(e) for e in entries] for tier, entries in self.scores.items()}

    @classmethod
    def from_blob(cls, blob, storage=None):
        ledger = cls(storage=None)
        ledger.scores = cls._parse(blob)
        ledger.storage = storage
        return ledger

    def save(self):
        if self.storage is not None:
            self.storage.save(self.to_blob())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_scores(self, tier):
        return tuple(self.scores[as_tier(tier)])

    def is_high_score(self, score, tier):
        entries = self.scores[as_tier(tier)]
        if score <= 0:
            return False
        # Board not full yet - still need the minimum to count
        if len(entries) < TOP_SCORES:
            return score >= MIN_HIGH_SCORE
        return score > entries[-1].score

    def get_rank(self, score, tier):
        entries = self.scores[as_tier(tier)]
        for rank, entry in enumerate(entries, 1):
            if score > entry.score:
                return rank
        return len(entries) + 1

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def add_score(self, name, score, tier):
        """Insert, keep the best 5, save. Save errors are raised AFTER the table is updated"""
        tier = as_tier(tier)
        if score < 0:
            raise InvalidArgumentError(f"score must be >= 0, got {score}")
        entries = self.scores[tier]
        entries.append(ScoreEntry(clean_player_name(name), int(score), self.today()))
        # sorted() is stable: equal scores keep their insertion order
        self.scores[tier] = sorted(entries, key=lambda e: e.score, reverse=True)[:TOP_SCORES]
        self.save()
