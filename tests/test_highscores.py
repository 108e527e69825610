import pytest
import numpy as np

from mathrace.highscores import (
    HighScores, ScoreEntry, ScoreTier, clean_player_name, format_score_row, tier_name, today_label
)
from mathrace.storage import MemoryScoreStorage
from mathrace.errors import InvalidArgumentError, StorageUnavailableError
from datetime import date


def fill(ledger, scores, tier=ScoreTier.NORMAL):
    for i, score in enumerate(scores):
        ledger.add_score(f"P{i}", score, tier)


def test_zero_is_never_a_high_score(ledger):
    for tier in ScoreTier:
        assert ledger.is_high_score(0, tier) is False
    assert ledger.is_high_score(-10, 2) is False


def test_empty_board_needs_fifty(ledger):
    assert ledger.is_high_score(49, ScoreTier.NORMAL) is False
    assert ledger.is_high_score(50, ScoreTier.NORMAL) is True


def test_partial_board_still_needs_fifty(ledger):
    fill(ledger, [500, 400])
    assert ledger.is_high_score(10, ScoreTier.NORMAL) is False
    assert ledger.is_high_score(50, ScoreTier.NORMAL) is True


def test_full_board_must_beat_fifth_place(ledger):
    fill(ledger, [100, 90, 80, 70, 60])
    assert ledger.is_high_score(60, ScoreTier.NORMAL) is False
    assert ledger.is_high_score(61, ScoreTier.NORMAL) is True


def test_full_board_compares_against_lowest_entry(ledger):
    fill(ledger, [100, 90, 80, 70, 60])
    assert ledger.is_high_score(65, ScoreTier.NORMAL) is True
    assert ledger.is_high_score(55, ScoreTier.NORMAL) is False


def test_matching_fifth_place_does_not_qualify(ledger):
    fill(ledger, [100, 90, 80, 70, 65])
    assert ledger.is_high_score(65, ScoreTier.NORMAL) is False
    assert ledger.is_high_score(75, ScoreTier.NORMAL) is True


def test_rank(ledger):
    fill(ledger, [100, 90, 80, 70, 60])
    assert ledger.get_rank(85, ScoreTier.NORMAL) == 3
    assert ledger.get_rank(1000, ScoreTier.NORMAL) == 1
    assert ledger.get_rank(60, ScoreTier.NORMAL) == 6
    assert ledger.get_rank(10, ScoreTier.NORMAL) == 6
    assert ledger.get_rank(85, ScoreTier.FAST) == 1


def test_rank_does_not_insert(ledger):
    fill(ledger, [100])
    ledger.get_rank(500, ScoreTier.NORMAL)
    assert [e.score for e in ledger.get_scores(ScoreTier.NORMAL)] == [100]


def test_add_keeps_top_five_descending(ledger):
    fill(ledger, [50, 80, 30, 90, 10, 70])
    assert [e.score for e in ledger.get_scores(ScoreTier.NORMAL)] == [90, 80, 70, 50, 30]


def test_ties_keep_insertion_order(ledger):
    ledger.add_score("First", 80, 1)
    ledger.add_score("Second", 80, 1)
    ledger.add_score("Top", 90, 1)
    assert [e.name for e in ledger.get_scores(1)] == ["Top", "First", "Second"]


def test_tiers_are_independent(ledger):
    ledger.add_score("Slow", 60, ScoreTier.VERY_SLOW)
    ledger.add_score("Fast", 70, ScoreTier.VERY_FAST)
    assert [e.name for e in ledger.get_scores(0)] == ["Slow"]
    assert [e.name for e in ledger.get_scores(4)] == ["Fast"]
    assert ledger.get_scores(2) == ()


def test_entries_carry_name_score_and_date(ledger):
    ledger.add_score("Ada", 120, 3)
    assert ledger.get_scores(3) == (ScoreEntry("Ada", 120, "10/17/2026"),)


def test_every_add_is_saved(ledger, storage):
    fill(ledger, [50, 60])
    assert storage.saves == 2
    assert storage.blob["2"] == [
        {"name": "P1", "score": 60, "date": "10/17/2026"},
        {"name": "P0", "score": 50, "date": "10/17/2026"},
    ]
    assert storage.blob["0"] == []


def test_get_scores_is_read_only(ledger):
    fill(ledger, [100])
    scores = ledger.get_scores(2)
    with pytest.raises(AttributeError):
        scores.append(ScoreEntry("X", 1, "d"))
    assert len(ledger.get_scores(2)) == 1


@pytest.mark.parametrize("bad", [5, -1, 99, True, "fast", 2.0, None])
def test_unknown_tiers_are_rejected(ledger, bad):
    with pytest.raises(InvalidArgumentError):
        ledger.get_scores(bad)
    with pytest.raises(InvalidArgumentError):
        ledger.add_score("X", 100, bad)
    with pytest.raises(InvalidArgumentError):
        ledger.is_high_score(100, bad)
    with pytest.raises(InvalidArgumentError):
        ledger.get_rank(100, bad)
    assert set(ledger.scores) == set(ScoreTier)


def test_negative_score_rejected(ledger):
    with pytest.raises(InvalidArgumentError):
        ledger.add_score("X", -5, 2)


def test_round_trip_through_storage(ledger, storage):
    fill(ledger, [50, 80, 30, 90, 10, 70])
    ledger.add_score("Zed", 55, ScoreTier.FAST)

    reloaded = HighScores(storage)
    for tier in ScoreTier:
        assert reloaded.get_scores(tier) == ledger.get_scores(tier)


def test_round_trip_through_blob(ledger):
    fill(ledger, [300, 200, 100])
    copy = HighScores.from_blob(ledger.to_blob())
    assert copy.get_scores(2) == ledger.get_scores(2)
    assert copy.storage is None


def test_missing_blob_is_an_empty_ledger():
    ledger = HighScores(MemoryScoreStorage())
    assert all(ledger.get_scores(t) == () for t in ScoreTier)


class BrokenStorage:
    def __init__(self, blob=None):
        self.blob = blob

    def load(self):
        raise StorageUnavailableError("disk on fire")

    def save(self, blob):
        raise StorageUnavailableError("disk on fire")


def test_load_failure_degrades_to_empty(capsys):
    ledger = HighScores(BrokenStorage())
    assert ledger.get_scores(2) == ()
    assert "Warning" in capsys.readouterr().out


def test_save_failure_is_raised_but_score_is_kept():
    ledger = HighScores(BrokenStorage())
    with pytest.raises(StorageUnavailableError):
        ledger.add_score("Ada", 100, 2)
    assert [e.name for e in ledger.get_scores(2)] == ["Ada"]


def test_malformed_blob_degrades_to_empty(capsys):
    ledger = HighScores(MemoryScoreStorage({"2": [{"name": "no score"}]}))
    assert ledger.get_scores(2) == ()
    assert "malformed" in capsys.readouterr().out


def test_unknown_tier_keys_are_dropped_on_load(capsys):
    blob = {"2": [{"name": "Ada", "score": 90, "date": "1/1/2026"}], "7": []}
    ledger = HighScores(MemoryScoreStorage(blob))
    assert [e.name for e in ledger.get_scores(2)] == ["Ada"]
    assert set(ledger.scores) == set(ScoreTier)
    assert "'7'" in capsys.readouterr().out


def test_oversized_saved_lists_are_capped():
    blob = {"0": [{"name": f"P{i}", "score": i * 10, "date": "d"} for i in range(8)]}
    ledger = HighScores(MemoryScoreStorage(blob))
    assert [e.score for e in ledger.get_scores(0)] == [70, 60, 50, 40, 30]


@pytest.mark.parametrize("raw, expected", [
    ("Ada", "Ada"),
    ("  Ada Lovelace  ", "Ada Lovelace"),
    ("R2-D2!", "R2D2"),
    ("abcdefghijklmnopqrstuvwxyz", "abcdefghijklmno"),
    ("", "Anonymous"),
    ("!!!", "Anonymous"),
    (None, "Anonymous"),
])
def test_clean_player_name(raw, expected):
    assert clean_player_name(raw) == expected


def test_names_are_cleaned_on_add(ledger):
    ledger.add_score("<script>", 100, 2)
    assert ledger.get_scores(2)[0].name == "script"


def test_tier_names():
    assert tier_name(0) == "Very Slow"
    assert tier_name(ScoreTier.VERY_FAST) == "Very Fast"
    assert tier_name(9) == "Unknown"
    assert ScoreTier.NORMAL.label == "Normal"


def test_today_label():
    assert today_label(date(2026, 3, 7)) == "3/7/2026"


def test_format_score_row():
    row = format_score_row(1, ScoreEntry("Ada", 120, "1/2/2026"))
    assert row == "1.  Ada                120    1/2/2026"
    long_row = format_score_row(2, ScoreEntry("Abcdefghijklmno", 5, "d"))
    assert "Abcdefghijkl..." in long_row


def test_numpy_tier_is_accepted(ledger):
    ledger.add_score("Ada", 100, np.int64(2))
    assert [e.name for e in ledger.get_scores(ScoreTier.NORMAL)] == ["Ada"]


def test_one_malformed_tier_keeps_the_others(capsys):
    blob = {
        "0": [{"name": "Ada", "score": 90, "date": "1/1/2026"}],
        "2": [{"name": "broken"}],
    }
    storage = MemoryScoreStorage(blob)
    ledger = HighScores(storage, today=lambda: "10/17/2026")
    assert [e.name for e in ledger.get_scores(0)] == ["Ada"]
    assert ledger.get_scores(2) == ()
    assert "Normal" in capsys.readouterr().out

    # Saving something else must not wipe the tier that loaded fine
    ledger.add_score("Bob", 60, 4)
    assert [e["name"] for e in storage.blob["0"]] == ["Ada"]
    assert [e["name"] for e in storage.blob["4"]] == ["Bob"]
