from __future__ import annotations

from pathlib import Path

from neonslither.leaderboard import LeaderboardStore, sanitize_name, validate_score


def test_leaderboard_keeps_top_ten_sorted(tmp_path: Path) -> None:
    store = LeaderboardStore(tmp_path / "scores.json")
    for score in (30, 5, 120, 70, 10, 90, 60, 15, 200, 40, 80, 1):
        assert store.save_score("pilot", score)
    scores = [entry.score for entry in store.get_scores()]
    assert len(scores) == 10
    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 200
    assert 1 not in scores and 5 not in scores
    assert store.best_score() == 200


def test_missing_or_corrupt_file_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "scores.json"
    store = LeaderboardStore(path)
    assert store.get_scores() == []
    path.write_text("{not json", encoding="utf-8")
    assert store.get_scores() == []
    assert store.best_score() == 0


def test_saved_name_is_sanitized(tmp_path: Path) -> None:
    store = LeaderboardStore(tmp_path / "scores.json")
    store.save_score('  <script>alert("xss")</script>PlayerOne  ', 50)
    name = store.get_scores()[0].name
    assert "<" not in name and ">" not in name
    assert len(name) <= 15


def test_sanitize_name_rules() -> None:
    assert sanitize_name("  <b>Neo</b>  ") == "bNeo/b"
    assert sanitize_name("x" * 40) == "x" * 15
    assert sanitize_name("<<>>") == ""
    assert len(sanitize_name("a" * 40, max_length=5)) == 5


def test_validate_score_threshold() -> None:
    assert validate_score(0, 0)
    assert validate_score(90, 10)
    assert not validate_score(500, 10)
    assert not validate_score(-1, 100)
