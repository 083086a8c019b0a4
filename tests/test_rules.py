from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "hmac_rps"
sys.path.insert(0, str(APP_DIR))

from rules import (  # type: ignore[import-not-found]  # noqa: E402
    DuplicateMovesError,
    EvenMoveCountError,
    InvalidMoveSetError,
    InvalidSelectionError,
    MoveSet,
    MultilineMoveError,
    RuleEngine,
    TooFewMovesError,
    opposite,
    parse_selection,
)

RPS = ["Rock", "Paper", "Scissors"]


def _labels(n: int) -> list[str]:
    return [f"m{i}" for i in range(n)]


def test_classical_rock_paper_scissors_table() -> None:
    rules = RuleEngine(RPS)
    rock, paper, scissors = 0, 1, 2

    assert rules.determine_outcome(rock, scissors) == "win"
    assert rules.determine_outcome(scissors, paper) == "win"
    assert rules.determine_outcome(paper, rock) == "win"

    assert rules.determine_outcome(scissors, rock) == "lose"
    assert rules.determine_outcome(paper, scissors) == "lose"
    assert rules.determine_outcome(rock, paper) == "lose"

    assert rules.dominance_matrix() == [
        ["draw", "lose", "win"],
        ["win", "draw", "lose"],
        ["lose", "win", "draw"],
    ]


def test_five_move_ring_reference_matrix() -> None:
    # Each move is beaten by the next two in the ring.
    rules = RuleEngine(["Rock", "Spock", "Paper", "Lizard", "Scissors"])
    assert rules.dominance_matrix() == [
        ["draw", "lose", "lose", "win", "win"],
        ["win", "draw", "lose", "lose", "win"],
        ["win", "win", "draw", "lose", "lose"],
        ["lose", "win", "win", "draw", "lose"],
        ["lose", "lose", "win", "win", "draw"],
    ]


@pytest.mark.parametrize("n", [3, 5, 7, 9, 15])
def test_draw_on_diagonal(n: int) -> None:
    rules = RuleEngine(_labels(n))
    for i in range(n):
        assert rules.determine_outcome(i, i) == "draw"


@pytest.mark.parametrize("n", [3, 5, 7, 9, 15])
def test_outcomes_are_antisymmetric(n: int) -> None:
    rules = RuleEngine(_labels(n))
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            forward = rules.determine_outcome(i, j)
            backward = rules.determine_outcome(j, i)
            assert forward in ("win", "lose")
            assert backward == opposite(forward)


@pytest.mark.parametrize("n", [3, 5, 7, 9, 15])
def test_each_move_wins_and_loses_half_the_others(n: int) -> None:
    rules = RuleEngine(_labels(n))
    half = (n - 1) // 2
    for row in rules.dominance_matrix():
        assert row.count("win") == half
        assert row.count("lose") == half
        assert row.count("draw") == 1


def test_beats_and_beaten_by_wrap_around() -> None:
    rules = RuleEngine(_labels(7))
    assert rules.beaten_by(5) == [6, 0, 1]
    assert rules.beats(1) == [0, 6, 5]
    for index in range(7):
        for other in rules.beaten_by(index):
            assert rules.determine_outcome(index, other) == "lose"
        for other in rules.beats(index):
            assert rules.determine_outcome(index, other) == "win"


@pytest.mark.parametrize(
    ("labels", "error"),
    [
        ([], TooFewMovesError),
        (["Rock"], TooFewMovesError),
        (["Rock", "Paper"], TooFewMovesError),
        (["a", "b", "c", "d"], EvenMoveCountError),
        (["Rock", "Paper", "Rock"], DuplicateMovesError),
    ],
)
def test_invalid_move_sets_are_rejected(labels: list[str], error: type[InvalidMoveSetError]) -> None:
    with pytest.raises(error):
        RuleEngine(labels)


def test_invalid_move_set_reasons_are_distinguishable() -> None:
    reasons = set()
    for labels in (["a", "b"], ["a", "b", "c", "d"], ["a", "b", "a"]):
        with pytest.raises(InvalidMoveSetError) as excinfo:
            MoveSet(labels)
        reasons.add(excinfo.value.reason)
        assert str(excinfo.value).startswith("Please")
    assert reasons == {"too_few", "even", "duplicates"}


def test_duplicate_error_names_the_duplicates() -> None:
    with pytest.raises(DuplicateMovesError) as excinfo:
        MoveSet(["a", "b", "c", "b", "a"])
    assert excinfo.value.duplicates == ["a", "b"]


def test_move_set_is_immutable_and_ordered() -> None:
    moves = MoveSet(RPS)
    assert moves.labels == ("Rock", "Paper", "Scissors")
    assert list(moves) == RPS
    assert moves[2] == "Scissors"
    with pytest.raises(AttributeError):
        moves.labels = ("x", "y", "z")  # type: ignore[misc]


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_out_of_range_index_is_rejected(index: int) -> None:
    rules = RuleEngine(RPS)
    with pytest.raises(InvalidSelectionError):
        rules.determine_outcome(index, 0)
    with pytest.raises(InvalidSelectionError):
        rules.determine_outcome(0, index)


def test_parse_selection_is_one_based() -> None:
    assert parse_selection("1", 3) == 0
    assert parse_selection(" 3 ", 3) == 2


@pytest.mark.parametrize("raw", ["", "abc", "0", "4", "-1", "1.5", "?"])
def test_parse_selection_rejects_bad_input(raw: str) -> None:
    with pytest.raises(InvalidSelectionError, match="between 1 and 3"):
        parse_selection(raw, 3)


def test_parse_selection_rejects_huge_digit_strings() -> None:
    with pytest.raises(InvalidSelectionError, match="between 1 and 3"):
        parse_selection("9" * 5000, 3)


def test_single_string_is_not_a_move_set() -> None:
    with pytest.raises(TypeError):
        MoveSet("abc")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        RuleEngine("abc")


@pytest.mark.parametrize("bad", ["Y\nComputer move: Z", "Y\r", "\n"])
def test_move_labels_must_fit_on_one_line(bad: str) -> None:
    with pytest.raises(MultilineMoveError) as excinfo:
        MoveSet(["X", bad, "W"])
    assert excinfo.value.reason == "multiline"
    assert excinfo.value.labels == [bad]
