from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Literal, Sequence

Outcome = Literal["win", "lose", "draw"]

MIN_MOVES = 3


class InvalidMoveSetError(ValueError):
    reason = "invalid"


class TooFewMovesError(InvalidMoveSetError):
    reason = "too_few"

    def __init__(self, count: int) -> None:
        super().__init__(f"Please enter at least {MIN_MOVES} moves (got {count})")
        self.count = count


class EvenMoveCountError(InvalidMoveSetError):
    reason = "even"

    def __init__(self, count: int) -> None:
        super().__init__(f"Please enter an odd number of moves (got {count})")
        self.count = count


class DuplicateMovesError(InvalidMoveSetError):
    reason = "duplicates"

    def __init__(self, duplicates: list[str]) -> None:
        super().__init__("Please remove duplicate moves: " + ", ".join(duplicates))
        self.duplicates = duplicates


class MultilineMoveError(InvalidMoveSetError):
    reason = "multiline"

    def __init__(self, labels: list[str]) -> None:
        super().__init__("Please keep each move on one line: " + ", ".join(repr(label) for label in labels))
        self.labels = labels


class InvalidSelectionError(ValueError):
    pass


def opposite(outcome: Outcome) -> Outcome:
    if outcome == "win":
        return "lose"
    if outcome == "lose":
        return "win"
    return "draw"


@dataclass(frozen=True)
class MoveSet:
    """Ordered, distinct move labels. Order defines the dominance ring."""

    labels: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.labels, str):
            raise TypeError("labels must be a sequence of move names, not a single string")
        object.__setattr__(self, "labels", tuple(self.labels))
        self._validate()

    def _validate(self) -> None:
        count = len(self.labels)
        if count < MIN_MOVES:
            raise TooFewMovesError(count)
        if count % 2 == 0:
            raise EvenMoveCountError(count)
        counts = Counter(self.labels)
        duplicates = [label for label, seen in counts.items() if seen > 1]
        if duplicates:
            raise DuplicateMovesError(duplicates)

        # Labels are embedded line by line in the HMAC message.
        multiline = [label for label in self.labels if "\n" in label or "\r" in label]
        if multiline:
            raise MultilineMoveError(multiline)

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)

    def __getitem__(self, index: int) -> str:
        return self.labels[index]


def parse_selection(raw: str, move_count: int) -> int:
    """Turn a 1-based menu choice into a 0-based move index."""
    text = raw.strip()
    if not text.isdecimal():
        raise InvalidSelectionError(f"Invalid input. Please enter a number between 1 and {move_count}")
    try:
        number = int(text)
    except ValueError as exc:
        raise InvalidSelectionError(f"Invalid input. Please enter a number between 1 and {move_count}") from exc
    if not 1 <= number <= move_count:
        raise InvalidSelectionError(f"Invalid input. Please enter a number between 1 and {move_count}")
    return number - 1


class RuleEngine:
    """Circular dominance over an odd number of moves.

    Each move is beaten by the ``(N - 1) / 2`` moves that follow it in the
    ring (wrapping around) and beats the ``(N - 1) / 2`` moves before it.
    For ``Rock, Paper, Scissors`` that gives the classical table: Paper
    follows Rock and beats it, Rock wraps around to follow Scissors.
    """

    def __init__(self, moves: MoveSet | Sequence[str]) -> None:
        self.moves = moves if isinstance(moves, MoveSet) else MoveSet(moves)
        self.half_span = (len(self.moves) - 1) // 2

    def __len__(self) -> int:
        return len(self.moves)

    def check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidSelectionError(f"move index must be an int, got {type(index).__name__}")
        if not 0 <= index < len(self.moves):
            raise InvalidSelectionError(f"move index {index} out of range [0, {len(self.moves)})")
        return index

    def beaten_by(self, index: int) -> list[int]:
        """Indices of the moves that beat ``index``."""
        self.check_index(index)
        count = len(self.moves)
        return [(index + step) % count for step in range(1, self.half_span + 1)]

    def beats(self, index: int) -> list[int]:
        """Indices of the moves that ``index`` beats."""
        self.check_index(index)
        count = len(self.moves)
        return [(index - step) % count for step in range(1, self.half_span + 1)]

    def determine_outcome(self, visible_index: int, hidden_index: int) -> Outcome:
        self.check_index(visible_index)
        self.check_index(hidden_index)
        if visible_index == hidden_index:
            return "draw"

        offset = (hidden_index - visible_index) % len(self.moves)
        # Forward half of the ring beats the visible move.
        if offset <= self.half_span:
            return "lose"
        return "win"

    def dominance_matrix(self) -> list[list[Outcome]]:
        """``matrix[row][col]`` is the outcome for the row move against the column move."""
        count = len(self.moves)
        return [[self.determine_outcome(row, col) for col in range(count)] for row in range(count)]
