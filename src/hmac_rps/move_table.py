from __future__ import annotations

from typing import Iterable

from rules import RuleEngine

CORNER = "user \\ computer"


def format_move_list(moves: Iterable[str]) -> str:
    return "\n".join(f"{number} - {label}" for number, label in enumerate(moves, start=1))


def format_dominance_table(rules: RuleEngine) -> str:
    """Rows are the user's move, columns the computer's; cells read from the row's side."""
    labels = list(rules.moves)
    matrix = rules.dominance_matrix()

    first_width = max(len(CORNER), *(len(label) for label in labels))
    widths = [max(len(label), len("Lose")) for label in labels]

    lines: list[str] = []
    header = f"{CORNER:{first_width}}  " + "  ".join(f"{label:>{w}}" for label, w in zip(labels, widths))
    lines.append(header)
    lines.append("-" * len(header))
    for label, row in zip(labels, matrix):
        cells = "  ".join(f"{outcome.capitalize():>{w}}" for outcome, w in zip(row, widths))
        lines.append(f"{label:{first_width}}  {cells}")
    return "\n".join(lines)
