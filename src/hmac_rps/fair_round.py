from __future__ import annotations

import logging
from dataclasses import dataclass

from commit_reveal import (
    CommitmentHasher,
    KeyGenerator,
    canonical_message,
    commitment_message,
    draw_hidden_index,
)
from rules import Outcome, RuleEngine

logger = logging.getLogger(__name__)


class RoundAlreadyPlayedError(RuntimeError):
    pass


@dataclass(frozen=True)
class RoundResult:
    visible_index: int
    hidden_index: int
    visible_move: str
    hidden_move: str
    outcome: Outcome
    message: str
    hmac: str
    key: str
    commitment: str


class Round:
    """One commit/reveal round against the computer.

    The hidden move and its commitment are fixed in ``start`` before the
    caller asks the user for anything; ``play`` is the only place the key
    leaves the round.
    """

    def __init__(self, rules: RuleEngine, *, key: str, hidden_index: int) -> None:
        self.rules = rules
        self.hidden_index = rules.check_index(hidden_index)
        self._key: str | None = key
        self.commitment = CommitmentHasher(key).commit(commitment_message(hidden_move=self.hidden_move))

    @classmethod
    def start(cls, rules: RuleEngine, key_generator: KeyGenerator | None = None) -> "Round":
        key = (key_generator or KeyGenerator()).generate()
        hidden_index = draw_hidden_index(len(rules))
        logger.debug("round started over %d moves", len(rules))
        return cls(rules, key=key, hidden_index=hidden_index)

    @property
    def hidden_move(self) -> str:
        return self.rules.moves[self.hidden_index]

    @property
    def played(self) -> bool:
        return self._key is None

    def play(self, visible_index: int) -> RoundResult:
        if self._key is None:
            raise RoundAlreadyPlayedError("round already played; start a new one")
        self.rules.check_index(visible_index)

        visible_move = self.rules.moves[visible_index]
        outcome = self.rules.determine_outcome(visible_index, self.hidden_index)
        message = canonical_message(visible_move=visible_move, hidden_move=self.hidden_move)
        tag = CommitmentHasher(self._key).commit(message)

        key, self._key = self._key, None
        logger.info("round resolved: %s vs %s -> %s", visible_move, self.hidden_move, outcome)
        return RoundResult(
            visible_index=visible_index,
            hidden_index=self.hidden_index,
            visible_move=visible_move,
            hidden_move=self.hidden_move,
            outcome=outcome,
            message=message,
            hmac=tag,
            key=key,
            commitment=self.commitment,
        )


def verify_round(result: RoundResult) -> bool:
    if result.message != canonical_message(visible_move=result.visible_move, hidden_move=result.hidden_move):
        return False
    hasher = CommitmentHasher(result.key)
    if not hasher.verify(result.message, result.hmac):
        return False
    return hasher.verify(commitment_message(hidden_move=result.hidden_move), result.commitment)
