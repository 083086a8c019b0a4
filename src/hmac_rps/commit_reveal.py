from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from typing import Final

logger = logging.getLogger(__name__)

KEY_BYTES: Final[int] = 32


class EntropySourceError(RuntimeError):
    pass


def canonical_message(*, visible_move: str, hidden_move: str) -> str:
    return f"User move: {visible_move}\nComputer move: {hidden_move}"


def commitment_message(*, hidden_move: str) -> str:
    return f"Computer move: {hidden_move}"


class KeyGenerator:
    """Fresh 256-bit (or longer) secret per call, disclosed as lowercase hex."""

    def __init__(self, num_bytes: int = KEY_BYTES) -> None:
        if num_bytes < KEY_BYTES:
            raise ValueError(f"key must be at least {KEY_BYTES} bytes, got {num_bytes}")
        self.num_bytes = num_bytes

    def generate(self) -> str:
        try:
            raw = secrets.token_bytes(self.num_bytes)
        except (OSError, NotImplementedError) as exc:
            raise EntropySourceError(f"secure random source unavailable: {exc}") from exc
        logger.debug("generated %d-byte commitment key", self.num_bytes)
        return raw.hex()


class CommitmentHasher:
    """HMAC-SHA256 keyed by the disclosed key text.

    The key is used as its UTF-8 bytes so that anyone holding the disclosed
    hex string can recompute a tag with an ordinary HMAC-SHA256 tool.
    """

    def __init__(self, key: str) -> None:
        if not key:
            raise ValueError("commitment key must not be empty")
        self._key = key.encode("utf-8")

    def commit(self, message: str) -> str:
        return hmac.new(self._key, message.encode("utf-8"), hashlib.sha256).hexdigest()

    def verify(self, message: str, expected: str) -> bool:
        computed = self.commit(message).encode("ascii")
        return secrets.compare_digest(expected.strip().lower().encode("utf-8"), computed)


def draw_hidden_index(move_count: int) -> int:
    if move_count < 1:
        raise ValueError(f"move_count must be positive, got {move_count}")
    try:
        return secrets.randbelow(move_count)
    except (OSError, NotImplementedError) as exc:
        raise EntropySourceError(f"secure random source unavailable: {exc}") from exc


def verify_commitment(*, key: str, message: str, expected: str) -> bool:
    return CommitmentHasher(key).verify(message, expected)
