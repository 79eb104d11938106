"""Time-ordered unique record keys."""

import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass, field

KEY_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
TIMESTAMP_LENGTH = 9
RANDOM_LENGTH = 12


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class RecordKeyGenerator:
    """Generate keys whose lexical order matches creation order.

    A key is a base-36 millisecond timestamp followed by a random suffix.
    Keys created within the same millisecond (or while the clock runs
    backwards) reuse the last timestamp and increment the suffix, so keys from
    one generator are strictly increasing.
    """

    clock: Callable[[], int] = _now_ms
    _last_timestamp: int = field(default=-1, init=False)
    _last_random: list[int] = field(default_factory=list, init=False)

    def next_key(self) -> str:
        """Return a new key greater than every key issued before it."""
        now = self.clock()
        if now <= self._last_timestamp:
            now = self._last_timestamp
            if not self._increment_random():
                now += 1
                self._last_random = _random_digits()
        else:
            self._last_random = _random_digits()
        self._last_timestamp = now
        return _encode(now, TIMESTAMP_LENGTH) + "".join(
            KEY_ALPHABET[digit] for digit in self._last_random
        )

    def _increment_random(self) -> bool:
        base = len(KEY_ALPHABET)
        for index in range(RANDOM_LENGTH - 1, -1, -1):
            if self._last_random[index] < base - 1:
                self._last_random[index] += 1
                return True
            self._last_random[index] = 0
        return False


def _random_digits() -> list[int]:
    return [secrets.randbelow(len(KEY_ALPHABET)) for _ in range(RANDOM_LENGTH)]


def _encode(value: int, length: int) -> str:
    base = len(KEY_ALPHABET)
    chars = []
    for _ in range(length):
        value, remainder = divmod(value, base)
        chars.append(KEY_ALPHABET[remainder])
    if value:
        raise ValueError("Timestamp does not fit in the key prefix")
    return "".join(reversed(chars))
