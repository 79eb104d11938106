"""Tests for record key generation."""

from fit_tracker.services.keys import KEY_ALPHABET, RecordKeyGenerator


def test_keys_are_strictly_increasing_within_one_millisecond() -> None:
    generator = RecordKeyGenerator(clock=lambda: 1_717_200_000_000)

    keys = [generator.next_key() for _ in range(50)]

    assert keys == sorted(keys)
    assert len(set(keys)) == len(keys)


def test_keys_follow_clock_order() -> None:
    ticks = iter([1_000, 2_000, 3_000])
    generator = RecordKeyGenerator(clock=lambda: next(ticks))

    first, second, third = (generator.next_key() for _ in range(3))

    assert first < second < third


def test_clock_going_backwards_keeps_order() -> None:
    ticks = iter([5_000, 4_000])
    generator = RecordKeyGenerator(clock=lambda: next(ticks))

    first = generator.next_key()
    second = generator.next_key()

    assert first < second
    assert first[:9] == second[:9]


def test_key_shape() -> None:
    key = RecordKeyGenerator().next_key()

    assert len(key) == 21
    assert all(char in KEY_ALPHABET for char in key)
