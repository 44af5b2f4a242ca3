from halftone.seeded_random import SeededRandom
from models import DEFAULT_SEED


def test_first_value_matches_recurrence():
    rng = SeededRandom(12345)

    # (12345 * 9301 + 49297) % 233280 == 96382
    assert rng.next() == 96382 / 233280
    assert rng.seed == 96382


def test_default_seed():
    assert SeededRandom().seed == DEFAULT_SEED == 12345


def test_same_seed_same_sequence():
    first = SeededRandom(42)
    second = SeededRandom(42)

    assert [first.next() for _ in range(100)] == [second.next() for _ in range(100)]


def test_different_seeds_diverge():
    first = SeededRandom(1)
    second = SeededRandom(2)

    assert [first.next() for _ in range(10)] != [second.next() for _ in range(10)]


def test_values_in_unit_interval():
    rng = SeededRandom()
    for _ in range(1000):
        value = rng()
        assert 0 <= value < 1
