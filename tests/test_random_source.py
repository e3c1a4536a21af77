"""
Tests for seed derivation, the Mulberry32 stream and weighted picks.
"""
import pytest

from bowling_lab.engine.random_source import (
    Mulberry32, pick_weighted, seed_from_string, shuffle_in_place, shuffled,
)


class FixedStream:
    """Stand-in stream returning scripted floats."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next_float(self):
        self.calls += 1
        return self.values.pop(0)


class TestSeedFromString:
    """FNV-1a over UTF-8 bytes."""

    def test_known_vectors(self):
        """Verify published FNV-1a 32-bit test vectors."""
        assert seed_from_string("") == 0x811C9DC5
        assert seed_from_string("a") == 0xE40C292C
        assert seed_from_string("foobar") == 0xBF9CF968

    def test_hashes_utf8_bytes(self):
        """Non-ASCII text hashes its UTF-8 encoding, not code points."""
        assert seed_from_string("é") != seed_from_string("e")
        assert 0 <= seed_from_string("Kuldeep Yādav|death") <= 0xFFFFFFFF


class TestMulberry32:

    def test_same_seed_same_sequence(self):
        a = Mulberry32(12345)
        b = Mulberry32(12345)
        assert [a.next_float() for _ in range(50)] == [b.next_float() for _ in range(50)]

    def test_values_in_unit_interval(self):
        stream = Mulberry32(seed_from_string("range-check"))
        for _ in range(2000):
            value = stream.next_float()
            assert 0.0 <= value < 1.0

    def test_different_seeds_diverge(self):
        a = [Mulberry32(1).next_float() for _ in range(5)]
        b = [Mulberry32(2).next_float() for _ in range(5)]
        assert a != b

    def test_iterates(self):
        stream = Mulberry32(7)
        first = next(iter(stream))
        assert first == Mulberry32(7).next_float()


class TestPickWeighted:
    """Subtract-until-non-positive selection."""

    def test_low_draw_picks_first(self):
        assert pick_weighted(FixedStream([0.25]), [("a", 1.0), ("b", 1.0)]) == "a"

    def test_high_draw_picks_second(self):
        assert pick_weighted(FixedStream([0.75]), [("a", 1.0), ("b", 1.0)]) == "b"

    def test_exact_boundary_belongs_to_earlier_item(self):
        """Remainder reaching exactly zero selects the current item."""
        assert pick_weighted(FixedStream([0.5]), [("a", 1.0), ("b", 1.0)]) == "a"

    def test_single_draw_per_pick(self):
        stream = FixedStream([0.1, 0.9])
        pick_weighted(stream, [("a", 3.0), ("b", 1.0), ("c", 2.0)])
        assert stream.calls == 1

    def test_respects_weights(self):
        """Heavier items win proportionally more often."""
        stream = Mulberry32(99)
        counts = {"heavy": 0, "light": 0}
        for _ in range(4000):
            counts[pick_weighted(stream, [("heavy", 9.0), ("light", 1.0)])] += 1
        assert counts["heavy"] > counts["light"] * 5

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            pick_weighted(Mulberry32(1), [])


class TestShuffle:

    def test_shuffle_is_permutation(self):
        items = list(range(20))
        out = shuffled(Mulberry32(3), items)
        assert sorted(out) == items
        assert items == list(range(20))

    def test_shuffle_deterministic(self):
        a = list("abcdefgh")
        b = list("abcdefgh")
        shuffle_in_place(Mulberry32(42), a)
        shuffle_in_place(Mulberry32(42), b)
        assert a == b
