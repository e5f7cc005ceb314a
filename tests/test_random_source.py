# Area: Shared Tests
"""Tests for the random sources."""

import pytest

from party_host.random_source import ScriptedRandomSource, SystemRandomSource


class TestSystemRandomSource:
    """Tests for SystemRandomSource."""

    def test_rolls_in_range(self):
        rng = SystemRandomSource(seed=3)
        assert all(1 <= rng.roll_die() <= 6 for _ in range(200))

    def test_seed_repeats_game_randomness(self):
        a, b = SystemRandomSource(seed=9), SystemRandomSource(seed=9)
        assert [a.roll_die() for _ in range(10)] == [b.roll_die() for _ in range(10)]
        assert a.shuffle(range(10)) == b.shuffle(range(10))

    def test_shuffle_is_a_copy(self):
        items = [1, 2, 3]
        shuffled = SystemRandomSource(seed=1).shuffle(items)
        assert sorted(shuffled) == items
        assert shuffled is not items

    def test_tokens_differ_even_with_seed(self):
        a, b = SystemRandomSource(seed=1), SystemRandomSource(seed=1)
        assert a.token() != b.token()

    def test_room_code(self):
        code = SystemRandomSource(seed=2).room_code("XY", 6)
        assert len(code) == 6
        assert set(code) <= {"X", "Y"}


class TestScriptedRandomSource:
    """Tests for ScriptedRandomSource."""

    def test_rolls_replayed_then_exhausted(self):
        rng = ScriptedRandomSource(rolls=[6, 1])
        assert [rng.roll_die(), rng.roll_die()] == [6, 1]
        with pytest.raises(IndexError):
            rng.roll_die()

    def test_choices_by_index(self):
        rng = ScriptedRandomSource(choices=[2])
        assert rng.choice(["a", "b", "c"]) == "c"
        with pytest.raises(IndexError):
            rng.choice(["a"])

    def test_tokens_sequential(self):
        rng = ScriptedRandomSource()
        assert [rng.token(), rng.token()] == ["tok-1", "tok-2"]

    def test_codes_scripted_then_counted(self):
        rng = ScriptedRandomSource(codes=["ZZZZ"])
        assert rng.room_code("AB", 4) == "ZZZZ"
        assert rng.room_code("AB", 4) == "AAAA"
        assert rng.room_code("AB", 4) == "AAAB"
        assert rng.room_code("AB", 4) == "AABA"
