# Area: Core Tests
"""Tests for next_turn — circular rotation with skips."""

from party_host._core.models import ConnectionState, Player
from party_host._core.turn_sequencer import is_eligible, next_turn


def _players(*ids, disconnected=(), no_dice=()):
    return {
        pid: Player(
            id=pid,
            name=pid.upper(),
            connection=ConnectionState.DISCONNECTED if pid in disconnected else ConnectionState.CONNECTED,
            dice_count=0 if pid in no_dice else 5,
        )
        for pid in ids
    }


ORDER = ("p1", "p2", "p3")


class TestIsEligible:
    """Tests for the per-player eligibility predicate."""

    def test_connected_player_is_eligible(self):
        player = Player(id="p1", name="A")
        assert is_eligible(player, require_dice=False)

    def test_disconnected_player_is_not_eligible(self):
        player = Player(id="p1", name="A", connection=ConnectionState.DISCONNECTED)
        assert not is_eligible(player, require_dice=False)

    def test_dice_only_matter_when_required(self):
        player = Player(id="p1", name="A", dice_count=0)
        assert is_eligible(player, require_dice=False)
        assert not is_eligible(player, require_dice=True)


class TestNextTurn:
    """Tests for next_turn."""

    def test_advances_to_following_player(self):
        assert next_turn("p1", ORDER, _players(*ORDER)) == "p2"

    def test_wraps_around(self):
        assert next_turn("p3", ORDER, _players(*ORDER)) == "p1"

    def test_skips_disconnected(self):
        players = _players(*ORDER, disconnected=("p2",))
        assert next_turn("p1", ORDER, players) == "p3"

    def test_skips_players_without_dice_when_required(self):
        players = _players(*ORDER, no_dice=("p2",))
        assert next_turn("p1", ORDER, players, require_dice=True) == "p3"
        assert next_turn("p1", ORDER, players) == "p2"

    def test_returns_self_when_only_eligible(self):
        """A full lap lands back on the current player."""
        players = _players(*ORDER, disconnected=("p2", "p3"))
        assert next_turn("p1", ORDER, players) == "p1"

    def test_returns_current_when_nobody_eligible(self):
        players = _players(*ORDER, disconnected=ORDER)
        assert next_turn("p2", ORDER, players) == "p2"

    def test_removed_current_scans_from_start(self):
        """An id no longer in the order restarts the scan at the front."""
        order = ("p2", "p3")
        players = _players(*order)
        assert next_turn("p1", order, players) == "p2"

    def test_removed_current_skips_ineligible_from_start(self):
        order = ("p2", "p3")
        players = _players(*order, disconnected=("p2",))
        assert next_turn("p1", order, players) == "p3"

    def test_removed_current_with_nobody_eligible_falls_back_to_first(self):
        order = ("p2", "p3")
        players = _players(*order, disconnected=order)
        assert next_turn("p1", order, players) == "p2"

    def test_empty_order_returns_current(self):
        assert next_turn("p1", (), {}) == "p1"

    def test_result_is_always_seated_or_current(self):
        """Property: the answer is in the order, or the current id itself."""
        players = _players(*ORDER, disconnected=("p1",), no_dice=("p3",))
        for current in ORDER + ("gone",):
            for require_dice in (False, True):
                result = next_turn(current, ORDER, players, require_dice=require_dice)
                assert result in ORDER or result == current
