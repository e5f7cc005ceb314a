# Area: Core Tests
"""Tests for apply_action — dispatch, host actions and the no-op law."""

from unittest.mock import patch

import pytest

from party_host._core.actions import parse_action
from party_host._core.models import (
    CachitoState,
    GeneralState,
    HigherLowerState,
    LobbyState,
    Player,
    Room,
)
from party_host._core.reducer import apply_action
from party_host.random_source import ScriptedRandomSource


def _room(state=None, ids=("p1", "p2", "p3")):
    return Room(
        code="ABCD",
        host_id=ids[0],
        players={pid: Player(id=pid, name=pid.upper(), dice=(2, 3), dice_count=2) for pid in ids},
        player_order=tuple(ids),
        state=state or LobbyState(),
    )


def kick(target):
    return parse_action("KICK_PLAYER", {"targetId": target})


def reorder(order):
    return parse_action("REORDER_PLAYERS", {"playerOrder": order})


class TestNoOpLaw:
    """Rejected actions return the very same room object."""

    def test_non_member_is_noop(self):
        room = _room(GeneralState(current_turn_id="p1"))
        assert apply_action(room, parse_action("GENERAL_ROLL_DICE"), "ghost") is room

    def test_lobby_ignores_game_actions(self):
        room = _room()
        assert apply_action(room, parse_action("GENERAL_ROLL_DICE"), "p1") is room

    def test_wrong_game_action_is_noop(self):
        room = _room(CachitoState(current_turn_id="p1"))
        assert apply_action(room, parse_action("HL_GUESS", {"number": 3}), "p1") is room

    def test_rejected_actions_never_mutate(self):
        room = _room(CachitoState(current_turn_id="p1"))
        players_before = dict(room.players)
        for action in (
            parse_action("CACHITO_DOUBT"),
            parse_action("CACHITO_BID", {"quantity": 1, "faceValue": 2}),
            parse_action("CACHITO_NEXT_ROUND"),
        ):
            assert apply_action(room, action, "p2") is room
        assert room.players == players_before


class TestDispatch:
    """Tests for routing to the active game's handler."""

    def test_routes_to_cachito(self):
        room = _room(CachitoState(current_turn_id="p1"))
        after = apply_action(room, parse_action("CACHITO_BID", {"quantity": 1, "faceValue": 3}), "p1")
        assert after.state.current_bid.quantity == 1

    def test_routes_to_general_with_rng(self):
        room = _room(GeneralState(current_turn_id="p1"))
        rng = ScriptedRandomSource(rolls=[3])
        after = apply_action(room, parse_action("GENERAL_ROLL_DICE"), "p1", rng)
        assert after.state.last_roll == 3

    def test_routes_to_higher_lower(self):
        room = _room(HigherLowerState(deck=(), current_card="5H", holder_id="p1", guesser_id="p2"))
        after = apply_action(room, parse_action("HL_GUESS", {"number": 5}), "p2")
        assert after.state.last_answer == 5

    def test_unknown_state_raises(self):
        room = _room(state=object())
        with pytest.raises(TypeError):
            apply_action(room, parse_action("CACHITO_DOUBT"), "p1")

    def test_handler_faults_propagate(self):
        room = _room(CachitoState(current_turn_id="p1"))
        with patch("party_host._core.reducer.handle_cachito", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                apply_action(room, parse_action("CACHITO_DOUBT"), "p1")


class TestHostActions:
    """Tests for reorder and kick."""

    def test_host_reorders(self):
        room = _room()
        after = apply_action(room, reorder(["p3", "p1", "p2"]), "p1")
        assert after.player_order == ("p3", "p1", "p2")

    def test_reorder_must_be_permutation(self):
        room = _room()
        assert apply_action(room, reorder(["p1", "p2"]), "p1") is room
        assert apply_action(room, reorder(["p1", "p2", "p2"]), "p1") is room
        assert apply_action(room, reorder(["p1", "p2", "zz"]), "p1") is room

    def test_non_host_reorder_ignored(self):
        room = _room()
        assert apply_action(room, reorder(["p3", "p2", "p1"]), "p2") is room

    def test_host_kicks(self):
        room = _room(GeneralState(current_turn_id="p2"))
        after = apply_action(room, kick("p2"), "p1")
        assert "p2" not in after.players
        assert after.player_order == ("p1", "p3")
        # the removed id is gone, so the turn scan restarts at the front
        assert after.state.current_turn_id == "p1"

    def test_host_cannot_kick_self(self):
        room = _room()
        assert apply_action(room, kick("p1"), "p1") is room

    def test_kick_unknown_ignored(self):
        room = _room()
        assert apply_action(room, kick("ghost"), "p1") is room

    def test_non_host_kick_ignored(self):
        room = _room()
        assert apply_action(room, kick("p3"), "p2") is room

    def test_host_actions_work_in_any_game(self):
        room = _room(CachitoState(current_turn_id="p1"))
        after = apply_action(room, reorder(["p2", "p1", "p3"]), "p1")
        assert after.player_order == ("p2", "p1", "p3")
        assert after.state is room.state
