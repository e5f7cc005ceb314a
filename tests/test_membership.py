# Area: Core Tests
"""Tests for seating, connection flags and removal."""

from party_host._core.actions import parse_action
from party_host._core.membership import remove_player, seat_player, set_connection
from party_host._core.models import (
    SYSTEM_HOLDER,
    CachitoState,
    ConnectionState,
    GeneralState,
    HigherLowerState,
    LobbyState,
    Player,
    Room,
    ThumbRace,
    TieBreak,
)
from party_host._core.reducer import apply_action
from party_host.random_source import ScriptedRandomSource


def _room(state=None, ids=("p1", "p2", "p3"), dice=None):
    dice = dice or {}
    return Room(
        code="ABCD",
        host_id=ids[0],
        players={pid: Player(id=pid, name=pid.upper(), dice_count=dice.get(pid, 5)) for pid in ids},
        player_order=tuple(ids),
        state=state or LobbyState(),
    )


class TestSeatAndConnection:
    """Tests for seat_player / set_connection."""

    def test_seat_appends_to_order(self):
        room = seat_player(_room(), Player(id="p4", name="D"))
        assert room.player_order == ("p1", "p2", "p3", "p4")
        assert "p4" in room.players

    def test_set_connection(self):
        room = set_connection(_room(), "p2", ConnectionState.DISCONNECTED)
        assert not room.players["p2"].is_connected
        assert room.player_order == ("p1", "p2", "p3")

    def test_set_connection_unchanged_returns_same_room(self):
        room = _room()
        assert set_connection(room, "p2", ConnectionState.CONNECTED) is room
        assert set_connection(room, "ghost", ConnectionState.DISCONNECTED) is room


class TestRemovePlayer:
    """Tests for remove_player."""

    def test_unknown_player_returns_same_room(self):
        room = _room()
        assert remove_player(room, "ghost") is room

    def test_host_passes_to_first_remaining(self):
        room = remove_player(_room(), "p1")
        assert room.host_id == "p2"
        assert room.player_order == ("p2", "p3")

    def test_last_player_leaves_empty_room(self):
        room = remove_player(_room(ids=("p1",)), "p1")
        assert room.is_empty
        assert room.players == {}

    def test_cachito_turn_moves_to_next_with_dice(self):
        room = _room(CachitoState(current_turn_id="p2"), ids=("p1", "p2", "p3", "p4"), dice={"p1": 0, "p3": 0})
        after = remove_player(room, "p2")
        assert after.state.current_turn_id == "p4"

    def test_cachito_other_turn_untouched(self):
        state = CachitoState(current_turn_id="p1")
        after = remove_player(_room(state), "p2")
        assert after.state is state

    def test_general_turn_and_sub_states_scrubbed(self):
        state = GeneralState(
            current_turn_id="p2",
            thumb_race=ThumbRace(trigger_id="p1", participants=("p2", "p3")),
            tie_break=TieBreak(
                tied_ids=("p2", "p3"),
                suggestions={"p2": "A", "p3": "B"},
                votes={"p1": "p2", "p3": "p3"},
            ),
        )
        after = remove_player(_room(state), "p2")
        s = after.state
        assert s.thumb_race.participants == ("p3",)
        # p3 was the only other connected player, so the race is over
        assert s.thumb_race.active is False
        assert s.thumb_race.loser_id == "p1"
        # p3 is the last tied player and decrees like a sole leader
        assert s.tie_break is None
        assert s.current_turn_id == "p3"

    def test_tie_break_scrubbed_while_leaders_remain(self):
        state = GeneralState(
            current_turn_id="p2",
            roll_pending=True,
            last_roll=6,
            tie_break=TieBreak(
                tied_ids=("p2", "p3", "p4"),
                suggestions={"p2": "A", "p3": "B"},
                votes={"p4": "p2"},
            ),
        )
        after = remove_player(_room(state, ids=("p1", "p2", "p3", "p4")), "p2")
        tie = after.state.tie_break
        assert tie.tied_ids == ("p3", "p4")
        assert tie.suggestions == {"p3": "B"}
        assert tie.votes == {}
        assert after.state.roll_pending is True

    def test_higher_lower_holder_removed(self):
        state = HigherLowerState(deck=(), current_card="2H", holder_id="p2", guesser_id="p3")
        after = remove_player(_room(state), "p2")
        assert after.state.holder_id == "p1"
        assert after.state.guesser_id == "p3"

    def test_higher_lower_guesser_removed(self):
        state = HigherLowerState(deck=(), current_card="2H", holder_id="p1", guesser_id="p2")
        after = remove_player(_room(state), "p2")
        assert after.state.holder_id == "p1"
        assert after.state.guesser_id == "p3"

    def test_higher_lower_roles_never_collide(self):
        state = HigherLowerState(deck=(), current_card="2H", holder_id="p1", guesser_id="p2")
        after = remove_player(_room(state, ids=("p1", "p2", "p3")), "p1")
        assert after.state.holder_id != after.state.guesser_id

    def test_single_player_guesser_replaced(self):
        state = HigherLowerState(deck=(), current_card="2H", holder_id=SYSTEM_HOLDER, guesser_id="p1")
        after = remove_player(_room(state, ids=("p1", "p2")), "p1")
        assert after.state.holder_id == SYSTEM_HOLDER
        assert after.state.guesser_id == "p2"


class TestGeneralAfterRemoval:
    """Removals never leave a General room waiting on a player who is gone."""

    def _tied(self, **tie_fields):
        state = GeneralState(
            current_turn_id="p2",
            roll_pending=True,
            last_roll=6,
            tie_break=TieBreak(tied_ids=("p2", "p3"), **tie_fields),
        )
        return _room(state)

    def test_all_tied_kicked_drops_pending_six(self):
        room = self._tied()
        room = apply_action(room, parse_action("KICK_PLAYER", {"targetId": "p2"}), "p1")
        room = apply_action(room, parse_action("KICK_PLAYER", {"targetId": "p3"}), "p1")
        assert room.state.tie_break is None
        assert room.state.roll_pending is False
        assert room.state.current_turn_id == "p1"

        rng = ScriptedRandomSource(rolls=[3])
        after = apply_action(room, parse_action("GENERAL_ROLL_DICE"), "p1", rng)
        assert after is not room
        assert after.state.last_roll == 3

    def test_lone_leader_makes_the_rule(self):
        room = remove_player(self._tied(suggestions={"p2": "A"}), "p2")
        assert room.state.tie_break is None
        assert room.state.roll_pending is True
        assert room.state.current_turn_id == "p3"

        after = apply_action(room, parse_action("GENERAL_MAKE_RULE", {"rule": "No names"}), "p3")
        assert after.state.active_rule == "No names"
        assert after.state.roll_pending is False

    def test_departing_last_voter_closes_vote(self):
        state = GeneralState(
            current_turn_id="p2",
            roll_pending=True,
            last_roll=6,
            tie_break=TieBreak(
                tied_ids=("p2", "p3"),
                suggestions={"p2": "A", "p3": "B"},
                votes={"p1": "p3", "p2": "p3", "p3": "p3"},
            ),
        )
        room = _room(state, ids=("p1", "p2", "p3", "p4"))
        after = remove_player(room, "p4", ScriptedRandomSource())
        assert after.state.tie_break is None
        assert after.state.active_rule == "B"
        assert after.state.roll_pending is False

    def test_race_with_no_one_left_to_join_closes(self):
        state = GeneralState(current_turn_id="p1", thumb_race=ThumbRace(trigger_id="p1"))
        after = remove_player(_room(state, ids=("p1", "p2")), "p2")
        assert after.state.thumb_race.active is False
        assert after.state.thumb_race.loser_id == "p1"

    def test_roller_leaving_own_decision_frees_turn(self):
        state = GeneralState(current_turn_id="p2", roll_pending=True, last_roll=2, last_roller_id="p2")
        after = remove_player(_room(state), "p2")
        assert after.state.current_turn_id == "p1"
        assert after.state.roll_pending is False

    def test_host_decision_stays_pending(self):
        """A rolled 5 waits on the host, not the roller."""
        state = GeneralState(current_turn_id="p2", roll_pending=True, last_roll=5)
        after = remove_player(_room(state), "p2")
        assert after.state.roll_pending is True
