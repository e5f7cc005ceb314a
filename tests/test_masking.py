# Area: Core Tests
"""Tests for mask_room — what each viewer may see."""

import json

from party_host._core.actions import parse_action
from party_host._core.handlers.higher_lower import handle_higher_lower
from party_host._core.masking import mask_room
from party_host._core.models import (
    Bid,
    CachitoPhase,
    CachitoState,
    GeneralState,
    HigherLowerState,
    LobbyState,
    Player,
    Reveal,
    Room,
    ThumbRace,
    TieBreak,
)


def _room(state):
    players = {
        "p1": Player(id="p1", name="Ana", dice=(1, 2), dice_count=2),
        "p2": Player(id="p2", name="Beto", dice=(3, 4), dice_count=2),
    }
    return Room(code="ABCD", host_id="p1", players=players, player_order=("p1", "p2"),
                state=state, created_at=12.5)


class TestRoomView:
    """Tests for the room-level fields."""

    def test_lobby_view(self):
        view = mask_room(_room(LobbyState()), "p1")
        assert view["id"] == "ABCD"
        assert view["hostId"] == "p1"
        assert view["playerOrder"] == ["p1", "p2"]
        assert view["currentGame"] == "LOBBY"
        assert view["gameState"] == {"status": "WAITING"}
        assert view["createdAt"] == 12.5

    def test_view_is_json_serialisable(self):
        state = GeneralState(current_turn_id="p1", tie_break=TieBreak(tied_ids=("p1",)))
        json.dumps(mask_room(_room(state), "p2"))

    def test_player_fields(self):
        player = mask_room(_room(LobbyState()), "p1")["players"]["p2"]
        assert player == {
            "id": "p2",
            "name": "Beto",
            "connectionState": "CONNECTED",
            "generalLevel": 0,
            "isThumbMaster": False,
            "dice": [],
            "diceCount": 2,
        }


class TestDiceMasking:
    """Tests for hidden hands."""

    def test_own_dice_visible_others_hidden(self):
        view = mask_room(_room(CachitoState(current_turn_id="p1")), "p1")
        assert view["players"]["p1"]["dice"] == [1, 2]
        assert view["players"]["p2"]["dice"] == []
        assert view["players"]["p2"]["diceCount"] == 2

    def test_all_dice_revealed_while_resolving(self):
        state = CachitoState(
            current_turn_id="p1",
            phase=CachitoPhase.RESOLVING,
            current_bid=Bid("p1", 3, 2),
            loser_id="p1",
            reveal=Reveal(total_found=2, reason="Bid failed!"),
        )
        view = mask_room(_room(state), "p1")
        assert view["players"]["p2"]["dice"] == [3, 4]
        gs = view["gameState"]
        assert gs["status"] == "RESOLVING"
        assert gs["currentBid"] == {"playerId": "p1", "quantity": 3, "faceValue": 2, "isAces": False}
        assert gs["revealData"] == {"totalFound": 2, "reason": "Bid failed!"}
        assert gs["loserId"] == "p1"
        assert gs["isObligado"] is False

    def test_unknown_viewer_sees_no_dice(self):
        view = mask_room(_room(CachitoState(current_turn_id="p1")), "stranger")
        assert all(p["dice"] == [] for p in view["players"].values())


class TestHigherLowerMasking:
    """Tests for the card view."""

    def _state(self):
        return HigherLowerState(
            deck=("2H", "3H", "4H"), current_card="KS", holder_id="p1", guesser_id="p2",
            last_consequence="TRY_AGAIN", consequence_seq=3,
        )

    def test_deck_never_sent(self):
        view = mask_room(_room(self._state()), "p1")
        assert "deck" not in view["gameState"]
        assert view["gameState"]["cardsRemaining"] == 3
        assert "2H" not in json.dumps(view)

    def test_card_shown_to_holder_only(self):
        assert mask_room(_room(self._state()), "p1")["gameState"]["currentCard"] == "KS"
        assert mask_room(_room(self._state()), "p2")["gameState"]["currentCard"] is None

    def test_consequence_id(self):
        gs = mask_room(_room(self._state()), "p2")["gameState"]
        assert gs["lastConsequence"] == "TRY_AGAIN"
        assert gs["lastConsequenceId"] == "3"


class TestGeneralView:
    """Tests for the General view."""

    def test_race_and_tie_break(self):
        state = GeneralState(
            current_turn_id="p2",
            last_roll=6,
            roll_pending=True,
            thumb_race=ThumbRace(trigger_id="p1", participants=("p2",)),
            tie_break=TieBreak(tied_ids=("p1", "p2"), suggestions={"p1": "A"}),
        )
        gs = mask_room(_room(state), "p1")["gameState"]
        assert gs["activeThumbRace"] is True
        assert gs["thumbRaceParticipants"] == ["p2"]
        assert gs["thumbRaceTriggerId"] == "p1"
        assert gs["ruleTieBreaker"] == {
            "tiedGenerals": ["p1", "p2"],
            "suggestions": {"p1": "A"},
            "votes": {},
        }

    def test_no_sub_states(self):
        gs = mask_room(_room(GeneralState(current_turn_id="p1")), "p1")["gameState"]
        assert gs["activeThumbRace"] is False
        assert gs["thumbRaceParticipants"] == []
        assert gs["ruleTieBreaker"] is None


class TestHigherLowerSecondAttempt:
    """The hint is public; the rank is not."""

    def test_guesser_cannot_read_rank_after_wrong_guess(self):
        room = _room(HigherLowerState(deck=("2C",), current_card="7H", holder_id="p1", guesser_id="p2"))
        room = handle_higher_lower(room, room.state, "p2", parse_action("HL_GUESS", {"number": 3}))
        assert room.state.attempt_number == 2

        guesser = mask_room(room, "p2")["gameState"]
        assert guesser["currentCard"] is None
        assert guesser["lastAnswer"] is None
        assert guesser["lastGuessHint"] == "HIGHER"
        assert "7" not in json.dumps(guesser)

        assert mask_room(room, "p1")["gameState"]["currentCard"] == "7H"
