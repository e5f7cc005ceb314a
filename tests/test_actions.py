# Area: Core Tests
"""Tests for parse_action — the inbound action grammar."""

import pytest

from party_host._core.actions import (
    BidAction,
    ChoosePlayerAction,
    DoubtAction,
    GuessAction,
    ReorderPlayersAction,
    parse_action,
)
from party_host.errors import InvalidEventError


class TestParseAction:
    """Tests for parse_action."""

    def test_bid_uses_camel_case_aliases(self):
        action = parse_action("CACHITO_BID", {"quantity": 3, "faceValue": 4, "isAces": False})
        assert isinstance(action, BidAction)
        assert action.quantity == 3
        assert action.face_value == 4
        assert action.is_aces is False

    def test_bid_accepts_snake_case(self):
        action = parse_action("CACHITO_BID", {"quantity": 2, "face_value": 1, "is_aces": True})
        assert action.is_aces is True

    def test_payloadless_action(self):
        assert isinstance(parse_action("CACHITO_DOUBT"), DoubtAction)

    def test_guess_defaults_to_exact(self):
        action = parse_action("HL_GUESS", {"number": 7})
        assert isinstance(action, GuessAction)
        assert action.guess == "EXACT"
        assert action.number == 7

    def test_choose_player_target(self):
        action = parse_action("GENERAL_CHOOSE_PLAYER", {"targetId": "p2"})
        assert isinstance(action, ChoosePlayerAction)
        assert action.target_id == "p2"

    def test_reorder(self):
        action = parse_action("REORDER_PLAYERS", {"playerOrder": ["b", "a"]})
        assert isinstance(action, ReorderPlayersAction)
        assert action.player_order == ["b", "a"]

    def test_extra_keys_ignored(self):
        action = parse_action("CACHITO_DOUBT", {"noise": 1})
        assert isinstance(action, DoubtAction)

    def test_unknown_type_raises(self):
        with pytest.raises(InvalidEventError) as exc_info:
            parse_action("DANCE", {})
        assert exc_info.value.code == "INVALID_EVENT"
        assert exc_info.value.event == "action_intent"

    def test_missing_field_raises(self):
        with pytest.raises(InvalidEventError) as exc_info:
            parse_action("CACHITO_BID", {"quantity": 3})
        assert any("faceValue" in e or "face_value" in e for e in exc_info.value.validation_errors)

    def test_wrong_type_raises(self):
        with pytest.raises(InvalidEventError):
            parse_action("CACHITO_BID", {"quantity": "lots", "faceValue": 2})

    def test_empty_rule_rejected(self):
        with pytest.raises(InvalidEventError):
            parse_action("GENERAL_MAKE_RULE", {"rule": ""})

    def test_non_dict_payload_treated_as_empty(self):
        assert isinstance(parse_action("CACHITO_DOUBT", "junk"), DoubtAction)

    def test_actions_are_frozen(self):
        action = parse_action("CACHITO_BID", {"quantity": 3, "faceValue": 4})
        with pytest.raises(Exception):
            action.quantity = 9
