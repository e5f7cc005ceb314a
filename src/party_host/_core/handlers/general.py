# Area: Core
"""
General Handler
===============

Turn-effect dice game. The turn holder rolls one die:

1 → level resets to 0, turn passes
2 → pending until the roller names a drink target, then turn passes
3 → turn passes
4 → roller gains the thumb power, turn passes
5 → pending until the host ends the mini-game, then turn passes
6 → level +1; sole leader decrees a rule (pending), tied leaders go to a
    suggestion-then-vote tie-break (pending), anyone below the top keeps
    the turn and rolls again

Thumb races and tie-break votes are not bound to the turn.
"""

import logging
from collections import Counter
from dataclasses import replace

from ..actions import (
    ChoosePlayerAction,
    GameEndAction,
    MakeRuleAction,
    RollDiceAction,
    SuggestRuleAction,
    ThumbRaceClickAction,
    UseThumbAction,
    VoteRuleAction,
)
from ..models import GeneralState, Room, ThumbRace, TieBreak
from ..turn_sequencer import next_turn
from ...random_source import RandomSource

logger = logging.getLogger("party_host.handlers.general")


def handle_general(
    room: Room, state: GeneralState, player_id: str, action, rng: RandomSource,
) -> Room:
    """Apply one action to a General room."""
    if isinstance(action, UseThumbAction):
        return _use_thumb(room, state, player_id)
    if isinstance(action, ThumbRaceClickAction):
        return _race_click(room, state, player_id)
    if isinstance(action, MakeRuleAction):
        return _make_rule(room, state, player_id, action.rule)
    if isinstance(action, SuggestRuleAction):
        return _suggest_rule(room, state, player_id, action.rule)
    if isinstance(action, VoteRuleAction):
        return _vote_rule(room, state, player_id, action.target_id, rng)
    if isinstance(action, GameEndAction):
        return _end_mini_game(room, state, player_id)

    if state.current_turn_id != player_id:
        return room
    if isinstance(action, RollDiceAction):
        return _roll(room, state, player_id, rng)
    if isinstance(action, ChoosePlayerAction):
        return _choose_player(room, state, player_id, action.target_id)
    return room


def _advance(room: Room, from_id: str) -> str:
    return next_turn(from_id, room.player_order, room.players)


def _roll(room: Room, state: GeneralState, player_id: str, rng: RandomSource) -> Room:
    if state.roll_pending:
        return room

    roll = rng.roll_die()
    logger.info(f"[{room.code}] {player_id} rolled {roll}")
    rolled = replace(state, last_roll=roll, last_roller_id=player_id, drink_target_id=None)
    roller = room.players[player_id]

    if roll == 1:
        room = room.with_player(replace(roller, general_level=0))
        return room.with_state(replace(rolled, current_turn_id=_advance(room, player_id)))
    if roll == 2:
        return room.with_state(replace(rolled, roll_pending=True))
    if roll == 3:
        return room.with_state(replace(rolled, current_turn_id=_advance(room, player_id)))
    if roll == 4:
        room = room.with_player(replace(roller, is_thumb_master=True))
        return room.with_state(replace(rolled, current_turn_id=_advance(room, player_id)))
    if roll == 5:
        return room.with_state(replace(rolled, roll_pending=True))

    # 6: promotion
    room = room.with_player(replace(roller, general_level=roller.general_level + 1))
    levels = {pid: p.general_level for pid, p in room.players.items()}
    top = max(levels.values())
    if levels[player_id] < top:
        return room.with_state(replace(rolled, roll_pending=False))
    tied = tuple(pid for pid in room.player_order if levels.get(pid) == top)
    if len(tied) > 1:
        logger.info(f"[{room.code}] Tie at level {top}: {list(tied)}")
        return room.with_state(replace(rolled, roll_pending=True, tie_break=TieBreak(tied_ids=tied)))
    return room.with_state(replace(rolled, roll_pending=True))


def _choose_player(room: Room, state: GeneralState, player_id: str, target_id: str) -> Room:
    if not (state.roll_pending and state.last_roll == 2):
        return room
    if target_id not in room.players:
        return room
    return room.with_state(replace(
        state,
        roll_pending=False,
        drink_target_id=target_id,
        current_turn_id=_advance(room, player_id),
    ))


def _end_mini_game(room: Room, state: GeneralState, player_id: str) -> Room:
    if room.host_id != player_id:
        return room
    if not (state.roll_pending and state.last_roll == 5):
        return room
    return room.with_state(replace(
        state, roll_pending=False, current_turn_id=_advance(room, state.current_turn_id),
    ))


def _make_rule(room: Room, state: GeneralState, player_id: str, rule: str) -> Room:
    if state.current_turn_id != player_id or state.tie_break is not None:
        return room
    if not (state.roll_pending and state.last_roll == 6):
        return room
    logger.info(f"[{room.code}] New rule by {player_id}: {rule}")
    return room.with_state(replace(state, active_rule=rule, roll_pending=False))


# ── Tie-break ────────────────────────────────────────────────


def _suggest_rule(room: Room, state: GeneralState, player_id: str, rule: str) -> Room:
    tie = state.tie_break
    if tie is None or player_id not in tie.tied_ids or player_id in tie.suggestions:
        return room
    suggestions = dict(tie.suggestions)
    suggestions[player_id] = rule
    return room.with_state(replace(state, tie_break=replace(tie, suggestions=suggestions)))


def _vote_rule(
    room: Room, state: GeneralState, player_id: str, target_id: str, rng: RandomSource,
) -> Room:
    tie = state.tie_break
    if tie is None or not tie.suggestions_complete:
        return room
    if target_id not in tie.suggestions or player_id in tie.votes:
        return room
    if not room.players[player_id].is_connected:
        return room

    votes = dict(tie.votes)
    votes[player_id] = target_id
    voted = replace(state, tie_break=replace(tie, votes=votes))
    return room.with_state(settle_tie_break(room, voted, rng))


def settle_tie_break(room: Room, state: GeneralState, rng: RandomSource) -> GeneralState:
    """
    Finish the tie-break if its outcome is already fixed.

    A vote closes once every connected player has voted. Seats can also
    empty out mid tie-break: a lone remaining leader gets the turn and
    decrees the rule as a sole leader would, and with nobody left the
    pending 6 is dropped.
    """
    tie = state.tie_break
    if tie is None:
        return state
    if not tie.tied_ids:
        logger.info(f"[{room.code}] Tie-break dropped, no tied players left")
        return replace(state, tie_break=None, roll_pending=False)
    if len(tie.tied_ids) == 1:
        leader = tie.tied_ids[0]
        logger.info(f"[{room.code}] Tie-break left {leader} as sole leader")
        return replace(state, tie_break=None, current_turn_id=leader)
    if not tie.suggestions_complete or len(tie.votes) < len(room.connected_ids()):
        return state

    winner = _tally(tie.votes, tie.tied_ids, rng)
    rule = tie.suggestions.get(winner)
    logger.info(f"[{room.code}] Tie-break won by {winner}: {rule}")
    return replace(state, tie_break=None, active_rule=rule, roll_pending=False)


def _tally(votes, tied_ids, rng: RandomSource) -> str:
    """Majority winner; ties (or no votes at all) are settled at random."""
    counts = Counter(votes.values())
    if not counts:
        return rng.choice(list(tied_ids))
    best = max(counts.values())
    leaders = [pid for pid in tied_ids if counts.get(pid) == best]
    if len(leaders) == 1:
        return leaders[0]
    return rng.choice(leaders or list(tied_ids))


# ── Thumb race ───────────────────────────────────────────────


def _use_thumb(room: Room, state: GeneralState, player_id: str) -> Room:
    player = room.players[player_id]
    if not player.is_thumb_master:
        return room
    if state.thumb_race is not None and state.thumb_race.active:
        return room
    room = room.with_player(replace(player, is_thumb_master=False))
    logger.info(f"[{room.code}] Thumb race started by {player_id}")
    race = settle_thumb_race(ThumbRace(trigger_id=player_id), room.connected_ids())
    return room.with_state(replace(state, thumb_race=race))


def _race_click(room: Room, state: GeneralState, player_id: str) -> Room:
    race = state.thumb_race
    if race is None or not race.active:
        return room
    if player_id == race.trigger_id or player_id in race.participants:
        return room
    if not room.players[player_id].is_connected:
        return room

    race = settle_thumb_race(replace(race, participants=race.participants + (player_id,)), room.connected_ids())
    return room.with_state(replace(state, thumb_race=race))


def settle_thumb_race(race: ThumbRace, connected) -> ThumbRace:
    """
    Close the race once every connected player but the trigger has joined.

    The loser is the first connected non-trigger player who never joined,
    or the trigger when nobody is left out.
    """
    if not race.active or len(race.participants) < len(connected) - 1:
        return race
    stragglers = [pid for pid in connected if pid not in race.participants and pid != race.trigger_id]
    loser_id = stragglers[0] if stragglers else race.trigger_id
    logger.info(f"Thumb race by {race.trigger_id} over, last: {loser_id}")
    return replace(race, active=False, loser_id=loser_id)
