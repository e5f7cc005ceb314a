# Area: Shared
"""
party_host.cli — Command-line interface
=======================================

Provides the CLI entry point.

Usage:
    party-host demo                          # scripted Cachito session
    party-host demo --game general --seed 7  # scripted General session
    party-host demo --config host.json       # with a JSON config file

The demo seats three local players in one room, plays a few moves
through ``PartyHost`` and prints every ``room_update`` as JSON, one block
per player, so the per-viewer masking can be inspected.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from ._core.models import CachitoPhase, GameType, GeneralState, HigherLowerState
from ._shared.logging_config import setup_logging
from .config import load_config
from .errors import ConfigError
from .host import Msgs, PartyHost
from .random_source import SystemRandomSource

DEMO_PLAYERS = ["Ana", "Beto", "Cata"]

GAME_CHOICES = {
    "cachito": GameType.CACHITO,
    "general": GameType.GENERAL,
    "higher_lower": GameType.HIGHER_LOWER,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="party-host",
        description="Party game host - authoritative room state for party games",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  party-host demo
  party-host demo --game higher_lower --seed 3
  PARTY_HOST_LOG_LEVEL=DEBUG party-host demo --game general
        """,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Run a scripted three-player session")
    demo.add_argument(
        "--game",
        choices=sorted(GAME_CHOICES),
        default="cachito",
        help="Game to play (default: cachito)",
    )
    demo.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for dice and deck so runs are repeatable",
    )
    demo.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )

    return parser.parse_args(argv)


class DemoSession:
    """Three local connections driving one room."""

    def __init__(self, host: PartyHost):
        self.host = host
        self.connections: Dict[str, str] = {}  # player id -> connection id
        self.room_code = ""

    def send(self, player_id: str, event: str, payload: Any = None) -> Msgs:
        return self.host.handle(self.connections[player_id], event, payload)

    def act(self, player_id: str, action_type: str, **fields: Any) -> Msgs:
        return self.send(player_id, "action_intent", {"type": action_type, "payload": fields})

    def seat(self, names: List[str]) -> None:
        for index, name in enumerate(names, start=1):
            connection_id = f"demo-{index}"
            payload = {"playerName": name}
            if self.room_code:
                payload["roomId"] = self.room_code
            for _, event, body in self.host.handle(connection_id, "join_room", payload):
                if event == "session_token":
                    self.connections[body["playerId"]] = connection_id
                    self.room_code = body["roomId"]

    @property
    def room(self):
        return self.host.room(self.room_code)


def _print_step(title: str, outgoing: Msgs) -> None:
    print(f"\n=== {title} ===")
    for connection_id, event, payload in outgoing:
        print(f"--- {connection_id} <- {event}")
        print(json.dumps(payload, indent=2, sort_keys=True))


def _play_cachito(demo: DemoSession) -> None:
    turn = demo.room.state.current_turn_id
    _print_step(f"{turn} bids two 3s", demo.act(turn, "CACHITO_BID", quantity=2, faceValue=3))

    turn = demo.room.state.current_turn_id
    _print_step(f"{turn} doubts", demo.act(turn, "CACHITO_DOUBT"))

    if demo.room.state.phase is CachitoPhase.RESOLVING:
        host_id = demo.room.host_id
        _print_step("next round", demo.act(host_id, "CACHITO_NEXT_ROUND"))


def _play_general(demo: DemoSession, turns: int = 6) -> None:
    for _ in range(turns):
        state = demo.room.state
        if not isinstance(state, GeneralState):
            return
        roller = state.current_turn_id
        _print_step(f"{roller} rolls", demo.act(roller, "GENERAL_ROLL_DICE"))
        _resolve_general(demo)


def _resolve_general(demo: DemoSession) -> None:
    state = demo.room.state
    if not state.roll_pending:
        return
    roller = state.current_turn_id
    if state.last_roll == 2:
        order = demo.room.player_order
        target = order[(order.index(roller) + 1) % len(order)]
        _print_step(f"{roller} sends {target} to drink",
                    demo.act(roller, "GENERAL_CHOOSE_PLAYER", targetId=target))
    elif state.last_roll == 5:
        _print_step("host ends the mini-game", demo.act(demo.room.host_id, "GENERAL_GAME_END"))
    elif state.tie_break is not None:
        for pid in state.tie_break.tied_ids:
            _print_step(f"{pid} suggests a rule",
                        demo.act(pid, "GENERAL_SUGGEST_RULE", rule=f"{pid} picks the music"))
        first = state.tie_break.tied_ids[0]
        for pid in demo.room.connected_ids():
            _print_step(f"{pid} votes", demo.act(pid, "GENERAL_VOTE_RULE", targetId=first))
    elif state.last_roll == 6:
        _print_step(f"{roller} makes a rule",
                    demo.act(roller, "GENERAL_MAKE_RULE", rule="No first names"))


def _play_higher_lower(demo: DemoSession, guesses: int = 4) -> None:
    for number in range(7, 7 + guesses):
        state = demo.room.state
        if not isinstance(state, HigherLowerState) or state.current_card is None:
            return
        guesser = state.guesser_id
        _print_step(f"{guesser} guesses {number}",
                    demo.act(guesser, "HL_GUESS", guess="EXACT", number=number))


def run_demo(args: argparse.Namespace) -> int:
    """Play one scripted session and print what each player sees."""
    config = load_config(args.config)
    setup_logging(config.log_file, config.log_level)

    host = PartyHost(config=config, rng=SystemRandomSource(args.seed))
    demo = DemoSession(host)
    demo.seat(DEMO_PLAYERS)

    game = GAME_CHOICES[args.game]
    _print_step(f"start {game.value}", demo.send(demo.room.host_id, "start_game", {"gameType": game.value}))

    if game is GameType.CACHITO:
        _play_cachito(demo)
    elif game is GameType.GENERAL:
        _play_general(demo)
    else:
        _play_higher_lower(demo)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        if args.command == "demo":
            return run_demo(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0
