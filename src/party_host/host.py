# Area: Host
"""
party_host.host — Event surface
===============================

``PartyHost`` is what a transport talks to. It takes one inbound event at
a time for a connection and returns the messages to deliver, as
``(connection_id, event_name, payload)`` tuples. It owns the room
registry and the session manager for the lifetime of the process.

Usage
-----
    from party_host import PartyHost

    host = PartyHost()
    outgoing = host.handle("conn-1", "join_room", {"playerName": "Ana"})
    for connection_id, event, payload in outgoing:
        transport.send(connection_id, event, payload)

    # on a timer, e.g. once a second
    for connection_id, event, payload in host.check_grace_periods():
        transport.send(connection_id, event, payload)

Events handled: ``join_room``, ``start_game``, ``action_intent``,
``leave_room`` and ``disconnect`` (sent by the transport when a
connection drops).
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from ._core.actions import parse_action
from ._core.game_setup import start_game
from ._core.masking import mask_room
from ._core.membership import remove_player, seat_player, set_connection
from ._core.models import ConnectionState, Player, Room
from ._core.reducer import apply_action
from ._session.events import JoinRoomPayload, StartGamePayload, parse_event
from ._session.registry import RoomRegistry, normalize_code
from ._session.session_manager import Session, SessionManager
from ._shared.logging_config import log_host_error
from .config import HostConfig
from .errors import ActionFaultError, EventRejectedError, InvalidEventError
from .random_source import RandomSource, SystemRandomSource

logger = logging.getLogger("party_host.host")

Outgoing = Tuple[str, str, Dict[str, Any]]
Msgs = List[Outgoing]


class PartyHost:
    """
    Room registry, sessions and reducer behind one entry point.

    All mutations of a room happen while holding that room's lock, so two
    events for the same room never interleave; events for different rooms
    may be handled from different threads.
    """

    def __init__(
        self,
        config: Optional[HostConfig] = None,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or HostConfig()
        self.rng = rng or SystemRandomSource()
        self.clock = clock
        self.registry = RoomRegistry(
            self.rng,
            code_length=self.config.room_code_length,
            alphabet=self.config.room_code_alphabet,
        )
        self.sessions = SessionManager(self.rng)
        self._events: Dict[str, Callable[[str, Any], Msgs]] = {
            "join_room": self.join_room,
            "start_game": self.start_game,
            "action_intent": self.action_intent,
            "leave_room": self.leave_room,
            "disconnect": self.disconnect,
        }

    def room(self, code: str) -> Optional[Room]:
        """Current committed value of a room."""
        return self.registry.get(code)

    # ── Dispatch ─────────────────────────────────────────────

    def handle(self, connection_id: str, event: str, payload: Any = None) -> Msgs:
        """Route one inbound event and return the messages to send."""
        handler = self._events.get(event)
        if handler is None:
            logger.debug(f"No handler for event={event}")
            return [_error(connection_id, EventRejectedError("UNKNOWN_EVENT", f"Unknown event '{event}'"))]
        try:
            return handler(connection_id, payload)
        except InvalidEventError as exc:
            logger.debug(exc.format_error_log())
            return [_error(connection_id, exc)]
        except EventRejectedError as exc:
            logger.info(f"{event} from {connection_id} rejected: {exc.code}")
            return [_error(connection_id, exc)]

    # ── Events ───────────────────────────────────────────────

    def join_room(self, connection_id: str, payload: Any = None) -> Msgs:
        """Reattach by token, or seat a new player in a named or fresh room."""
        request = parse_event(JoinRoomPayload, "join_room", payload)
        outgoing: Msgs = []

        bound = self.sessions.session_for(connection_id)
        if bound is not None:
            # The connection switches identity; its old seat behaves as dropped.
            outgoing.extend(self.disconnect(connection_id))

        code = normalize_code(request.room_id)
        session = self.sessions.resolve(request.token)
        if session is not None and (not code or code == session.room_code):
            with self.registry.locked(session.room_code):
                room = self.registry.get(session.room_code)
                if room is not None and session.player_id in room.players:
                    return outgoing + self._reattach(connection_id, session, room)

        if not request.player_name:
            raise EventRejectedError("NAME_REQUIRED", "Player name required")

        player = Player(
            id=self.sessions.new_player_id(),
            name=request.player_name,
            dice_count=self.config.starting_dice,
        )

        if code and code in self.registry:
            with self.registry.locked(code):
                room = self.registry.get(code)
                if room is not None:
                    room = self.registry.commit(seat_player(room, player))
                    return outgoing + self._welcome(connection_id, player, room)

        room = self.registry.create(player, self.clock())
        with self.registry.locked(room.code):
            return outgoing + self._welcome(connection_id, player, room)

    def start_game(self, connection_id: str, payload: Any = None) -> Msgs:
        """Host-only: (re)initialise the room for the chosen game."""
        session = self._require_session(connection_id)
        request = parse_event(StartGamePayload, "start_game", payload)
        with self.registry.locked(session.room_code):
            room = self._require_room(session)
            if room.host_id != session.player_id:
                raise EventRejectedError("NOT_HOST", "Only host can start the game")
            room = self.registry.commit(start_game(
                room,
                request.game_type,
                self.rng,
                single_player=request.is_single_player,
                starting_dice=self.config.starting_dice,
            ))
            return self._broadcast(room)

    def action_intent(self, connection_id: str, payload: Any = None) -> Msgs:
        """
        Apply an in-game action.

        Malformed, unauthorised and illegal actions produce no messages. A
        fault inside the reducer is reported to this connection only and
        the room keeps its last committed value.
        """
        session = self.sessions.session_for(connection_id)
        if session is None or not isinstance(payload, dict):
            return []
        try:
            action = parse_action(payload.get("type"), payload.get("payload"))
        except InvalidEventError as exc:
            logger.debug(exc.format_error_log())
            return []

        with self.registry.locked(session.room_code):
            room = self.registry.get(session.room_code)
            if room is None:
                return []
            try:
                next_room = apply_action(room, action, session.player_id, self.rng)
            except Exception as exc:
                fault = ActionFaultError(room.code, session.player_id, action.type, exc)
                log_host_error(fault, room.code)
                return [_error(connection_id, fault)]

            if next_room is room:
                logger.debug(f"[{room.code}] {action.type} from {session.player_id} had no effect")
                return []

            outgoing: Msgs = []
            for removed_id in set(room.players) - set(next_room.players):
                stale = self.sessions.forget_player(removed_id)
                if stale is not None:
                    outgoing.append((stale, "kicked", {"roomId": room.code}))

            next_room = self.registry.commit(next_room)
            return outgoing + self._broadcast(next_room)

    def leave_room(self, connection_id: str, payload: Any = None) -> Msgs:
        """Remove the connection's player immediately."""
        session = self.sessions.unbind(connection_id)
        if session is None:
            return []
        logger.info(f"[{session.room_code}] {session.player_id} left")
        return self._remove(session.room_code, session.player_id)

    def disconnect(self, connection_id: str, payload: Any = None) -> Msgs:
        """Transport dropped: mark the player disconnected and start the grace period."""
        session = self.sessions.unbind(connection_id)
        if session is None:
            return []
        with self.registry.locked(session.room_code):
            room = self.registry.get(session.room_code)
            if room is None or session.player_id not in room.players:
                return []
            room = self.registry.commit(
                set_connection(room, session.player_id, ConnectionState.DISCONNECTED)
            )
            self.sessions.start_grace(
                session.player_id, room.code, self.config.disconnect_grace_seconds,
            )
            logger.info(f"[{room.code}] {session.player_id} disconnected")
            return self._broadcast(room)

    def check_grace_periods(self) -> Msgs:
        """Remove players whose grace period ran out while still disconnected."""
        outgoing: Msgs = []
        for entry in self.sessions.expired():
            code, player_id = entry.room_code, entry.player_id
            with self.registry.locked(code):
                room = self.registry.get(code)
                player = room.players.get(player_id) if room else None
                if player is None or player.is_connected:
                    continue
                logger.info(f"[{code}] {player_id} timed out")
                outgoing.extend(self._remove(code, player_id))
        return outgoing

    # ── Helpers ──────────────────────────────────────────────

    def _reattach(self, connection_id: str, session: Session, room: Room) -> Msgs:
        self.sessions.cancel_grace(session.player_id)
        self.sessions.bind(connection_id, session)
        room = self.registry.commit(
            set_connection(room, session.player_id, ConnectionState.CONNECTED)
        )
        logger.info(f"[{room.code}] {session.player_id} reconnected")
        return [_session_token(connection_id, session)] + self._broadcast(room)

    def _welcome(self, connection_id: str, player: Player, room: Room) -> Msgs:
        session = self.sessions.issue(player.id, room.code)
        self.sessions.bind(connection_id, session)
        logger.info(f"[{room.code}] Player {player.name} ({player.id}) joined")
        return [_session_token(connection_id, session)] + self._broadcast(room)

    def _remove(self, code: str, player_id: str) -> Msgs:
        with self.registry.locked(code):
            self.sessions.forget_player(player_id)
            room = self.registry.get(code)
            if room is None or player_id not in room.players:
                return []
            room = self.registry.commit(remove_player(room, player_id, self.rng))
            if room.is_empty:
                self.sessions.forget_room(code)
                return []
            return self._broadcast(room)

    def _broadcast(self, room: Room) -> Msgs:
        return [
            (connection_id, "room_update", mask_room(room, player_id))
            for connection_id, player_id in self.sessions.viewers(room.code)
            if player_id in room.players
        ]

    def _require_session(self, connection_id: str) -> Session:
        session = self.sessions.session_for(connection_id)
        if session is None:
            raise EventRejectedError("NOT_IN_ROOM", "Join a room first")
        return session

    def _require_room(self, session: Session) -> Room:
        room = self.registry.get(session.room_code)
        if room is None or session.player_id not in room.players:
            raise EventRejectedError("NOT_IN_ROOM", "Room no longer exists")
        return room


def _session_token(connection_id: str, session: Session) -> Outgoing:
    return (
        connection_id,
        "session_token",
        {"token": session.token, "playerId": session.player_id, "roomId": session.room_code},
    )


def _error(connection_id: str, error) -> Outgoing:
    return (connection_id, "error", error.to_payload())
