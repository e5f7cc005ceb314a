# Area: Core
"""
Game Handlers
=============

One handler per mini-game. Each takes the room, its mode state, the acting
player id and a parsed action, and returns either a new room or the very
same room object when the action is not allowed.
"""

from .higher_lower import handle_higher_lower
from .cachito import handle_cachito
from .general import handle_general

__all__ = [
    "handle_higher_lower",
    "handle_cachito",
    "handle_general",
]
