"""Game management layer: session state machine over immutable boards.

Quick start::

    from rookery.game import GameOptions, GameState

    state = GameState()
    state.setup(GameOptions())
    state.submit(52, 36)  # e2-e4
"""

from rookery.game.state import GameOptions, GamePhase, GameState, MoveRecord

__all__ = [
    "GameOptions",
    "GamePhase",
    "GameState",
    "MoveRecord",
]
