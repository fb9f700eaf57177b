"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Game state machine states.

    Flow: IDLE → PLAYER_TURN → DEALER_TURN → GAME_OVER → PLAYER_TURN ...
    """

    # No round dealt yet
    IDLE = auto()

    # Player may hit or stand
    PLAYER_TURN = auto()

    # Dealer draws (resolved synchronously inside stand)
    DEALER_TURN = auto()

    # Outcome decided, ready for a new round
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()
