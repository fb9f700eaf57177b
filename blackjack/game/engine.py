"""Blackjack game engine with state machine."""

from random import Random
from typing import Callable, Sequence

from transitions import Machine

from blackjack.cards import Card, Deck, build_deck, shuffle_cards
from blackjack.dealer import play_dealer
from blackjack.hand import Hand, Outcome, evaluate_hands
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.state import GameState

Shuffler = Callable[[Sequence[Card]], list[Card]]

_OUTCOME_EVENTS = {
    Outcome.PLAYER_BUSTS: EventType.DEALER_WINS,
    Outcome.DEALER_BUSTS: EventType.PLAYER_WINS,
    Outcome.PLAYER_WINS: EventType.PLAYER_WINS,
    Outcome.DEALER_WINS: EventType.DEALER_WINS,
    Outcome.PUSH: EventType.PUSH,
}


class BlackjackGame:
    """
    Single-player blackjack engine using a state machine.

    This is the core game logic, completely UI-agnostic. Callers send
    intents (start_game, hit, stand) and re-read state afterwards; events
    narrate what happened.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal", "source": ["idle", "game_over"], "dest": "player_turn"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "game_over"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "game_over"},
    ]

    def __init__(
        self,
        rng: Random | None = None,
        shuffler: Shuffler | None = None,
    ) -> None:
        """
        Initialize a new game in the idle state.

        Args:
            rng: Random number generator for reproducible shuffles
            shuffler: Replaces the Fisher-Yates shuffle (used to stack decks)
        """
        self._rng = rng or Random()
        self._shuffler = shuffler or (lambda cards: shuffle_cards(cards, self._rng))

        self.deck = Deck([])
        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.outcome: Outcome | None = None
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    @property
    def message(self) -> str:
        """Outcome message, empty until the game is over."""
        return self.outcome.message if self.outcome else ""

    @property
    def player_score(self) -> int:
        """Current value of the player's hand."""
        return self.player_hand.value

    @property
    def dealer_score(self) -> int:
        """Current value of the dealer's hand, hidden card included."""
        return self.dealer_hand.value

    @property
    def cards_remaining(self) -> int:
        """Number of cards left in the deck."""
        return len(self.deck)

    @property
    def hide_dealer_card(self) -> bool:
        """Whether the dealer's first card should be concealed from the viewer."""
        return self.state == GameState.PLAYER_TURN

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def start_game(self) -> bool:
        """
        Shuffle a fresh deck and deal a new round.

        Ignored while a round is in progress, so a stray start cannot
        discard the current hands.

        Returns:
            True if a round was dealt, False if one is still in progress
        """
        if not self.can_start:
            return self._reject("start_game")

        self.deck = Deck(self._shuffler(build_deck()))
        self.events.emit_new(EventType.DECK_SHUFFLED, cards=len(self.deck))

        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.outcome = None

        # Player takes two from the top, then the dealer takes two
        self._deal_card_to_hand(self.player_hand)
        self._deal_card_to_hand(self.player_hand)
        self._deal_card_to_hand(self.dealer_hand, face_up=False)
        self._deal_card_to_hand(self.dealer_hand)

        self.deal()
        self.events.emit_new(EventType.GAME_STARTED, player_value=self.player_score)
        return True

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        if self.state != GameState.PLAYER_TURN:
            return self._reject("hit")

        self._deal_card_to_hand(self.player_hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player_score)

        if self.player_hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player_score)
            self.player_busts()
            self._reveal_dealer_card()
            self._finish(evaluate_hands(self.player_hand, self.dealer_hand))
            return True

        self.player_action()
        return True

    def stand(self) -> bool:
        """Player stands; the dealer plays out and the round is decided."""
        if self.state != GameState.PLAYER_TURN:
            return self._reject("stand")

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_score)
        self.player_done()
        self._reveal_dealer_card()

        play_dealer(
            self.dealer_hand,
            self.deck,
            on_draw=lambda card: self.events.emit_new(
                EventType.DEALER_HITS,
                card=str(card),
                hand_value=self.dealer_score,
            ),
        )

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_score)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_score)

        self.dealer_done()
        self._finish(evaluate_hands(self.player_hand, self.dealer_hand))
        return True

    def _deal_card_to_hand(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card from the top of the deck to a hand."""
        card = self.deck.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if hand is self.dealer_hand else "player",
        )
        return card

    def _reveal_dealer_card(self) -> None:
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(self.dealer_hand.cards[0]),
            hand_value=self.dealer_score,
        )

    def _finish(self, outcome: Outcome) -> None:
        """Record the outcome of a finished round."""
        self.outcome = outcome
        self.events.emit_new(
            _OUTCOME_EVENTS[outcome],
            player_value=self.player_score,
            dealer_value=self.dealer_score,
        )
        self.events.emit_new(EventType.GAME_ENDED, outcome=outcome.value, message=outcome.message)

    def _reject(self, action: str) -> bool:
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=f"Cannot {action} now",
            state=self.state.name,
        )
        return False

    @property
    def can_start(self) -> bool:
        """Check if a new round can be dealt."""
        return self.state in (GameState.IDLE, GameState.GAME_OVER)

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.state == GameState.PLAYER_TURN

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.state == GameState.PLAYER_TURN
