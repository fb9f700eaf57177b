"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from blackjack.cards import Card

BUST_LIMIT = 21

# An ace promoted from 1 to 11 adds this much
SOFT_ACE_BONUS = 10


def score(cards: Iterable[Card]) -> int:
    """
    Calculate the blackjack value of a sequence of cards.

    Every ace counts 1; if the hand holds an ace and adding 10 stays within
    21, exactly one ace is promoted to 11. No other ace combinations are
    considered.
    """
    total = 0
    has_ace = False

    for card in cards:
        if card.is_ace:
            has_ace = True
        total += card.points

    if has_ace and total + SOFT_ACE_BONUS <= BUST_LIMIT:
        total += SOFT_ACE_BONUS

    return total


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    @property
    def value(self) -> int:
        """Return the hand value with at most one soft ace."""
        return score(self.cards)

    @property
    def is_soft(self) -> bool:
        """Check if an ace is currently counted as 11."""
        hard_total = sum(card.points for card in self.cards)
        return self.value != hard_total

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > BUST_LIMIT

    @property
    def num_cards(self) -> int:
        """Return the number of cards in the hand."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


class Outcome(Enum):
    """Result of a finished game."""

    PLAYER_BUSTS = "player_busts"
    DEALER_BUSTS = "dealer_busts"
    PLAYER_WINS = "player_wins"
    DEALER_WINS = "dealer_wins"
    PUSH = "push"

    @property
    def message(self) -> str:
        """Human-readable result shown to the player."""
        return {
            Outcome.PLAYER_BUSTS: "You busted! Dealer wins.",
            Outcome.DEALER_BUSTS: "Dealer busted! You win!",
            Outcome.PLAYER_WINS: "You win!",
            Outcome.DEALER_WINS: "Dealer wins.",
            Outcome.PUSH: "Push (tie).",
        }[self]

    @property
    def winner(self) -> str | None:
        """Return 'player', 'dealer', or None for a push."""
        if self in (Outcome.DEALER_BUSTS, Outcome.PLAYER_WINS):
            return "player"
        if self in (Outcome.PLAYER_BUSTS, Outcome.DEALER_WINS):
            return "dealer"
        return None


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """
    Compare final player and dealer hands.

    A busted player loses even if the dealer would also bust.
    """
    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_value > BUST_LIMIT:
        return Outcome.PLAYER_BUSTS
    if dealer_value > BUST_LIMIT:
        return Outcome.DEALER_BUSTS
    if player_value > dealer_value:
        return Outcome.PLAYER_WINS
    if player_value < dealer_value:
        return Outcome.DEALER_WINS
    return Outcome.PUSH
