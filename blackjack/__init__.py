"""Single-player blackjack engine - 100% UI-agnostic."""

from blackjack.cards import Card, Deck, Rank, Suit, build_deck, shuffle_cards
from blackjack.dealer import dealer_should_hit, play_dealer
from blackjack.hand import Hand, Outcome, evaluate_hands, score

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "build_deck",
    "shuffle_cards",
    "Hand",
    "Outcome",
    "evaluate_hands",
    "score",
    "dealer_should_hit",
    "play_dealer",
]
