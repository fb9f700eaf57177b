"""Pytest fixtures for blackjack tests."""

import pytest
from random import Random

from blackjack.cards import Card, Deck, build_deck
from blackjack.hand import Hand
from blackjack.game import BlackjackGame


def _cards(*names: str) -> list[Card]:
    return [Card.from_string(name) for name in names]


def _stacked_order(*names: str) -> list[Card]:
    """Full 52-card deck that deals ``names`` first; the rest stay in canonical order."""
    top = _cards(*names)
    rest = [card for card in build_deck() if card not in top]
    return rest + list(reversed(top))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck.shuffled(rng)


@pytest.fixture
def make_hand():
    """Factory: build a hand from short card strings, e.g. make_hand("AS", "10H")."""

    def factory(*names: str) -> Hand:
        return Hand(cards=_cards(*names))

    return factory


@pytest.fixture
def stacked_deck():
    """Factory: a full deck (bottom first) that deals the given cards first."""
    return _stacked_order


@pytest.fixture
def stacked_game():
    """
    Factory: a game whose every shuffle deals the given cards first.

    Deal order is player, player, dealer, dealer, then hits and dealer draws.
    """

    def factory(*names: str) -> BlackjackGame:
        order = _stacked_order(*names)
        return BlackjackGame(shuffler=lambda _: list(order))

    return factory


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand(make_hand):
    """A natural 21 (A-K)."""
    return make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand(make_hand):
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand(make_hand):
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def bust_hand(make_hand):
    """A busted hand."""
    return make_hand("10S", "6H", "KC")


@pytest.fixture
def game(rng):
    """A new idle game instance."""
    return BlackjackGame(rng=rng)


@pytest.fixture
def started_game(game):
    """A game with a round dealt."""
    game.start_game()
    return game
