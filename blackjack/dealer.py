"""Dealer drawing policy."""

from typing import Callable

from blackjack.cards import Card, Deck
from blackjack.hand import Hand

# Dealer stands on all 17s, soft or hard
DEALER_STANDS_ON = 17


def dealer_should_hit(hand: Hand) -> bool:
    """Determine if the dealer must take another card."""
    return hand.value < DEALER_STANDS_ON


def play_dealer(
    hand: Hand,
    deck: Deck,
    on_draw: Callable[[Card], None] | None = None,
) -> list[Card]:
    """
    Draw for the dealer until the hand reaches 17 or more.

    Args:
        hand: Dealer hand, extended in place
        deck: Deck to draw from (top of the deck first)
        on_draw: Called with each card after it joins the hand

    Returns:
        The cards drawn, in order
    """
    drawn: list[Card] = []
    while dealer_should_hit(hand):
        card = deck.draw()
        hand.add_card(card)
        drawn.append(card)
        if on_draw is not None:
            on_draw(card)
    return drawn
