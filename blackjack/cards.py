"""Card and Deck classes - immutable cards, deck building and shuffling."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Iterator, Sequence


class Suit(Enum):
    """Card suits, in canonical deck order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        """Return the unicode suit glyph."""
        return {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is printed in red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks, in canonical deck order (A, 2..10, J, Q, K)."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def points(self) -> int:
        """Return the hard point value (Ace = 1, face cards = 10)."""
        if self == Rank.ACE:
            return 1
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def points(self) -> int:
        """Return the hard point value."""
        return self.rank.points

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'A♠', 'AS', '10h'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]
        if rank_str == "T":
            rank_str = "10"

        suit_map = {
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        try:
            rank = Rank(rank_str)
        except ValueError:
            raise ValueError(f"Invalid rank: {rank_str}") from None
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank, suit_map[suit_str])


def build_deck() -> list[Card]:
    """Return all 52 cards in canonical order (suit-major, rank-minor)."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_cards(cards: Sequence[Card], rng: Random | None = None) -> list[Card]:
    """
    Return a uniformly random permutation of ``cards``.

    Fisher-Yates over a copy; the input sequence is left untouched.

    Args:
        cards: Cards to shuffle
        rng: Random number generator (a fresh unseeded one if not provided)
    """
    rng = rng or Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class Deck:
    """An ordered stack of cards, dealt from the end."""

    def __init__(self, cards: Iterable[Card] | None = None) -> None:
        """Initialize a deck (a full ordered 52-card deck by default)."""
        self._cards: list[Card] = list(cards) if cards is not None else build_deck()

    @classmethod
    def shuffled(cls, rng: Random | None = None) -> "Deck":
        """Build a fresh 52-card deck and shuffle it."""
        return cls(shuffle_cards(build_deck(), rng))

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise IndexError("Cannot draw from empty deck")
        return self._cards.pop()

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards(self) -> list[Card]:
        """Return a copy of the remaining cards, bottom first."""
        return list(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)
