"""Pydantic schemas for API requests and responses."""

from typing import Literal

from pydantic import BaseModel


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand"]


class CardResponse(BaseModel):
    """Card representation; rank and suit are withheld for a face-down card."""

    rank: str | None = None
    suit: str | None = None
    symbol: str | None = None
    color: Literal["red", "black"] | None = None
    hidden: bool = False


class HandResponse(BaseModel):
    """Hand representation; value is withheld while a card is face down."""

    cards: list[CardResponse]
    value: int | None
    is_busted: bool


class GameStateResponse(BaseModel):
    """Current game state."""

    state: str
    player_hand: HandResponse
    dealer_hand: HandResponse
    dealer_card_hidden: bool
    cards_remaining: int
    outcome: str | None
    winner: Literal["player", "dealer"] | None
    message: str
    can_hit: bool
    can_stand: bool
    can_start: bool


class SessionResponse(BaseModel):
    """Newly created session."""

    session_id: str
