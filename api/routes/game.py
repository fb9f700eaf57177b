"""Game API endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Header

from api.schemas import (
    ActionRequest,
    CardResponse,
    GameStateResponse,
    HandResponse,
    SessionResponse,
)
from api.session import create_session, get_session_game, reset_session_game
from blackjack.cards import Card
from blackjack.game import BlackjackGame
from blackjack.hand import Hand

router = APIRouter()

SessionHeader = Annotated[str | None, Header(alias="X-Session-ID")]


def _card_to_response(card: Card) -> CardResponse:
    """Convert a face-up Card to CardResponse."""
    return CardResponse(
        rank=str(card.rank),
        suit=card.suit.value,
        symbol=card.suit.symbol,
        color="red" if card.suit.is_red else "black",
    )


def _hand_to_response(hand: Hand, hide_first: bool = False) -> HandResponse:
    """Convert a Hand to HandResponse, optionally face-down on its first card."""
    cards = [_card_to_response(c) for c in hand.cards]
    if hide_first and cards:
        cards[0] = CardResponse(hidden=True)
        return HandResponse(cards=cards, value=None, is_busted=False)
    return HandResponse(cards=cards, value=hand.value, is_busted=hand.is_busted)


def _game_state_response(game: BlackjackGame) -> GameStateResponse:
    """Convert game state to response."""
    return GameStateResponse(
        state=game.state.name,
        player_hand=_hand_to_response(game.player_hand),
        dealer_hand=_hand_to_response(game.dealer_hand, hide_first=game.hide_dealer_card),
        dealer_card_hidden=game.hide_dealer_card,
        cards_remaining=game.cards_remaining,
        outcome=game.outcome.value if game.outcome else None,
        winner=game.outcome.winner if game.outcome else None,
        message=game.message,
        can_hit=game.can_hit,
        can_stand=game.can_stand,
        can_start=game.can_start,
    )


async def _require_game(session_id: str | None) -> BlackjackGame:
    game = await get_session_game(session_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return game


@router.post("/new")
async def new_game(session_id: SessionHeader = None) -> SessionResponse:
    """Create a new game session, or reset the caller's existing one."""
    if session_id is not None and await reset_session_game(session_id) is not None:
        return SessionResponse(session_id=session_id)

    token, _ = await create_session()
    return SessionResponse(session_id=token)


@router.get("/state")
async def get_state(session_id: SessionHeader = None) -> GameStateResponse:
    """Get current game state."""
    game = await _require_game(session_id)
    return _game_state_response(game)


@router.post("/start")
async def start_game(session_id: SessionHeader = None) -> GameStateResponse:
    """Shuffle and deal a new round."""
    game = await _require_game(session_id)
    game.start_game()
    return _game_state_response(game)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: SessionHeader = None,
) -> GameStateResponse:
    """Execute a player action; actions out of turn leave the state unchanged."""
    game = await _require_game(session_id)

    actions = {
        "hit": game.hit,
        "stand": game.stand,
    }
    actions[request.action]()

    return _game_state_response(game)
