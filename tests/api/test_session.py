"""Tests for session management."""

import pytest
from datetime import datetime, timedelta
from unittest.mock import patch

from api.session import (
    SessionSigner,
    InMemorySessionStore,
    create_session,
    extract_session_id,
    get_session_game,
    get_session_signer,
    get_session_store,
    new_game,
    reset_session_game,
)
from blackjack.game import BlackjackGame, GameState


class TestSessionSigner:
    """Tests for SessionSigner class."""

    def test_sign_creates_token(self):
        """Test that sign creates a non-empty token."""
        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("test-session-123")
        assert token
        assert token != "test-session-123"

    def test_unsign_returns_original_id(self):
        """Test that unsign returns the original session ID."""
        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("test-session-456")
        assert signer.unsign(token, max_age=3600) == "test-session-456"

    def test_unsign_invalid_token_returns_none(self):
        """Test that unsign returns None for invalid tokens."""
        signer = SessionSigner(secret_key="test-secret")
        assert signer.unsign("invalid-token-data", max_age=3600) is None

    def test_unsign_wrong_secret_returns_none(self):
        """Test that unsign returns None when using wrong secret key."""
        token = SessionSigner(secret_key="secret-one").sign("test-session")
        assert SessionSigner(secret_key="secret-two").unsign(token, max_age=3600) is None

    def test_unsign_expired_token_returns_none(self):
        """Test that unsign returns None for expired tokens."""
        import time as time_module

        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("test-session")

        original_time = time_module.time

        def mock_time():
            return original_time() + 7200  # 2 hours later

        with patch("time.time", mock_time):
            assert signer.unsign(token, max_age=3600) is None

    def test_global_signer_is_singleton(self):
        assert get_session_signer() is get_session_signer()


class TestInMemorySessionStore:
    """Tests for InMemorySessionStore."""

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        store = InMemorySessionStore()
        game = BlackjackGame()
        await store.set("abc", game)
        assert await store.get("abc") is game
        assert await store.exists("abc")

    @pytest.mark.asyncio
    async def test_get_missing(self):
        store = InMemorySessionStore()
        assert await store.get("missing") is None
        assert not await store.exists("missing")

    @pytest.mark.asyncio
    async def test_delete(self):
        store = InMemorySessionStore()
        await store.set("abc", BlackjackGame())
        await store.delete("abc")
        assert await store.get("abc") is None
        await store.delete("abc")

    @pytest.mark.asyncio
    async def test_expired_session_is_dropped(self):
        store = InMemorySessionStore()
        await store.set("abc", BlackjackGame(), ttl=60)

        later = datetime.now() + timedelta(seconds=120)
        with patch("api.session.datetime") as mock_datetime:
            mock_datetime.now.return_value = later
            assert await store.get("abc") is None

    @pytest.mark.asyncio
    async def test_cleanup_expired(self):
        store = InMemorySessionStore()
        await store.set("old", BlackjackGame(), ttl=60)
        await store.set("new", BlackjackGame(), ttl=600)

        later = datetime.now() + timedelta(seconds=120)
        with patch("api.session.datetime") as mock_datetime:
            mock_datetime.now.return_value = later
            assert await store.cleanup_expired() == 1

        assert await store.exists("new")
        assert not await store.exists("old")

    def test_create_session_id(self):
        store = InMemorySessionStore()
        raw = store.create_session_id(signed=False)
        signed = store.create_session_id()
        assert len(raw) == 36
        assert extract_session_id(signed) is not None

    @pytest.mark.asyncio
    async def test_access_does_not_extend_expiry(self):
        store = InMemorySessionStore()
        start = datetime.now()
        with patch("api.session.datetime") as mock_datetime:
            mock_datetime.now.return_value = start
            await store.set("abc", BlackjackGame(), ttl=60)

            mock_datetime.now.return_value = start + timedelta(seconds=50)
            assert await store.get("abc") is not None

            mock_datetime.now.return_value = start + timedelta(seconds=70)
            assert await store.get("abc") is None

    @pytest.mark.asyncio
    async def test_replace_keeps_expiry(self):
        store = InMemorySessionStore()
        start = datetime.now()
        fresh = BlackjackGame()
        with patch("api.session.datetime") as mock_datetime:
            mock_datetime.now.return_value = start
            await store.set("abc", BlackjackGame(), ttl=60)

            mock_datetime.now.return_value = start + timedelta(seconds=50)
            assert await store.replace("abc", fresh) is True
            assert await store.get("abc") is fresh

            mock_datetime.now.return_value = start + timedelta(seconds=70)
            assert await store.get("abc") is None

    @pytest.mark.asyncio
    async def test_replace_missing_session(self):
        store = InMemorySessionStore()
        assert await store.replace("missing", BlackjackGame()) is False
        assert len(store) == 0


class TestSessionHelpers:
    """Tests for the module-level session helpers."""

    @pytest.mark.asyncio
    async def test_create_session_returns_idle_game(self):
        token, game = await create_session()
        assert game.state == GameState.IDLE
        assert await get_session_game(token) is game

    @pytest.mark.asyncio
    async def test_get_session_game_rejects_bad_tokens(self):
        assert await get_session_game(None) is None
        assert await get_session_game("") is None
        assert await get_session_game("not-a-token") is None

    @pytest.mark.asyncio
    async def test_reset_session_game(self):
        token, game = await create_session()
        game.start_game()

        fresh = await reset_session_game(token)
        assert fresh is not game
        assert fresh.state == GameState.IDLE
        assert await get_session_game(token) is fresh

    @pytest.mark.asyncio
    async def test_reset_unknown_session(self):
        assert await reset_session_game("not-a-token") is None
        unknown = get_session_signer().sign("never-stored")
        assert await reset_session_game(unknown) is None

    @pytest.mark.asyncio
    async def test_create_session_evicts_expired_sessions(self):
        store = InMemorySessionStore()
        with patch("api.session._session_store", store):
            for _ in range(100):
                await create_session()
            assert len(store) == 100

            later = datetime.now() + timedelta(hours=5)
            with patch("api.session.datetime") as mock_datetime:
                mock_datetime.now.return_value = later
                await create_session()

            assert len(store) == 1

    def test_global_store_is_singleton(self):
        assert get_session_store() is get_session_store()

    def test_new_game_uses_configured_seed(self):
        with patch("api.session.config") as mock_config:
            mock_config.game.rng_seed = 11
            first = new_game()
            second = new_game()

        first.start_game()
        second.start_game()
        assert first.player_hand.cards == second.player_hand.cards
