"""Session management: signed session tokens and an in-memory game store."""

from datetime import datetime, timedelta
from random import Random
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from blackjack.game import BlackjackGame
from config import config


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


def new_game() -> BlackjackGame:
    """Create an idle game, seeded when BLACKJACK_SEED is configured."""
    seed = config.game.rng_seed
    return BlackjackGame(rng=Random(seed) if seed is not None else None)


class InMemorySessionStore:
    """
    Keeps one game per session in process memory.

    Nothing outlives the process. An entry expires session_ttl after it was
    created, the same moment its signed token stops verifying, so access
    does not extend it.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[BlackjackGame, datetime]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create_session_id(self, signed: bool = True) -> str:
        """Create a new session ID, signed by default."""
        session_id = str(uuid4())
        if signed:
            return get_session_signer().sign(session_id)
        return session_id

    async def get(self, session_id: str) -> BlackjackGame | None:
        """Get the session's game."""
        if session_id not in self._sessions:
            return None

        game, expiry = self._sessions[session_id]
        if expiry < datetime.now():
            await self.delete(session_id)
            return None

        return game

    async def set(
        self,
        session_id: str,
        game: BlackjackGame,
        ttl: int | None = None,
    ) -> None:
        """Store a game for a session, starting its lifetime."""
        ttl = ttl or config.session_ttl
        expiry = datetime.now() + timedelta(seconds=ttl)
        self._sessions[session_id] = (game, expiry)

    async def replace(self, session_id: str, game: BlackjackGame) -> bool:
        """Swap the game of a live session, keeping its expiry."""
        if await self.get(session_id) is None:
            return False
        _, expiry = self._sessions[session_id]
        self._sessions[session_id] = (game, expiry)
        return True

    async def delete(self, session_id: str) -> None:
        """Delete session."""
        self._sessions.pop(session_id, None)

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self.get(session_id) is not None

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [
            sid for sid, (_, expiry) in self._sessions.items() if expiry < now
        ]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)


# Global session store instance
_session_store: InMemorySessionStore | None = None


def get_session_store() -> InMemorySessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)


async def create_session() -> tuple[str, BlackjackGame]:
    """
    Create a session holding a fresh idle game; returns the signed token.

    Expired sessions are evicted first. Their tokens no longer verify, so
    nothing would ever look them up again.
    """
    store = get_session_store()
    await store.cleanup_expired()
    session_id = store.create_session_id(signed=False)
    game = new_game()
    await store.set(session_id, game)
    return get_session_signer().sign(session_id), game


async def get_session_game(token: str | None) -> BlackjackGame | None:
    """Resolve a signed token to its game, or None if unknown or invalid."""
    if not token:
        return None
    session_id = extract_session_id(token)
    if session_id is None:
        return None
    return await get_session_store().get(session_id)


async def reset_session_game(token: str) -> BlackjackGame | None:
    """Replace the session's game with a fresh idle one; the session keeps its expiry."""
    session_id = extract_session_id(token)
    if session_id is None:
        return None
    game = new_game()
    if not await get_session_store().replace(session_id, game):
        return None
    return game
