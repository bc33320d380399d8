import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from puzzle_rsvp.auth.dependencies import require_admin
from puzzle_rsvp.database import get_db
from puzzle_rsvp.invites.dependencies import get_registry, get_solve_notifier, throttle_puzzle_attempts
from puzzle_rsvp.main import app
from puzzle_rsvp.puzzles.registry import VerifierRegistry
from puzzle_rsvp.puzzles.verifiers import AnswerVerifier


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def registry():
    """Registry with a single event whose answer is 'open sesame'."""
    registry = VerifierRegistry()
    registry.register("garden-party", AnswerVerifier(["open sesame"]))
    return registry


@pytest.fixture
def client(mock_db, registry):
    """Create a test client with mocked database, registry and throttling."""

    async def override_get_db():
        yield mock_db

    async def no_throttle():
        return None

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_solve_notifier] = lambda: None
    app.dependency_overrides[throttle_puzzle_attempts] = no_throttle
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def admin(client):
    """Bypass the admin key check."""
    app.dependency_overrides[require_admin] = lambda: None
    yield
    app.dependency_overrides.pop(require_admin, None)
