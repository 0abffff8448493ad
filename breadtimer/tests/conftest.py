"""
Shared pytest fixtures for Bread Timer tests.

This module provides common fixtures for:
- Database sessions (in-memory SQLite)
- FastAPI test client
- Sample steps and recipes
"""
import os
import pytest
from datetime import datetime
from typing import Callable, Generator, List

# Set test environment variables BEFORE importing app modules
# This ensures Settings never touches a database file on disk
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TIMEZONE", "UTC")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from breadtimer.db.database import Base, get_db
from breadtimer.db import models  # noqa: F401  (registers tables)
from breadtimer.engine.schedule_cache import get_schedule_cache
from breadtimer.features import FeatureFlags, FeatureFlagService, get_feature_service
from breadtimer.models.schemas import RecipeDefinition, Step, StepDefinition, StepType
from breadtimer.services.recipe_service import RecipeService
from breadtimer.main import app


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database for testing.

    Each test function gets a fresh database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(autouse=True)
def clear_schedule_cache():
    """Keep the process-wide schedule cache from leaking between tests."""
    get_schedule_cache().clear()
    yield
    get_schedule_cache().clear()


@pytest.fixture(scope="function")
def client(db_session) -> Generator[TestClient, None, None]:
    """Create FastAPI test client with database dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def disable_features(client) -> Callable[..., None]:
    """Return a function that switches off the given feature flags for the app.

    Usage:
        disable_features("export_calendar")
    """
    def _disable(*names: str) -> None:
        flags = FeatureFlags(**{f"feature_{name}": False for name in names})
        app.dependency_overrides[get_feature_service] = lambda: FeatureFlagService(flags=flags)

    return _disable


# ============================================================================
# Step and Recipe Fixtures
# ============================================================================

@pytest.fixture
def baguette_steps() -> List[Step]:
    """Three-step baguette process used in the worked examples."""
    return [
        Step(name="Mixing", duration=0.5, type=StepType.ACTIVE),
        Step(name="Rise", duration=2, type=StepType.WAITING),
        Step(name="Bake", duration=0.5, type=StepType.ACTIVE),
    ]


@pytest.fixture
def target_time() -> datetime:
    """Bread ready at 08:00 on New Year's Day 2024."""
    return datetime(2024, 1, 1, 8, 0)


@pytest.fixture
def rye_definition() -> RecipeDefinition:
    """Authoring input for a custom rye recipe."""
    return RecipeDefinition(
        name="Rye Bread",
        steps=[
            StepDefinition(name="Mixing", duration=0.25, type=StepType.ACTIVE),
            StepDefinition(name="Bulk Fermentation", duration=3, type=StepType.WAITING),
            StepDefinition(name="Baking", duration=1, type=StepType.ACTIVE),
        ],
    )


@pytest.fixture
def custom_recipe(db_session, rye_definition):
    """Persist the custom rye recipe and return it."""
    return RecipeService(db_session).create_recipe(rye_definition)
