"""
Test Configuration
==================

Pytest fixtures for rule matching tests.
"""

import json
import os
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any, Optional

# Set test environment before settings are imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from regmatch.core.enums import Jurisdiction
from regmatch.db.base import Base
from regmatch.models.domain.rule import Rule
from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.rule import RuleDefinition

CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "rules.catalog.json"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def make_business() -> Callable[..., BusinessInput]:
    """Build a business profile from wire-name overrides (defaults to a bare CA business)."""

    def _make(**overrides: Any) -> BusinessInput:
        data: dict[str, Any] = {"state": "CA"}
        data.update(overrides)
        return BusinessInput.model_validate(data)

    return _make


@pytest.fixture
def make_rule() -> Callable[..., RuleDefinition]:
    """Build a rule definition from catalog-shaped scope and predicates."""

    def _make(
        scope: Optional[dict[str, Any]] = None,
        mode: str = "all",
        predicates: Optional[list[dict[str, Any]]] = None,
        jurisdiction: str = "federal",
        title: Optional[str] = None,
    ) -> RuleDefinition:
        return RuleDefinition.model_validate(
            {
                "title": title,
                "jurisdiction": jurisdiction,
                "scope": scope,
                "conditions": {"mode": mode, "predicates": predicates or []},
            }
        )

    return _make


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh in-memory SQLite database with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def catalog_data() -> list[dict[str, Any]]:
    """Raw entries of the bundled rule catalog."""
    with CATALOG_PATH.open(encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def add_rule(db_session: AsyncSession) -> Callable[..., Any]:
    """Insert a rule record directly, bypassing catalog validation."""

    async def _add(
        title: str,
        conditions: dict[str, Any],
        scope: Optional[dict[str, Any]] = None,
        jurisdiction: str = "federal",
        authority: str = "Test Authority",
    ) -> Rule:
        rule = Rule(
            title=title,
            jurisdiction=Jurisdiction(jurisdiction),
            authority=authority,
            scope=scope,
            conditions=conditions,
            requirements=[{"action": f"Comply with {title}"}],
            references=[],
            tags=[],
        )
        db_session.add(rule)
        await db_session.flush()
        await db_session.refresh(rule)
        return rule

    return _add


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the API bound to the test database session."""
    from regmatch.deps import get_db
    from regmatch.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
