"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any
from uuid import uuid4

# Disable rate limiting and point the default engine at SQLite before settings load
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import AccountModel, Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

OCTOCAT_REPOS = [
    {
        "id": 1296269,
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "html_url": "https://github.com/octocat/Hello-World",
        "description": "My first repository on GitHub!",
        "language": None,
        "stargazers_count": 80,
        "watchers_count": 80,
        "forks_count": 9,
        "created_at": "2011-01-26T19:01:12Z",
    },
    {
        "id": 1300192,
        "name": "Spoon-Knife",
        "full_name": "octocat/Spoon-Knife",
        "html_url": "https://github.com/octocat/Spoon-Knife",
        "description": "This repo is for demonstration purposes only.",
        "language": "HTML",
        "stargazers_count": 12000,
        "watchers_count": 12000,
        "forks_count": 140000,
        "created_at": "2011-01-27T19:30:43Z",
    },
]


def github_handler(request: httpx.Request) -> httpx.Response:
    """Fake GitHub: knows ``octocat`` and nobody else."""
    if request.url.path == "/users/octocat/repos":
        return httpx.Response(200, json=OCTOCAT_REPOS)
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables, one per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], Any]:
    """Unit of Work factory bound to the test database."""
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with a fresh ID."""
    return TokenUser(
        id=uuid4(),
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
async def test_account(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
) -> AccountModel:
    """Persist the account backing ``test_user``."""
    async with session_factory() as session:
        account = AccountModel(
            id=test_user.id,
            email=test_user.email,
            display_name=test_user.display_name,
            avatar_url="https://gravatar.com/avatar/test",
        )
        session.add(account)
        await session.commit()
        return account


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _build_app(uow_factory: Callable[[], Any], auth_provider: JWTAuthProvider) -> Any:
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_account_service,
        get_github_service,
        get_profile_service,
    )
    from domain.services.account_service import AccountService
    from domain.services.github_service import GitHubService
    from domain.services.profile_service import ProfileService
    from infrastructure.github.client import GitHubClient
    from main import create_app

    app = create_app()
    github = GitHubService(
        GitHubClient(
            base_url="https://api.github.test",
            transport=httpx.MockTransport(github_handler),
        )
    )

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_account_service] = lambda: AccountService(uow_factory)
    app.dependency_overrides[get_github_service] = lambda: github
    return app


@pytest.fixture
async def anonymous_client(
    uow_factory: Callable[[], Any],
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """Client wired to the test database and fake GitHub, without credentials."""
    app = _build_app(uow_factory, auth_provider)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(
    uow_factory: Callable[[], Any],
    auth_provider: JWTAuthProvider,
    auth_headers: dict[str, str],
    test_account: AccountModel,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Authenticated test client.

    This client:
    - Uses an in-memory SQLite database
    - Has an account row for the test user
    - Sends a real bearer token signed by the test auth provider
    - Talks to a fake GitHub through httpx.MockTransport
    """
    app = _build_app(uow_factory, auth_provider)

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c

    app.dependency_overrides.clear()
