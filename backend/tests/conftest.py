"""
DevLink - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from faker import Faker

# Set testing environment (before any devlink import reads settings)
os.environ['TESTING'] = 'true'
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['LOG_FILE'] = ''
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'

from devlink.main import app
from devlink.core.database import Base, get_db, enable_sqlite_foreign_keys
from devlink.core.security import get_password_hash, create_access_token
from devlink.models.user import User
from devlink.services.portfolio_store import PortfolioStore

fake = Faker()

# One in-memory database per test; StaticPool keeps it on a single connection
TEST_DATABASE_URL = 'sqlite+aiosqlite://'
TEST_PASSWORD = 'testpassword123'


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db_session: AsyncSession, **overrides) -> User:
    user = User(
        email=overrides.get('email', fake.unique.email()),
        name=overrides.get('name', fake.name()),
        hashed_password=get_password_hash(overrides.get('password', TEST_PASSWORD)),
        is_active=overrides.get('is_active', True),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user"""
    return await _create_user(db_session)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second user, for ownership checks"""
    return await _create_user(db_session)


@pytest.fixture
def test_user_data() -> dict:
    """Registration payload for a user that does not exist yet"""
    return {
        'name': fake.name(),
        'email': fake.unique.email(),
        'password': TEST_PASSWORD,
    }


def make_auth_headers(user: User) -> dict:
    token = create_access_token({'sub': str(user.id)})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return make_auth_headers(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    """Generate authentication headers for the second user"""
    return make_auth_headers(other_user)


@pytest.fixture
def store(db_session: AsyncSession) -> PortfolioStore:
    return PortfolioStore(db_session)


@pytest.fixture
def user_factory(db_session: AsyncSession):
    """Create extra users: await user_factory(is_active=False)"""
    async def _make(**overrides) -> User:
        return await _create_user(db_session, **overrides)
    return _make


@pytest.fixture
def headers_for():
    """Bearer headers for any user"""
    return make_auth_headers


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD
