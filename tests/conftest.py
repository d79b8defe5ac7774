import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from infrastructure.database import Base
from domain.services import FeesCalculator


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

OWNER = "owner.near"


@pytest.fixture(scope="function")
async def db_session():
    from infrastructure import models

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def calculator():
    return FeesCalculator.new(OWNER, [])


@pytest.fixture
async def initialized_fees(db_session):
    from infrastructure.repositories import FeeStateRepository
    from application.use_cases import InitializeFeesUseCase

    use_case = InitializeFeesUseCase(FeeStateRepository(db_session))
    state = await use_case.execute(OWNER, ["wrap.near"])
    await db_session.commit()

    return state
