import pytest
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from vodcms.config import EpisodeSyncConfig
from vodcms.database import Base
from vodcms.models import LegacyVod, Player


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# Note: Using pytest-asyncio's built-in event_loop fixture (asyncio_mode = auto)


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def sync_config() -> EpisodeSyncConfig:
    return EpisodeSyncConfig(database_url=TEST_DATABASE_URL, batch_size=100)


# --- Data Fixtures ---

@pytest.fixture
async def sample_players(test_session) -> list[Player]:
    """Create the player registry."""
    players = [
        Player(id=1, from_key="youku", name="Youku"),
        Player(id=2, from_key="qq", name="Tencent Video"),
        Player(id=3, from_key="m3u8", name="M3U8"),
    ]
    test_session.add_all(players)
    await test_session.commit()
    return players


@pytest.fixture
def make_vods(test_session):
    """Factory inserting bb_vod rows from (play_from, play_url) pairs, ids from 1."""

    async def _make(rows: list[tuple[str | None, str | None]]) -> list[LegacyVod]:
        vods = [
            LegacyVod(
                vod_id=index,
                vod_name=f"Video {index}",
                vod_play_from=play_from,
                vod_play_url=play_url,
            )
            for index, (play_from, play_url) in enumerate(rows, start=1)
        ]
        test_session.add_all(vods)
        await test_session.commit()
        test_session.expunge_all()
        return vods

    return _make
