"""
Episode resync orchestrator.

Rebuilds bb_vod_source / bb_vod_episode from the legacy play data of every
bb_vod row:

1. Ensure the normalized tables exist
2. Load the player registry, count legacy rows, truncate episodes then sources
3. Page through bb_vod, parse and write each record, commit per page
4. Re-count the normalized tables

Runs are full rebuilds. A failed run leaves the tables truncated and
partially repopulated; rerun from the start to recover.
"""
import enum
import logging
from collections.abc import Callable
from contextlib import aclosing
from dataclasses import asdict, dataclass

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vodcms.config import EpisodeSyncConfig
from vodcms.database import Base, create_engine, create_session_factory
from vodcms.exceptions import SchemaApplicationError, StorageIOError
from vodcms.models import VodEpisode, VodSource, ORPHAN_PLAYER_ID
from vodcms.services.episodes.parser import parse_play_url
from vodcms.services.episodes.player_resolver import PlayerResolver
from vodcms.services.episodes.reader import LegacyVideoRecord, LegacyVodReader
from vodcms.services.episodes.writer import EpisodeWriter, WriteStats

logger = logging.getLogger(__name__)

# Child before parent
NORMALIZED_TABLES = (VodEpisode.__table__, VodSource.__table__)
TRUNCATE_DIALECTS = {"postgresql", "mysql", "mariadb"}


class SyncState(str, enum.Enum):
    IDLE = "idle"
    SCHEMA_ENSURED = "schema_ensured"
    TRUNCATED = "truncated"
    PAGING = "paging"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SyncProgress:
    processed_records: int
    total_records: int
    percentage: float


@dataclass(slots=True)
class SyncRunState:
    total_records: int = 0
    processed_records: int = 0
    skipped_records: int = 0
    offset: int = 0


@dataclass(frozen=True, slots=True)
class SyncResult:
    total_records: int
    processed_records: int
    skipped_records: int
    pages: int
    source_count: int
    episode_count: int
    orphan_source_count: int

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


ProgressCallback = Callable[[SyncProgress], None]


class EpisodeSyncOrchestrator:
    """
    Runs one full episode resync against a single session.

    An orchestrator runs once. Create a new one for every run.
    """

    def __init__(
        self,
        db: AsyncSession,
        config: EpisodeSyncConfig,
        *,
        reader: LegacyVodReader | None = None,
        resolver: PlayerResolver | None = None,
        writer: EpisodeWriter | None = None,
        on_progress: ProgressCallback | None = None,
    ):
        """
        Args:
            db: SQLAlchemy async session, used exclusively by this run
            config: Run configuration
            reader: Legacy table reader (built from config if not provided)
            resolver: Player resolver (built from db if not provided)
            writer: Normalized table writer (built from db if not provided)
            on_progress: Called with a SyncProgress after every page
        """
        self.db = db
        self.config = config
        self.reader = reader or LegacyVodReader(db, config.pagination)
        self.resolver = resolver or PlayerResolver(db)
        self.writer = writer or EpisodeWriter(db)
        self.on_progress = on_progress

        self.state = SyncState.IDLE
        self.run_state = SyncRunState()
        self.pages = 0
        self.written = WriteStats()

    async def run(self) -> SyncResult:
        """
        Execute the full resync.

        Returns:
            Final counts, re-queried from the normalized tables

        Raises:
            SchemaApplicationError: Tables could not be created (nothing truncated)
            StorageIOError: A read or write failed after schema setup
        """
        if self.state is not SyncState.IDLE:
            raise RuntimeError(f"Episode sync already ran (state: {self.state.value})")

        logger.info("Starting episode sync")
        try:
            await self.ensure_schema()
            await self.truncate()
            await self.sync_pages()
            result = await self.collect_result()
        except SQLAlchemyError as exc:
            failed_in = await self._fail()
            raise StorageIOError(f"Episode sync failed while {failed_in.value}: {exc}") from exc
        except Exception:
            await self._fail()
            raise

        self.state = SyncState.COMPLETED
        logger.info(
            f"Episode sync complete: {result.processed_records} videos, "
            f"{result.source_count} sources ({result.orphan_source_count} orphaned), "
            f"{result.episode_count} episodes"
        )
        return result

    async def ensure_schema(self) -> None:
        """Create the normalized tables if they do not exist yet. Idempotent."""
        try:
            conn = await self.db.connection()
            await conn.run_sync(
                Base.metadata.create_all,
                tables=list(NORMALIZED_TABLES),
                checkfirst=True,
            )
            await self.db.commit()
        except SQLAlchemyError as exc:
            raise SchemaApplicationError(f"Failed to create episode tables: {exc}") from exc

        self.state = SyncState.SCHEMA_ENSURED

    async def truncate(self) -> None:
        await self.resolver.load_all()
        self.run_state.total_records = await self.reader.count()
        logger.info(f"{self.run_state.total_records} videos to sync")

        conn = await self.db.connection()
        use_truncate = conn.dialect.name in TRUNCATE_DIALECTS
        for table in NORMALIZED_TABLES:
            if use_truncate:
                await self.db.execute(text(f"TRUNCATE TABLE {table.name}"))
            else:
                await self.db.execute(table.delete())
        await self.db.commit()

        self.state = SyncState.TRUNCATED
        logger.info("Cleared normalized source and episode tables")

    async def sync_pages(self) -> None:
        self.state = SyncState.PAGING
        page_size = self.config.batch_size

        async with aclosing(self.reader.pages(page_size, self.run_state.total_records)) as pages:
            async for batch in pages:
                for record in batch:
                    await self._sync_record(record)
                    self.run_state.processed_records += 1

                if not self.config.skip_failed_records:
                    await self.db.commit()
                # Keep session memory bounded to one page
                self.db.expunge_all()

                self.run_state.offset += page_size
                self.pages += 1
                self._report_progress()

    async def collect_result(self) -> SyncResult:
        source_count = await self._count(select(func.count()).select_from(VodSource))
        episode_count = await self._count(select(func.count()).select_from(VodEpisode))
        orphan_count = await self._count(
            select(func.count())
            .select_from(VodSource)
            .where(VodSource.player_id == ORPHAN_PLAYER_ID)
        )

        if source_count != self.written.sources or episode_count != self.written.episodes:
            logger.warning(
                f"Row counts differ from rows written: "
                f"sources {source_count}/{self.written.sources}, "
                f"episodes {episode_count}/{self.written.episodes}"
            )

        return SyncResult(
            total_records=self.run_state.total_records,
            processed_records=self.run_state.processed_records,
            skipped_records=self.run_state.skipped_records,
            pages=self.pages,
            source_count=source_count,
            episode_count=episode_count,
            orphan_source_count=orphan_count,
        )

    async def _sync_record(self, record: LegacyVideoRecord) -> None:
        groups = parse_play_url(record.play_from, record.play_url)

        if not self.config.skip_failed_records:
            self.written.add(await self.writer.apply(record, groups, self.resolver))
            return

        try:
            stats = await self.writer.apply(record, groups, self.resolver)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            self.run_state.skipped_records += 1
            logger.warning(f"Skipping vod {record.id}: {exc}")
            return
        self.written.add(stats)

    def _report_progress(self) -> None:
        processed = self.run_state.processed_records
        total = self.run_state.total_records
        percentage = round(processed / total * 100, 1) if total else 100.0

        logger.info(f"Progress: {processed}/{total} ({percentage:.1f}%)")
        if self.on_progress is not None:
            self.on_progress(SyncProgress(processed, total, percentage))

    async def _count(self, query) -> int:
        result = await self.db.execute(query)
        return int(result.scalar_one() or 0)

    async def _fail(self) -> SyncState:
        failed_in = self.state
        self.state = SyncState.FAILED
        try:
            await self.db.rollback()
        except SQLAlchemyError as exc:
            logger.error(f"Rollback after failed episode sync also failed: {exc}")
        logger.error(
            f"Episode sync failed while {failed_in.value} after "
            f"{self.run_state.processed_records}/{self.run_state.total_records} videos; "
            f"normalized tables may be incomplete, rerun the full sync"
        )
        return failed_in


async def run_episode_sync(
    config: EpisodeSyncConfig,
    *,
    on_progress: ProgressCallback | None = None,
) -> SyncResult:
    """
    Open a dedicated engine, run one full resync and dispose the engine.

    Args:
        config: Run configuration (carries the database URL)
        on_progress: Optional per-page progress callback
    """
    engine = create_engine(config.database_url, echo=config.echo)
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as db:
            orchestrator = EpisodeSyncOrchestrator(db, config, on_progress=on_progress)
            return await orchestrator.run()
    finally:
        await engine.dispose()
