"""Writes parsed source groups of one legacy video into the normalized tables."""
import logging
from dataclasses import dataclass

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from vodcms.models import VodEpisode, VodSource, ORPHAN_PLAYER_ID
from vodcms.services.episodes.parser import SourceGroup
from vodcms.services.episodes.player_resolver import PlayerResolver
from vodcms.services.episodes.reader import LegacyVideoRecord
from vodcms.utils.timestamps import unix_now

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WriteStats:
    sources: int = 0
    episodes: int = 0
    orphan_sources: int = 0

    def add(self, other: "WriteStats") -> None:
        self.sources += other.sources
        self.episodes += other.episodes
        self.orphan_sources += other.orphan_sources


class EpisodeWriter:
    """
    Append-only writer for bb_vod_source / bb_vod_episode.

    Nothing is updated or deleted here: a resync always starts from truncated
    tables. Transactions are left to the caller.
    """

    def __init__(self, db: AsyncSession, now: int | None = None):
        """
        Args:
            db: SQLAlchemy async session
            now: Epoch seconds for created_at/updated_at (one per run)
        """
        self.db = db
        self.now = now if now is not None else unix_now()

    async def apply(
        self,
        record: LegacyVideoRecord,
        groups: list[SourceGroup],
        resolver: PlayerResolver,
    ) -> WriteStats:
        """
        Persist one source row per group and that group's episodes.

        Args:
            record: Legacy video the groups were parsed from
            groups: Parsed groups, in field order
            resolver: Loaded player resolver

        Returns:
            Row counts written for this record
        """
        stats = WriteStats()

        for sort, group in enumerate(groups):
            player_id = resolver.resolve(group.player_key)
            source = VodSource(
                vod_id=record.id,
                player_id=player_id,
                player_name=group.player_key,
                sort=sort,
                created_at=self.now,
                updated_at=self.now,
            )
            self.db.add(source)
            await self.db.flush()

            stats.sources += 1
            if player_id == ORPHAN_PLAYER_ID:
                stats.orphan_sources += 1
                logger.debug(f"vod {record.id}: unknown player {group.player_key!r}")

            if not group.episodes:
                continue

            await self.db.execute(
                insert(VodEpisode),
                [
                    {
                        "vod_id": record.id,
                        "source_id": source.id,
                        "episode_num": index + 1,
                        "title": episode.title,
                        "url": episode.url,
                        "sort": index,
                        "created_at": self.now,
                        "updated_at": self.now,
                    }
                    for index, episode in enumerate(group.episodes)
                ],
            )
            stats.episodes += len(group.episodes)

        return stats
