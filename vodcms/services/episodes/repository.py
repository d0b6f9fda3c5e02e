"""Read and replace the normalized sources of a single video."""
import logging
from collections import defaultdict
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vodcms.models import VodEpisode, VodSource
from vodcms.services.episodes.parser import EpisodeEntry, SourceGroup, serialize_play_url
from vodcms.services.episodes.player_resolver import PlayerResolver
from vodcms.services.episodes.reader import LegacyVideoRecord
from vodcms.services.episodes.writer import EpisodeWriter, WriteStats

logger = logging.getLogger(__name__)


async def get_video_sources(db: AsyncSession, vod_id: int) -> list[dict[str, Any]]:
    """
    Load a video's sources with their episodes, in play order.

    Returns:
        List of dicts: source_id, player_id, player_name and an ordered
        ``episodes`` list (id, episode_num, title, url)
    """
    sources_result = await db.execute(
        select(VodSource.id, VodSource.player_id, VodSource.player_name)
        .where(VodSource.vod_id == vod_id)
        .order_by(VodSource.sort.asc(), VodSource.id.asc())
    )
    sources = sources_result.all()
    if not sources:
        return []

    episodes_result = await db.execute(
        select(
            VodEpisode.source_id,
            VodEpisode.id,
            VodEpisode.episode_num,
            VodEpisode.title,
            VodEpisode.url,
        )
        .where(VodEpisode.source_id.in_([row.id for row in sources]))
        .order_by(VodEpisode.sort.asc(), VodEpisode.episode_num.asc(), VodEpisode.id.asc())
    )
    episodes_by_source: dict[int, list[dict[str, Any]]] = defaultdict(list)
    for row in episodes_result.all():
        episodes_by_source[row.source_id].append(
            {
                "id": row.id,
                "episode_num": row.episode_num,
                "title": row.title,
                "url": row.url,
            }
        )

    return [
        {
            "source_id": source.id,
            "player_id": source.player_id,
            "player_name": source.player_name,
            "episodes": episodes_by_source.get(source.id, []),
        }
        for source in sources
    ]


def to_source_groups(sources: list[dict[str, Any]]) -> list[SourceGroup]:
    """Convert ``get_video_sources`` output back into parser groups."""
    return [
        SourceGroup(
            source["player_name"],
            [EpisodeEntry(title=ep["title"], url=ep["url"]) for ep in source["episodes"]],
        )
        for source in sources
    ]


async def save_video_sources(
    db: AsyncSession,
    vod_id: int,
    groups: list[SourceGroup],
    resolver: PlayerResolver,
) -> WriteStats:
    """
    Replace a video's sources and episodes with the given groups.

    Deletes the video's episodes, then its sources, and writes the groups in
    order with EpisodeWriter. Commits on success, rolls back on failure.

    Args:
        db: SQLAlchemy async session
        vod_id: bb_vod id the groups belong to
        groups: Edited source groups, in play order
        resolver: Player resolver (loaded on first use)

    Returns:
        Row counts written
    """
    if not resolver.loaded:
        await resolver.load_all()

    try:
        await db.execute(delete(VodEpisode).where(VodEpisode.vod_id == vod_id))
        await db.execute(delete(VodSource).where(VodSource.vod_id == vod_id))
        play_from, play_url = serialize_play_url(groups)
        record = LegacyVideoRecord(vod_id, play_from, play_url)
        stats = await EpisodeWriter(db).apply(record, groups, resolver)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise

    logger.info(f"vod {vod_id}: saved {stats.sources} sources, {stats.episodes} episodes")
    return stats


async def get_video_play_data(db: AsyncSession, vod_id: int) -> tuple[str, str]:
    """Encode a video's normalized sources as ``(vod_play_from, vod_play_url)``."""
    return serialize_play_url(to_source_groups(await get_video_sources(db, vod_id)))
