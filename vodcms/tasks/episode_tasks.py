import asyncio
import logging

from vodcms.tasks import celery_app
from vodcms.config import EpisodeSyncConfig, get_settings
from vodcms.services.episodes import run_episode_sync

logger = logging.getLogger(__name__)


def run_async(coro):
    """Helper to run async code in sync context."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()
        asyncio.set_event_loop(None)


async def _sync_episodes(batch_size: int | None = None) -> dict[str, int]:
    config = EpisodeSyncConfig.from_settings(get_settings(), batch_size=batch_size)
    result = await run_episode_sync(config)
    return result.as_dict()


@celery_app.task(name="vodcms.tasks.episode_tasks.sync_episodes")
def sync_episodes(batch_size: int | None = None):
    """Celery task: Full resync of bb_vod_source / bb_vod_episode."""
    logger.info("Episode resync task started")
    return run_async(_sync_episodes(batch_size))
