from unittest.mock import AsyncMock

from vodcms.config import get_settings
from vodcms.services.episodes import SyncResult
from vodcms.tasks import celery_app, episode_tasks


def test_sync_episodes_task_is_registered():
    assert "vodcms.tasks.episode_tasks.sync_episodes" in celery_app.tasks


def test_resync_is_not_scheduled():
    assert not celery_app.conf.beat_schedule


def test_sync_episodes_task_returns_result_dict(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    get_settings.cache_clear()
    result = SyncResult(
        total_records=1,
        processed_records=1,
        skipped_records=0,
        pages=1,
        source_count=1,
        episode_count=2,
        orphan_source_count=0,
    )
    run = AsyncMock(return_value=result)
    monkeypatch.setattr(episode_tasks, "run_episode_sync", run)

    try:
        payload = episode_tasks.sync_episodes(batch_size=50)
    finally:
        get_settings.cache_clear()

    assert payload == result.as_dict()
    assert run.await_args.args[0].batch_size == 50
