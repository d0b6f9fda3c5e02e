from celery import Celery

from vodcms.config import get_settings

settings = get_settings()

celery_app = Celery(
    "vodcms_tasks",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["vodcms.tasks.episode_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    enable_utc=True,
)
