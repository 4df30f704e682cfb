from celery import Celery
from celery.signals import worker_process_init

from app.core.config import get_settings
from app.core.logging import configure_logging

settings = get_settings()

celery_app = Celery(
    "debate_arena",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "app.workers.tasks.debate_rounds",
        "app.workers.tasks.verdicts",
        "app.workers.tasks.appeals",
        "app.workers.tasks.tournaments",
    ],
)

celery_app.conf.update(
    task_default_queue="q_normal",
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
)


@worker_process_init.connect
def _configure_worker_logging(**_: object) -> None:
    configure_logging(settings.log_level, json_logs=settings.app_env != "dev")
