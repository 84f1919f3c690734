from celery import Celery
from app.configs.settings import settings

celery_app = Celery(
    'verified_signup',
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=['app.tasks.verification_code_tasks']
)

celery_app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    task_track_started=True,
    worker_hijack_root_logger=False,
    task_time_limit=300,
    broker_connection_retry_on_startup=True,
    task_default_queue='default',
)

# Run tasks inline in development and tests
celery_app.conf.task_always_eager = settings.CELERY_TASK_ALWAYS_EAGER

celery_app.conf.beat_schedule = {
    'purge-expired-verification-codes': {
        'task': 'purge_expired_verification_codes',
        'schedule': settings.EXPIRED_CODE_PURGE_INTERVAL_SECONDS,
        'options': {'queue': 'default'},
    },
}
# celery -A app.celery_app beat --loglevel=info
