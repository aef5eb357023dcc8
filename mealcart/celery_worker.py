# mealcart/celery_worker.py
from celery import Celery

from mealcart.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "mealcart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# import tasks explicitly so the worker registers them
celery_app.conf.imports = (
    "mealcart.tasks.expire",
    "mealcart.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "purge-stale-carts-hourly": {
        "task": "mealcart.tasks.expire.purge_stale_carts_task",
        "schedule": 60.0 * 60,
    },
}

celery_app.conf.timezone = "UTC"
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
