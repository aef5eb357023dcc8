# mealcart/tasks/expire.py
from datetime import datetime, timezone, timedelta

from mealcart.celery_worker import celery_app
from mealcart.data.database import SessionLocal
from mealcart.repos.cart_repo import CartRepo
from mealcart.utils.settings import CART_TTL_SECONDS
from mealcart.utils.logging import get_logger

logger = get_logger(__name__)


def purge_stale_carts(db, now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(seconds=CART_TTL_SECONDS)

    removed = CartRepo(db).delete_inactive_since(cutoff)
    logger.info(f"Purged {removed} carts idle since {cutoff.isoformat()}")
    return removed


@celery_app.task(name="mealcart.tasks.expire.purge_stale_carts_task")
def purge_stale_carts_task():
    logger.info("Purge stale carts task started")

    db = SessionLocal()
    try:
        return purge_stale_carts(db)
    finally:
        db.close()
