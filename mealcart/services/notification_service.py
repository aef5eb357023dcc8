# mealcart/services/notification_service.py
from mealcart.celery_worker import celery_app
from mealcart.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications for buyers.
    Dispatched through Celery so the request does not wait for delivery.
    """

    @staticmethod
    def send_order_status_notification(user_id: int, order_id: int, status: str):
        send_order_status_notification_task.delay(user_id, order_id, status)


@celery_app.task(name="mealcart.services.notification_service.send_order_status_notification_task")
def send_order_status_notification_task(user_id: int, order_id: int, status: str):
    """
    Celery task, only logs for now.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is now {status}")

    # TODO: hand the message to an email/push provider once one is picked

    return {"user_id": user_id, "order_id": order_id, "status": status, "sent": True}
