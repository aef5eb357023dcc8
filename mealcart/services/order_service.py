# mealcart/services/order_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Sequence

from sqlalchemy.orm import Session

from mealcart.data.models.order import OrderModel
from mealcart.data.models.order_item import OrderItemModel
from mealcart.domain.errors import InvalidInputError, NotFoundError, UnauthorizedError
from mealcart.domain.schemas import (
    DeliveryAddress,
    OrderItemIn,
    OrderOut,
    OrderStatus,
    PaymentResult,
)
from mealcart.repos.order_repo import OrderRepo
from mealcart.repos.user_repo import UserRepo
from mealcart.services.meal_catalog import MealCatalog
from mealcart.services.notification_service import NotificationService
from mealcart.services.projector import project_order
from mealcart.utils.logging import get_logger

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderService:
    """
    Orders are snapshots: items, total and chef are fixed at creation,
    afterwards only status (and deliveredAt) change.

    Status changes are not checked against a transition table, the owning
    chef may set any known status.
    """

    def __init__(
        self,
        db: Session,
        meal_catalog: MealCatalog,
        notification_service: NotificationService | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repo = OrderRepo(db)
        self.users = UserRepo(db)
        self.meal_catalog = meal_catalog
        self.notification_service = notification_service or NotificationService()
        self.clock = clock

    def create_order(
        self,
        buyer_id: int,
        items: Sequence[OrderItemIn],
        delivery_address: DeliveryAddress,
        payment_method: str,
        total_price: Decimal,
        payment_result: PaymentResult | None = None,
    ) -> OrderOut:
        """
        Use case: place an order.

        1. Rejects an empty item list
        2. Resolves the chef from the first item's meal (one chef per order)
        3. Stores frozen copies of the items
        4. Notifies the buyer (async)
        """
        if not items:
            raise InvalidInputError("No order items")

        first_meal = self.meal_catalog.find_meal(items[0].meal_id)
        now = self.clock()

        order = OrderModel(
            buyer_id=buyer_id,
            chef_id=first_meal.chef_id,
            delivery_street=delivery_address.street,
            delivery_city=delivery_address.city,
            delivery_state=delivery_address.state,
            delivery_zip_code=delivery_address.zip_code,
            total=total_price,
            status=OrderStatus.PENDING.value,
            payment_method=payment_method,
            payment_result=payment_result.model_dump() if payment_result else None,
            created_at=now,
            updated_at=now,
            items=[
                OrderItemModel(
                    meal_id=i.meal_id,
                    name=i.name,
                    quantity=i.quantity,
                    price=i.price,
                    image=i.image or "",
                )
                for i in items
            ],
        )

        try:
            created = self.repo.create_order(order)
        except Exception as e:
            logger.error(f"Failed to create order for user {buyer_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Order {created.id} created for user {buyer_id}, chef {created.chef_id}")
        self._notify(created)

        return self._with_names(created)

    def get_order(self, requester_id: int, order_id: int) -> OrderOut:
        order = self._require_order(order_id)

        # only the buyer and the chef may see the order
        if requester_id not in (order.buyer_id, order.chef_id):
            raise UnauthorizedError("Not authorized to view this order")

        return self._with_names(order)

    def list_for_buyer(self, buyer_id: int) -> List[OrderOut]:
        orders = self.repo.list_by_buyer(buyer_id)
        names = self.users.get_names(o.chef_id for o in orders)
        return [project_order(o, chef_name=names.get(o.chef_id)) for o in orders]

    def list_for_chef(self, chef_id: int) -> List[OrderOut]:
        orders = self.repo.list_by_chef(chef_id)
        names = self.users.get_names(o.buyer_id for o in orders)
        return [project_order(o, buyer_name=names.get(o.buyer_id)) for o in orders]

    def set_status(self, chef_id: int, order_id: int, new_status: str) -> OrderOut:
        order = self._require_order(order_id)

        if order.chef_id != chef_id:
            raise UnauthorizedError("Not authorized to update this order")

        try:
            status = OrderStatus(new_status)
        except ValueError:
            raise InvalidInputError(f"Invalid order status: {new_status}")

        previous = order.status
        order.status = status.value
        if status == OrderStatus.DELIVERED:
            order.delivered_at = self.clock()

        try:
            saved = self.repo.save(order)
        except Exception as e:
            logger.error(f"Failed to update status of order {order_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id} status {previous} -> {status.value}")
        self._notify(saved)

        return self._with_names(saved)

    def _require_order(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def _with_names(self, order: OrderModel) -> OrderOut:
        names = self.users.get_names([order.buyer_id, order.chef_id])
        return project_order(
            order,
            buyer_name=names.get(order.buyer_id),
            chef_name=names.get(order.chef_id),
        )

    def _notify(self, order: OrderModel):
        # the order is already committed, a broker outage must not fail the request
        try:
            self.notification_service.send_order_status_notification(
                order.buyer_id, order.id, order.status
            )
        except Exception as e:
            logger.warning(f"Failed to dispatch notification for order {order.id}: {e}")
