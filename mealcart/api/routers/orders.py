# mealcart/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mealcart.api.deps import (
    SERVICE_ERRORS,
    CurrentUser,
    get_current_user,
    get_meal_catalog,
    get_notification_service,
    require_chef,
    to_http,
)
from mealcart.data.database import get_db
from mealcart.domain.schemas import OrderCreate, OrderOut, OrderStatusIn
from mealcart.services.meal_catalog import MealCatalog
from mealcart.services.notification_service import NotificationService
from mealcart.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    meal_catalog: MealCatalog = Depends(get_meal_catalog),
    notifications: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(db, meal_catalog=meal_catalog, notification_service=notifications)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user: CurrentUser = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """
    Places an order for the current user; the chef is taken from the first item.
    """
    try:
        return svc.create_order(
            buyer_id=user.id,
            items=payload.order_items,
            delivery_address=payload.delivery_address,
            payment_method=payload.payment_method,
            total_price=payload.total_price,
            payment_result=payload.payment_result,
        )
    except SERVICE_ERRORS as e:
        raise to_http(e)


# static paths go before /{order_id}
@router.get("/my-orders", response_model=List[OrderOut])
def my_orders(
    user: CurrentUser = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return svc.list_for_buyer(user.id)


@router.get("/chef-orders", response_model=List[OrderOut])
def chef_orders(
    user: CurrentUser = Depends(require_chef),
    svc: OrderService = Depends(get_service),
):
    return svc.list_for_chef(user.id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: CurrentUser = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.get_order(user.id, order_id)
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_status(
    order_id: int,
    payload: OrderStatusIn,
    user: CurrentUser = Depends(require_chef),
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.set_status(user.id, order_id, payload.status)
    except SERVICE_ERRORS as e:
        raise to_http(e)
