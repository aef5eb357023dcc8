# mealcart/services/projector.py
"""Mapping of cart and order entities onto their wire shapes.

Meal name, chef name and image are read through the catalog on every cart
projection instead of being cached on the cart.
"""
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from requests import RequestException

from mealcart.data.models.cart import CartModel
from mealcart.data.models.cart_item import CartItemModel
from mealcart.data.models.order import OrderModel
from mealcart.domain.errors import NotFoundError
from mealcart.domain.schemas import (
    CartItemOut,
    CartOut,
    DeliveryAddress,
    OrderItemOut,
    OrderOut,
    PaymentResult,
    PromoOut,
)
from mealcart.services.meal_catalog import MealCatalog
from mealcart.utils.logging import get_logger

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def as_utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes, everything we store is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def subtotal(items: Iterable[CartItemModel]) -> Decimal:
    return sum((i.price * i.quantity for i in items), Decimal("0.00"))


def project_cart_item(item: CartItemModel, catalog: MealCatalog) -> CartItemOut:
    name, chef_name, image = "", "", ""
    try:
        meal = catalog.find_meal(item.meal_id)
        name, chef_name, image = meal.name, meal.chef_name, meal.image
    except NotFoundError:
        # meal removed from the catalog, the line keeps its captured price
        logger.warning(f"Meal {item.meal_id} no longer in catalog (cart item {item.id})")
    except RequestException as e:
        # the cart is already saved, an unreachable catalog only blanks the display fields
        logger.warning(f"Catalog unavailable for meal {item.meal_id} (cart item {item.id}): {e}")

    return CartItemOut(
        id=item.id,
        meal_id=item.meal_id,
        name=name,
        chef_name=chef_name,
        price=item.price,
        quantity=item.quantity,
        image=image,
        special_instructions=item.special_instructions or "",
    )


def project_promo(cart: CartModel, total: Decimal, now: datetime) -> PromoOut | None:
    if not cart.has_promo:
        return None
    if now > as_utc(cart.promo_expires_at):
        return None

    discount_amount = (total * cart.promo_discount / 100).quantize(CENTS, rounding=ROUND_HALF_UP)
    return PromoOut(
        code=cart.promo_code,
        discount=cart.promo_discount,
        discount_amount=discount_amount,
        final_price=total - discount_amount,
    )


def project_cart(cart: CartModel, catalog: MealCatalog, now: datetime | None = None) -> CartOut:
    now = now or datetime.now(timezone.utc)
    total = subtotal(cart.items)

    return CartOut(
        items=[project_cart_item(i, catalog) for i in cart.items],
        total_price=total,
        promo_code=project_promo(cart, total, now),
    )


def empty_cart() -> CartOut:
    return CartOut(items=[], total_price=Decimal("0.00"), promo_code=None)


def project_order(
    order: OrderModel,
    buyer_name: str | None = None,
    chef_name: str | None = None,
) -> OrderOut:
    return OrderOut(
        id=order.id,
        buyer_id=order.buyer_id,
        buyer_name=buyer_name,
        chef_id=order.chef_id,
        chef_name=chef_name,
        items=[
            OrderItemOut(
                meal_id=i.meal_id,
                name=i.name,
                quantity=i.quantity,
                price=i.price,
                image=i.image,
            )
            for i in order.items
        ],
        delivery_address=DeliveryAddress(
            street=order.delivery_street,
            city=order.delivery_city,
            state=order.delivery_state,
            zip_code=order.delivery_zip_code,
        ),
        total_price=order.total,
        status=order.status,
        payment_method=order.payment_method,
        payment_result=PaymentResult.model_validate(order.payment_result) if order.payment_result else None,
        delivered_at=order.delivered_at,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
