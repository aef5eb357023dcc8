# mealcart/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# money stays Decimal internally and goes out as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserRole(str, Enum):
    CUSTOMER = "customer"
    CHEF = "chef"


class OrderStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
class MealInfo(CamelModel):
    """Meal record as served by the catalog service."""

    id: int
    name: str
    price: Money
    chef_id: int
    chef_name: str = ""
    image: str = ""
    available: bool = Field(default=True, alias="isAvailable")


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddItemIn(CamelModel):
    meal_id: int = Field(..., gt=0, description="Meal id (must be > 0)")
    quantity: int = Field(..., gt=0, description="Quantity (must be > 0)")


class UpdateItemIn(CamelModel):
    quantity: int = Field(..., gt=0, description="New quantity (must be > 0)")
    special_instructions: str | None = None


class PromoIn(CamelModel):
    code: str = Field(..., max_length=50)


class CartItemOut(CamelModel):
    id: int
    meal_id: int
    name: str
    chef_name: str
    price: Money
    quantity: int
    image: str
    special_instructions: str = ""


class PromoOut(CamelModel):
    code: str
    discount: int
    discount_amount: Money
    final_price: Money


class CartOut(CamelModel):
    items: List[CartItemOut] = []
    total_price: Money = Decimal("0.00")
    promo_code: PromoOut | None = None


class CartMessageOut(CamelModel):
    message: str
    cart: CartOut


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class DeliveryAddress(CamelModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)


class OrderItemIn(CamelModel):
    meal_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    price: Money = Field(..., ge=0)
    image: str = ""


class PaymentResult(CamelModel):
    id: str | None = None
    status: str | None = None
    update_time: str | None = None
    email_address: str | None = None


class OrderCreate(CamelModel):
    # emptiness is checked by OrderService so it reports "No order items"
    order_items: List[OrderItemIn] = []
    delivery_address: DeliveryAddress
    payment_method: str = Field(..., min_length=1)
    total_price: Money = Field(..., ge=0)
    payment_result: PaymentResult | None = None


class OrderStatusIn(CamelModel):
    status: OrderStatus


class OrderItemOut(CamelModel):
    meal_id: int
    name: str
    quantity: int
    price: Money
    image: str


class OrderOut(CamelModel):
    id: int
    buyer_id: int
    buyer_name: str | None = None
    chef_id: int
    chef_name: str | None = None
    items: List[OrderItemOut]
    delivery_address: DeliveryAddress
    total_price: Money
    status: OrderStatus
    payment_method: str
    payment_result: PaymentResult | None = None
    delivered_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class UserCreate(CamelModel):
    id: int = Field(..., gt=0, description="User id (must be > 0)")
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.CUSTOMER


class UserRead(CamelModel):
    id: int
    name: str
    role: UserRole
