#import all models so SQLAlchemy registers them in Base.metadata

from mealcart.data.models.user import UserModel
from mealcart.data.models.cart import CartModel
from mealcart.data.models.cart_item import CartItemModel
from mealcart.data.models.order import OrderModel
from mealcart.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "CartModel", "CartItemModel", "OrderModel", "OrderItemModel"]
