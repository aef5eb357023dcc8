# mealcart/services/cart_service.py
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mealcart.data.models.cart import CartModel
from mealcart.data.models.cart_item import CartItemModel
from mealcart.domain.errors import InvalidInputError, NotFoundError, PromoExpiredError
from mealcart.domain.schemas import CartOut
from mealcart.repos.cart_repo import CartRepo
from mealcart.services.meal_catalog import MealCatalog
from mealcart.services.projector import project_cart
from mealcart.services.promo_catalog import PromoCatalog, StaticPromoCatalog
from mealcart.utils.logging import get_logger

logger = get_logger(__name__)

# marks "special_instructions not sent" apart from an explicit empty value
UNSET = object()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CartService:
    """
    One cart per user.
    commands (add, update, remove, clear, promo) do a single read-modify-write
    and either commit the whole change or roll it back
    query (get, project) only reads
    """

    def __init__(
        self,
        db: Session,
        meal_catalog: MealCatalog,
        promo_catalog: PromoCatalog | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repo = CartRepo(db)
        self.meal_catalog = meal_catalog
        self.promo_catalog = promo_catalog or StaticPromoCatalog()
        self.clock = clock

    #query
    def get_or_create_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if cart:
            return cart

        now = self.clock()
        try:
            created = self.repo.create_cart(
                CartModel(user_id=user_id, created_at=now, updated_at=now)
            )
        except IntegrityError:
            # a parallel request created it first
            self.repo.rollback()
            return self.repo.get_cart_by_user(user_id)

        logger.info(f"Created cart {created.id} for user {user_id}")
        return created

    def project(self, cart: CartModel) -> CartOut:
        return project_cart(cart, self.meal_catalog, now=self.clock())

    #commands
    def add_item(self, user_id: int, meal_id: int, quantity: int) -> CartModel:
        if not meal_id or quantity is None or quantity < 1:
            raise InvalidInputError("Please provide a valid meal ID and quantity")

        logger.info(f"Fetching meal {meal_id} from catalog for user {user_id}")
        meal = self.meal_catalog.find_meal(meal_id)

        if not meal.available:
            raise InvalidInputError("Meal is not available")

        cart = self.get_or_create_cart(user_id)

        existing_item = next((i for i in cart.items if i.meal_id == meal_id), None)

        if existing_item:
            # price stays the one captured when the item was first added
            logger.info(
                f"Meal {meal_id} already in cart {cart.id}, quantity "
                f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
            )
            existing_item.quantity += quantity
        else:
            logger.info(f"Adding meal {meal_id} to cart {cart.id} at {meal.price}")
            cart.items.append(
                CartItemModel(
                    meal_id=meal_id,
                    quantity=quantity,
                    price=meal.price,
                    special_instructions="",
                )
            )

        return self._persist(cart)

    def update_item(
        self,
        user_id: int,
        cart_item_id: int,
        quantity: int,
        special_instructions=UNSET,
    ) -> CartModel:
        if quantity is None or quantity < 1:
            raise InvalidInputError("Please provide a valid quantity")

        cart = self._require_cart(user_id)
        item = self._require_item(cart, cart_item_id)

        item.quantity = quantity
        if special_instructions is not UNSET:
            item.special_instructions = special_instructions or ""

        logger.info(f"Updated cart item {cart_item_id} in cart {cart.id}")
        return self._persist(cart)

    def remove_item(self, user_id: int, cart_item_id: int) -> CartModel:
        cart = self._require_cart(user_id)
        item = self._require_item(cart, cart_item_id)

        cart.items.remove(item)

        logger.info(f"Removed cart item {cart_item_id} (meal {item.meal_id}) from cart {cart.id}")
        return self._persist(cart)

    def clear(self, user_id: int) -> CartModel:
        cart = self._require_cart(user_id)

        cart.items.clear()
        cart.clear_promo()

        logger.info(f"Cleared cart {cart.id}")
        return self._persist(cart)

    def apply_promo(self, user_id: int, code: str) -> CartModel:
        code = (code or "").strip()
        if not code:
            raise InvalidInputError("Please provide a promo code")

        promo = self.promo_catalog.lookup(code)
        if promo is None:
            raise InvalidInputError("Invalid promo code")

        if not promo.is_valid_at(self.clock()):
            raise PromoExpiredError("Promo code has expired")

        cart = self._require_cart(user_id)

        # a cart holds at most one promo, the new one replaces the old
        cart.promo_code = promo.code
        cart.promo_discount = promo.discount
        cart.promo_expires_at = promo.expires_at

        logger.info(f"Applied promo {promo.code} ({promo.discount}%) to cart {cart.id}")
        return self._persist(cart)

    def remove_promo(self, user_id: int) -> CartModel:
        cart = self._require_cart(user_id)

        cart.clear_promo()

        logger.info(f"Removed promo from cart {cart.id}")
        return self._persist(cart)

    def _require_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise NotFoundError("Cart not found")
        return cart

    @staticmethod
    def _require_item(cart: CartModel, cart_item_id: int) -> CartItemModel:
        item = next((i for i in cart.items if i.id == cart_item_id), None)
        if item is None:
            raise NotFoundError("Cart item not found")
        return item

    def _persist(self, cart: CartModel) -> CartModel:
        cart.updated_at = self.clock()
        try:
            return self.repo.save(cart)
        except Exception as e:
            logger.error(f"Failed to save cart {cart.id}: {e}")
            self.repo.rollback()
            raise
