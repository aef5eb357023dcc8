# mealcart/repos/cart_repo.py
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from mealcart.data.models.cart import CartModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def save(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def rollback(self):
        self.db.rollback()

    def delete_inactive_since(self, cutoff: datetime) -> int:
        """Deletes carts not touched since ``cutoff`` together with their items."""
        stale = self.db.execute(
            select(CartModel).where(CartModel.updated_at < cutoff)
        ).scalars().all()

        for cart in stale:
            self.db.delete(cart)
        self.db.commit()
        return len(stale)
