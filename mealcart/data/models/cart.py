#mealcart/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from mealcart.data.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    # one cart per user
    user_id = Column(Integer, nullable=False, unique=True, index=True)

    promo_code = Column(String(50), nullable=True)
    promo_discount = Column(Integer, nullable=True)
    promo_expires_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )

    @property
    def has_promo(self) -> bool:
        return self.promo_code is not None

    def clear_promo(self):
        self.promo_code = None
        self.promo_discount = None
        self.promo_expires_at = None
