from sqlalchemy import Column, Integer, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from mealcart.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    meal_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False)
    # captured from the catalog when the item is first added
    price = Column(Numeric(10, 2), nullable=False)
    special_instructions = Column(String, nullable=False, default="")

    cart = relationship("CartModel", back_populates="items")
