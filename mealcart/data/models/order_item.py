from sqlalchemy import Column, Integer, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from mealcart.data.database import Base


class OrderItemModel(Base):
    """Frozen copy of a meal line, independent of later catalog changes."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    meal_id = Column(Integer, nullable=False)

    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String, nullable=False, default="")

    order = relationship("OrderModel", back_populates="items")
