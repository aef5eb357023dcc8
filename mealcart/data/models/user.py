from sqlalchemy import Column, Integer, String
from mealcart.data.database import Base

class UserModel(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default="customer")  # customer, chef
