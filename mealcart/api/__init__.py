# mealcart/api/__init__.py
from mealcart.api.routers import carts, health, orders, users

ROUTERS = (health.router, users.router, carts.router, orders.router)
