import os

# settings are read at import time, so these go before any mealcart import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_ALGORITHM"] = "HS256"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mealcart.api.deps import get_meal_catalog, get_notification_service, get_promo_catalog
from mealcart.data.database import get_db, init_db
from mealcart.data.models.user import UserModel
from mealcart.domain.schemas import MealInfo
from mealcart.main import create_app
from mealcart.services.cart_service import CartService
from mealcart.services.meal_catalog import MealNotFoundError
from mealcart.services.order_service import OrderService
from mealcart.services.promo_catalog import PromoCode, StaticPromoCatalog

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)

CUSTOMER_ID = 1
OTHER_CUSTOMER_ID = 2
CHEF_ID = 101
OTHER_CHEF_ID = 102


class FakeMealCatalog:
    """In-memory stand-in for the catalog service."""

    def __init__(self, meals):
        self.meals = {m.id: m for m in meals}
        self.lookups = []

    def find_meal(self, meal_id):
        self.lookups.append(meal_id)
        meal = self.meals.get(meal_id)
        if meal is None:
            raise MealNotFoundError("Meal not found")
        return meal

    def set_price(self, meal_id, price):
        self.meals[meal_id] = self.meals[meal_id].model_copy(update={"price": Decimal(price)})


class FixedClock:
    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def send_order_status_notification(self, user_id, order_id, status):
        self.sent.append((user_id, order_id, status))


def make_meals():
    return [
        MealInfo(id=1, name="Chicken Biryani", price=Decimal("10.00"), chef_id=CHEF_ID,
                 chef_name="Asha Rao", image="/img/biryani.jpg"),
        MealInfo(id=2, name="Dal Makhani", price=Decimal("7.50"), chef_id=CHEF_ID,
                 chef_name="Asha Rao", image="/img/dal.jpg"),
        MealInfo(id=3, name="Vegetable Lasagna", price=Decimal("12.00"), chef_id=OTHER_CHEF_ID,
                 chef_name="Marco Bellini", image="/img/lasagna.jpg"),
        MealInfo(id=4, name="Beef Pho", price=Decimal("11.75"), chef_id=OTHER_CHEF_ID,
                 chef_name="Marco Bellini", image="/img/pho.jpg", available=False),
    ]


def make_promos(now=NOW):
    return StaticPromoCatalog({
        "WELCOME10": PromoCode("WELCOME10", 10, now + timedelta(days=30)),
        "SUMMER20": PromoCode("SUMMER20", 20, now + timedelta(days=30)),
        "OLD5": PromoCode("OLD5", 5, now - timedelta(days=1)),
    })


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def catalog():
    return FakeMealCatalog(make_meals())


@pytest.fixture()
def promos():
    return make_promos()


@pytest.fixture()
def clock():
    return FixedClock()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def cart_service(db, catalog, promos, clock):
    return CartService(db, meal_catalog=catalog, promo_catalog=promos, clock=clock)


@pytest.fixture()
def order_service(db, catalog, notifier, clock):
    return OrderService(db, meal_catalog=catalog, notification_service=notifier, clock=clock)


@pytest.fixture()
def users(db):
    db.add_all([
        UserModel(id=CUSTOMER_ID, name="Jane Customer", role="customer"),
        UserModel(id=OTHER_CUSTOMER_ID, name="Tom Stranger", role="customer"),
        UserModel(id=CHEF_ID, name="Asha Rao", role="chef"),
        UserModel(id=OTHER_CHEF_ID, name="Marco Bellini", role="chef"),
    ])
    db.commit()


def make_token(user_id, role="customer"):
    return jwt.encode({"sub": str(user_id), "role": role}, "test-secret", algorithm="HS256")


def auth(user_id, role="customer"):
    return {"Authorization": f"Bearer {make_token(user_id, role)}"}


@pytest.fixture()
def client(session_factory, catalog, notifier):
    app = create_app(with_lifespan=False)
    # the API runs on the real clock
    promos = make_promos(datetime.now(timezone.utc))

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_meal_catalog] = lambda: catalog
    app.dependency_overrides[get_promo_catalog] = lambda: promos
    app.dependency_overrides[get_notification_service] = lambda: notifier

    return TestClient(app)
