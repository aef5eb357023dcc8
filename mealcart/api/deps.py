# mealcart/api/deps.py
from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from requests import RequestException

from mealcart.domain.errors import ServiceError
from mealcart.domain.schemas import UserRole
from mealcart.services.meal_catalog import MealCatalog
from mealcart.services.notification_service import NotificationService
from mealcart.services.promo_catalog import PromoCatalog, StaticPromoCatalog
from mealcart.utils.settings import JWT_SECRET, JWT_ALGORITHM

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    id: int
    role: str

    @property
    def is_chef(self) -> bool:
        return self.role == UserRole.CHEF.value


def get_current_user(creds: HTTPAuthorizationCredentials = Depends(security)) -> CurrentUser:
    if not creds:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        payload = jwt.decode(creds.credentials, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        user_id = int(payload["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")
    return CurrentUser(id=user_id, role=payload.get("role", UserRole.CUSTOMER.value))


def require_chef(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_chef:
        raise HTTPException(status_code=401, detail="Not authorized as a chef")
    return user


def get_meal_catalog() -> MealCatalog:
    return MealCatalog()


def get_promo_catalog() -> PromoCatalog:
    return StaticPromoCatalog()


def get_notification_service() -> NotificationService:
    return NotificationService()


# failures the routers translate, anything else is a 500
SERVICE_ERRORS = (ServiceError, RequestException)


def to_http(e: Exception) -> HTTPException:
    if isinstance(e, ServiceError):
        return HTTPException(status_code=e.status_code, detail=e.message)
    return HTTPException(status_code=503, detail="Catalog unavailable")
