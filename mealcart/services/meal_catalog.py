# mealcart/services/meal_catalog.py
import requests

from mealcart.domain.errors import NotFoundError
from mealcart.domain.schemas import MealInfo
from mealcart.utils.retry import http_retry
from mealcart.utils.settings import CATALOG_SERVICE_URL, CATALOG_TIMEOUT_SECONDS
from mealcart.utils.logging import get_logger

logger = get_logger(__name__)


class MealNotFoundError(NotFoundError):
    pass


class MealCatalog:
    """Read-only view of the catalog service's meals."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout or CATALOG_TIMEOUT_SECONDS

    @http_retry()
    def find_meal(self, meal_id: int) -> MealInfo:
        url = f"{self.base_url}/meals/{meal_id}"
        logger.info(f"MealCatalog GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        # 404 is an answer, not a transport failure, so it must not be retried
        if resp.status_code == 404:
            raise MealNotFoundError("Meal not found")
        resp.raise_for_status()
        return MealInfo.model_validate(resp.json())
