# mealcart/services/promo_catalog.py
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Protocol


@dataclass(frozen=True)
class PromoCode:
    code: str
    discount: int  # percent of the cart subtotal
    expires_at: datetime

    def is_valid_at(self, now: datetime) -> bool:
        return now <= self.expires_at


class PromoCatalog(Protocol):
    def lookup(self, code: str) -> PromoCode | None:
        ...


DEFAULT_PROMO_CODES = {
    "WELCOME10": PromoCode("WELCOME10", 10, datetime(2027, 12, 31, 23, 59, 59, tzinfo=timezone.utc)),
    "SUMMER20": PromoCode("SUMMER20", 20, datetime(2027, 9, 30, 23, 59, 59, tzinfo=timezone.utc)),
}


class StaticPromoCatalog:
    """Fixed in-memory table of promo codes."""

    def __init__(self, codes: Dict[str, PromoCode] | None = None):
        self.codes = dict(DEFAULT_PROMO_CODES if codes is None else codes)

    def lookup(self, code: str) -> PromoCode | None:
        return self.codes.get(code)
