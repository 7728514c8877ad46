from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

JUNIOR = "JUNIOR"
SENIOR = "SENIOR"

_JUNIOR_LEVELS = {"INTERN", "JUNIOR"}


@dataclass(frozen=True, slots=True)
class ProductConfig:
    product_type: str
    amount: int
    currency: str
    price_id: str = ""
    name: str = ""


def product_type_for(experience_level: str) -> str:
    """INTERN/JUNIOR 는 JUNIOR 상품, 그 외(MID_LEVEL, SENIOR, LEAD, PRINCIPAL)는 SENIOR 상품."""
    if (experience_level or "").upper() in _JUNIOR_LEVELS:
        return JUNIOR
    return SENIOR


def load_products(raw: Mapping[str, Mapping]) -> dict[str, ProductConfig]:
    products: dict[str, ProductConfig] = {}
    for product_type, conf in raw.items():
        products[product_type] = ProductConfig(
            product_type=product_type,
            amount=int(conf["amount"]),
            currency=str(conf.get("currency", "aud")),
            price_id=str(conf.get("price_id") or ""),
            name=str(conf.get("name") or f"{product_type.title()} Job Posting"),
        )
    return products
