# store_backend/domain/schemas.py
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Baza dla schematow API - JSON w camelCase, w Pythonie snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =====================================================
# wewnetrzne struktury (nie ida bezposrednio do JSON)
# =====================================================
@dataclass(frozen=True)
class CartLine:
    """Pozycja koszyka zlaczona z aktualnym produktem."""

    product_id: int
    quantity: int
    name: str
    unit_price: Decimal
    current_stock: int


@dataclass(frozen=True)
class AppliedDiscount:
    discount_code_id: int
    discount_percent: Decimal
    code: str


@dataclass(frozen=True)
class CheckoutResult:
    order_id: int
    new_discount_code: Optional[str] = None


# =====================================================
# cart
# =====================================================
class CartItemIn(CamelModel):
    product_id: int
    quantity: int


class UpdateCartIn(CamelModel):
    items: List[CartItemIn]


class CartItemOut(CamelModel):
    id: int
    product_id: int
    name: str
    price: float
    stock: int
    image: Optional[str] = None
    quantity: int


class CartOut(CamelModel):
    items: List[CartItemOut]
    mobile_no: str


class UpdateCartOut(CamelModel):
    success: bool
    message: str


# =====================================================
# checkout
# =====================================================
class CheckoutIn(CamelModel):
    """Body checkoutu. Pola opcjonalne, walidacja pustych wartosci jest w serwisie."""

    shipping_address: Optional[str] = None
    discount_code: Optional[str] = None


class CheckoutOut(CamelModel):
    order_id: int
    message: str
    discount_code_created: Optional[str] = None


# =====================================================
# discount codes
# =====================================================
class DiscountCodeOut(CamelModel):
    id: int
    code: str
    order_number: int
    discount_percent: float
    is_used: bool
    used_by_order_id: Optional[int] = None
    created_at: Optional[datetime] = None


class DiscountListOut(CamelModel):
    available: List[DiscountCodeOut]
    used: List[DiscountCodeOut]
    expired: List[DiscountCodeOut]
    next_order_number: int


class GlobalCodeIn(CamelModel):
    order_number: int = Field(..., ge=1, description="Globalny numer zamowienia (musi byc nastepny)")
    discount_percent: Optional[float] = Field(None, ge=0, le=100)


class GlobalCodeOut(CamelModel):
    code: str
    order_number: int
    next_global_order_number: int


class StatisticsOut(CamelModel):
    items_purchased: int
    total_purchase_amount: float
    total_discount_amount: float
    discount_codes: List[DiscountCodeOut]


# =====================================================
# koperty odpowiedzi {"data": ...}
# =====================================================
class CartEnvelope(BaseModel):
    data: CartOut


class UpdateCartEnvelope(BaseModel):
    data: UpdateCartOut


class CheckoutEnvelope(BaseModel):
    data: CheckoutOut


class DiscountListEnvelope(BaseModel):
    data: DiscountListOut


class GlobalCodeEnvelope(BaseModel):
    message: str
    data: GlobalCodeOut


class StatisticsEnvelope(BaseModel):
    data: StatisticsOut
