# store_backend/services/checkout_service.py
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from store_backend.domain.errors import (
    DiscountCodeRace,
    EmptyCart,
    StorageError,
    UserNotFound,
    ValidationError,
)
from store_backend.domain.schemas import CheckoutResult
from store_backend.services.cart_service import CartService
from store_backend.services.discount_service import DiscountService
from store_backend.services.order_service import OrderService
from store_backend.services.user_service import UserService, normalize_mobile_no
from store_backend.utils.logging import get_logger
from store_backend.utils.money import clamp_percent, percent_of
from store_backend.utils.settings import NTH_ORDER, DEFAULT_DISCOUNT_PERCENT

logger = get_logger(__name__)


class CheckoutService:
    """
    Checkout: koszyk -> zamowienie w jednej transakcji.

    Nie ma stanow posrednich (brak "pending order"): albo commit wszystkiego
    (zamowienie, pozycje, stany magazynowe, zuzyty kod, pusty koszyk, nowy kod),
    albo rollback do stanu sprzed checkoutu.
    """

    def __init__(
        self,
        db: Session,
        nth_order: int = NTH_ORDER,
        discount_service: Optional[DiscountService] = None,
    ):
        if nth_order < 1:
            raise ValueError("nth_order must be >= 1")
        self.db = db
        self.nth_order = nth_order
        self.user_service = UserService(db)
        self.cart_service = CartService(db)
        self.order_service = OrderService(db)
        self.discount_service = discount_service or DiscountService(db)

    def checkout(
        self,
        mobile_no: Optional[str],
        shipping_address: Optional[str],
        discount_code: Optional[str] = None,
    ) -> CheckoutResult:
        """
        Use Case: zlozenie zamowienia.

        1. walidacja wejscia
        2. user musi istniec (checkout nie zaklada userow)
        3. w transakcji: koszyk, stany, kwoty, kod rabatowy, zapis zamowienia,
           zuzycie kodu, czyszczenie koszyka, ewentualny nowy kod lojalnosciowy
        """
        mobile_no = normalize_mobile_no(mobile_no)
        if not isinstance(shipping_address, str) or not shipping_address.strip():
            raise ValidationError("Shipping address is required")
        shipping_address = shipping_address.strip()
        discount_code = discount_code.strip() if isinstance(discount_code, str) else None

        user = self.user_service.find_user(mobile_no)
        if user is None:
            raise UserNotFound()
        user_id = user.id

        try:
            result = self._place_order(user_id, shipping_address, discount_code or None)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Checkout for user {user_id} failed on storage")
            raise StorageError("Checkout failed") from e
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Checkout committed: order {result.order_id} for user {user_id}"
            + (f", new discount code {result.new_discount_code}" if result.new_discount_code else "")
        )
        return result

    def _place_order(self, user_id: int, shipping_address: str, discount_code: Optional[str]) -> CheckoutResult:
        lines = self.cart_service.load_cart_items(user_id, lock=True)
        if not lines:
            raise EmptyCart()

        self.order_service.ensure_stock(lines)

        total_amount = sum((line.unit_price * line.quantity for line in lines), Decimal("0"))
        order_number = self.discount_service.next_order_number(user_id)

        applied = None
        discount_amount = Decimal("0")
        if discount_code:
            applied = self.discount_service.validate_code(discount_code, user_id, order_number)
            discount_amount = percent_of(total_amount, applied.discount_percent)

        order = self.order_service.create_order(
            user_id=user_id,
            total_amount=total_amount,
            discount_amount=discount_amount,
            applied_code=applied.code if applied else None,
            shipping_address=shipping_address,
            lines=lines,
        )
        self.order_service.decrement_stock(lines)

        if applied and not self.discount_service.consume_code(applied.discount_code_id, order.id):
            raise DiscountCodeRace()

        self.order_service.clear_cart(user_id)

        new_code = None
        if order_number % self.nth_order == 0:
            # kod na dokladnie nastepne zamowienie tego usera
            new_code = self.discount_service.mint_code_for_order(
                user_id, order_number + 1, clamp_percent(DEFAULT_DISCOUNT_PERCENT)
            )
            if new_code is None:
                logger.warning(
                    f"Loyalty code for user {user_id} (order #{order_number + 1}) not created, "
                    f"checkout continues without it"
                )

        return CheckoutResult(order_id=order.id, new_discount_code=new_code)
