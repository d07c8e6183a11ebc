# store_backend/services/discount_service.py
import secrets
import string
from decimal import Decimal
from typing import Callable, Dict, Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tenacity import retry, stop_after_attempt, retry_if_result

from store_backend.data.models.discount_code import DiscountCodeModel
from store_backend.domain.errors import InvalidDiscountCode, StorageError, ValidationError
from store_backend.domain.schemas import AppliedDiscount
from store_backend.repos.discount_repo import DiscountRepo
from store_backend.repos.order_repo import OrderRepo
from store_backend.services.user_service import UserService
from store_backend.utils.logging import get_logger
from store_backend.utils.money import clamp_percent
from store_backend.utils.settings import (
    DEFAULT_DISCOUNT_PERCENT,
    DISCOUNT_CODE_LENGTH,
    MAX_CODE_GENERATION_ATTEMPTS,
)

logger = get_logger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_discount_code(length: int = DISCOUNT_CODE_LENGTH) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def serialize_code(discount: DiscountCodeModel) -> Dict[str, Any]:
    return {
        "id": discount.id,
        "code": discount.code,
        "order_number": discount.order_number,
        "discount_percent": float(discount.discount_percent),
        "is_used": discount.is_used,
        "used_by_order_id": discount.used_by_order_id,
        "created_at": discount.created_at,
    }


class DiscountService:
    """
    Discount Ledger.

    Kod uzytkownika z order_number = k jest wazny tylko gdy nastepne zamowienie
    usera ma numer dokladnie k. Kod globalny (user_id = null) - gdy globalny
    numer nastepnego zamowienia (wszystkie zamowienia + 1) to dokladnie k.
    Liczniki zamowien sa zawsze liczone zapytaniem, bez cache.
    """

    def __init__(
        self,
        db: Session,
        max_attempts: int = MAX_CODE_GENERATION_ATTEMPTS,
        code_factory: Callable[[], str] = generate_discount_code,
    ):
        self.repo = DiscountRepo(db)
        self.order_repo = OrderRepo(db)
        self.user_service = UserService(db)
        self.max_attempts = max_attempts
        self.code_factory = code_factory

    # =====================================================
    # liczniki
    # =====================================================
    def next_order_number(self, user_id: int) -> int:
        return self.order_repo.count_user_orders(user_id) + 1

    def next_global_order_number(self) -> int:
        return self.order_repo.count_all_orders() + 1

    # =====================================================
    # walidacja i zuzycie
    # =====================================================
    def validate_code(self, code: str, user_id: int, order_number: int) -> AppliedDiscount:
        discount = self.repo.get_by_code(code)

        if discount is None or discount.used or discount.is_used:
            raise InvalidDiscountCode()

        if discount.user_id is None:
            target = self.next_global_order_number()
        elif discount.user_id == user_id:
            target = order_number
        else:
            raise InvalidDiscountCode()

        if discount.order_number != target:
            raise InvalidDiscountCode(
                f"This discount code is only valid for order #{discount.order_number}, "
                f"not order #{target}"
            )

        return AppliedDiscount(
            discount_code_id=discount.id,
            discount_percent=Decimal(str(discount.discount_percent)),
            code=discount.code,
        )

    def consume_code(self, discount_code_id: int, order_id: int) -> bool:
        consumed = self.repo.mark_used(discount_code_id, order_id) == 1
        if consumed:
            logger.info(f"Discount code {discount_code_id} consumed by order {order_id}")
        else:
            logger.warning(f"Discount code {discount_code_id} was already consumed, order {order_id} lost the race")
        return consumed

    # =====================================================
    # wydawanie kodow
    # =====================================================
    def generate_unique_code(self) -> Optional[str]:
        """Losuje kod nieobecny w bazie; None po wyczerpaniu prob."""

        @retry(
            stop=stop_after_attempt(self.max_attempts),
            retry=retry_if_result(lambda code: code is None),
            retry_error_callback=lambda retry_state: None,
        )
        def attempt() -> Optional[str]:
            code = self.code_factory()
            return None if self.repo.code_exists(code) else code

        return attempt()

    def mint_code_for_order(
        self,
        user_id: Optional[int],
        target_order_number: int,
        discount_percent: float = DEFAULT_DISCOUNT_PERCENT,
    ) -> Optional[str]:
        code = self.generate_unique_code()
        if code is None:
            logger.error(
                f"Failed to generate unique discount code after {self.max_attempts} attempts"
            )
            return None

        try:
            # savepoint: kolizja z rownoleglym insertem nie psuje calej transakcji
            with self.repo.savepoint():
                self.repo.add_code(
                    DiscountCodeModel(
                        code=code,
                        user_id=user_id,
                        order_number=target_order_number,
                        discount_percent=Decimal(str(discount_percent)),
                        is_used=False,
                        is_global_order=user_id is None,
                    )
                )
        except IntegrityError:
            logger.warning(f"Discount code {code} was inserted concurrently, giving up")
            return None

        scope = "global" if user_id is None else f"user {user_id}"
        logger.info(f"Minted discount code {code} ({scope}) for order #{target_order_number}")
        return code

    def mint_global_code(self, order_number: int, discount_percent: Optional[float] = None) -> Dict[str, Any]:
        """
        Use Case: admin wydaje kod globalny na konkretny, NASTEPNY globalny numer zamowienia.
        """
        if discount_percent is None:
            discount_percent = clamp_percent(DEFAULT_DISCOUNT_PERCENT)

        try:
            next_global = self.next_global_order_number()
            if order_number != next_global:
                raise ValidationError(
                    f"Next order number is not {order_number}. Next order number is {next_global}"
                )

            code = self.mint_code_for_order(None, order_number, discount_percent)
            if code is None:
                raise StorageError("Failed to create discount code")

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        return {
            "code": code,
            "order_number": order_number,
            "next_global_order_number": next_global,
        }

    # =====================================================
    # query
    # =====================================================
    def list_for_user(self, mobile_no: str) -> Dict[str, Any]:
        user = self.user_service.resolve_user(mobile_no)

        next_order = self.next_order_number(user.id)
        next_global = self.next_global_order_number()
        user_orders = set(self.order_repo.user_order_ids(user.id))

        available, used, expired = [], [], []
        for discount in self.repo.codes_visible_to_user(user.id):
            if discount.used or discount.is_used:
                if discount.used_by_order_id in user_orders:
                    used.append(discount)
                continue

            current = next_global if discount.user_id is None else next_order
            if discount.order_number == current:
                available.append(discount)
            elif discount.order_number < current:
                expired.append(discount)

        return {
            "available": [serialize_code(d) for d in available],
            "used": [serialize_code(d) for d in used],
            "expired": [serialize_code(d) for d in expired],
            "next_order_number": next_order,
        }
