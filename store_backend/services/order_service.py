# store_backend/services/order_service.py
from decimal import Decimal
from typing import Dict, Any, Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from store_backend.data.models.order import OrderModel
from store_backend.data.models.order_item import OrderItemModel
from store_backend.domain.errors import InsufficientStock
from store_backend.domain.schemas import CartLine
from store_backend.repos.cart_repo import CartRepo
from store_backend.repos.discount_repo import DiscountRepo
from store_backend.repos.order_repo import OrderRepo
from store_backend.repos.product_repo import ProductRepo
from store_backend.services.discount_service import serialize_code
from store_backend.utils.logging import get_logger
from store_backend.utils.money import round_money

logger = get_logger(__name__)


class OrderService:
    """
    Order Writer. Nic tu nie commituje - wszystkie zapisy ida w transakcji
    otwartej przez CheckoutService, ktory decyduje o commit/rollback.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.product_repo = ProductRepo(db)
        self.cart_repo = CartRepo(db)
        self.discount_repo = DiscountRepo(db)

    @staticmethod
    def ensure_stock(lines: Iterable[CartLine]) -> None:
        # fail-fast: pierwsza brakujaca pozycja przerywa, zanim cokolwiek zapiszemy
        for line in lines:
            if line.current_stock < line.quantity:
                raise InsufficientStock(line.name)

    def create_order(
        self,
        user_id: int,
        total_amount: Decimal,
        discount_amount: Decimal,
        applied_code: Optional[str],
        shipping_address: str,
        lines: Sequence[CartLine],
    ) -> OrderModel:
        total_amount = round_money(total_amount)
        discount_amount = round_money(discount_amount)

        order = self.repo.create_order(
            OrderModel(
                user_id=user_id,
                total_amount=total_amount,
                discount_code=applied_code,
                discount_amount=discount_amount,
                final_amount=total_amount - discount_amount,
                shipping_address=shipping_address,
            )
        )

        # cena z momentu checkoutu, bez ponownego czytania produktu
        self.repo.add_order_items(
            [
                OrderItemModel(
                    order_id=order.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price_at_purchase=line.unit_price,
                )
                for line in lines
            ]
        )

        logger.info(f"Order {order.id} created for user {user_id} with {len(lines)} item(s)")
        return order

    def decrement_stock(self, lines: Iterable[CartLine]) -> None:
        for line in lines:
            rowcount = self.product_repo.decrement_stock(line.product_id, line.quantity)
            if rowcount == 0:
                raise InsufficientStock(line.name)

    def clear_cart(self, user_id: int) -> None:
        removed = self.cart_repo.delete_cart_items(user_id)
        logger.info(f"Cleared {removed} item(s) from cart of user {user_id}")

    def statistics(self) -> Dict[str, Any]:
        return {
            "items_purchased": int(self.repo.items_purchased()),
            "total_purchase_amount": float(self.repo.sum_final_amount()),
            "total_discount_amount": float(self.repo.sum_discount_amount()),
            "discount_codes": [serialize_code(d) for d in self.discount_repo.all_codes()],
        }
