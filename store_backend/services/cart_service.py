# store_backend/services/cart_service.py
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from store_backend.data.models.cart_item import CartItemModel
from store_backend.domain.errors import ValidationError
from store_backend.domain.schemas import CartLine, CartItemIn
from store_backend.repos.cart_repo import CartRepo
from store_backend.repos.product_repo import ProductRepo
from store_backend.services.user_service import UserService
from store_backend.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart Reader + proste komendy koszyka.
    query (get_cart, load_cart_items) tylko odczyt
    command (replace_cart) nadpisuje caly koszyk
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.user_service = UserService(db)

    #query - odczyt
    def load_cart_items(self, user_id: int, lock: bool = False) -> List[CartLine]:
        # brak rekordu koszyka traktujemy jak pusty koszyk
        if self.repo.get_cart(user_id) is None:
            return []

        return [
            CartLine(
                product_id=row.product_id,
                quantity=row.quantity,
                name=row.name,
                unit_price=Decimal(str(row.price)),
                current_stock=row.stock,
            )
            for row in self.repo.get_cart_lines(user_id, lock=lock)
        ]

    def get_cart(self, mobile_no: str) -> Dict[str, Any]:
        user = self.user_service.resolve_user(mobile_no)
        if self.repo.get_cart(user.id) is None:
            self.repo.create_cart(user.id)
            self.repo.commit()

        rows = self.repo.get_cart_lines(user.id)
        return {
            "items": [
                {
                    "id": row.product_id,
                    "product_id": row.product_id,
                    "name": row.name,
                    "price": float(row.price),
                    "stock": row.stock,
                    "image": row.image,
                    "quantity": row.quantity,
                }
                for row in rows
            ],
            "mobile_no": user.mobile_no,
        }

    #commands
    def replace_cart(self, mobile_no: str, items: List[CartItemIn]) -> None:
        """
        Use Case: nadpisanie koszyka (PUT).
        quantity 0 usuwa pozycje, duplikaty product_id sa sumowane.
        """
        for item in items:
            if item.product_id < 1:
                raise ValidationError("Invalid product ID in items")
            if item.quantity < 0:
                raise ValidationError("Invalid quantity in items")

        user = self.user_service.resolve_user(mobile_no)

        wanted: "OrderedDict[int, int]" = OrderedDict()
        for item in items:
            if item.quantity > 0:
                wanted[item.product_id] = wanted.get(item.product_id, 0) + item.quantity

        missing = set(wanted) - self.product_repo.existing_ids(wanted)
        if missing:
            raise ValidationError(f"Product {min(missing)} does not exist")

        try:
            if self.repo.get_cart(user.id) is None:
                self.repo.create_cart(user.id)
            self.repo.delete_cart_items(user.id)
            self.repo.add_cart_items(
                [
                    CartItemModel(cart_id=user.id, product_id=pid, quantity=qty)
                    for pid, qty in wanted.items()
                ]
            )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Cart of user {user.id} replaced with {len(wanted)} item(s)")
