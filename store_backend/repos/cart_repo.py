# store_backend/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from store_backend.data.models.cart import CartModel
from store_backend.data.models.cart_item import CartItemModel
from store_backend.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, user_id: int) -> CartModel | None:
        return self.db.get(CartModel, user_id)

    def create_cart(self, user_id: int) -> CartModel:
        cart = CartModel(user_id=user_id)
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_lines(self, user_id: int, lock: bool = False):
        """
        Pozycje koszyka zlaczone z produktem (cena i stan "na teraz").
        lock=True -> SELECT ... FOR UPDATE na wierszach produktow.
        """
        stmt = (
            select(
                CartItemModel.id,
                CartItemModel.product_id,
                CartItemModel.quantity,
                ProductModel.name,
                ProductModel.price,
                ProductModel.stock,
                ProductModel.image,
            )
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.cart_id == user_id)
            .order_by(CartItemModel.id)
        )
        if lock:
            stmt = stmt.with_for_update(of=ProductModel)
        return self.db.execute(stmt).all()

    def add_cart_items(self, items: list[CartItemModel]) -> None:
        self.db.add_all(items)
        self.db.flush()

    def delete_cart_items(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
