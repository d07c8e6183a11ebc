# store_backend/repos/order_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from store_backend.data.models.order import OrderModel
from store_backend.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        # bez commita, commit robi serwis na koniec calej transakcji
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_items(self, items: list[OrderItemModel]) -> None:
        self.db.add_all(items)
        self.db.flush()

    def count_user_orders(self, user_id: int) -> int:
        return self.db.execute(
            select(func.count(OrderModel.id)).where(OrderModel.user_id == user_id)
        ).scalar_one()

    def count_all_orders(self) -> int:
        return self.db.execute(select(func.count(OrderModel.id))).scalar_one()

    def user_order_ids(self, user_id: int) -> list[int]:
        return list(
            self.db.execute(select(OrderModel.id).where(OrderModel.user_id == user_id)).scalars()
        )

    def items_purchased(self) -> int:
        return self.db.execute(
            select(func.coalesce(func.sum(OrderItemModel.quantity), 0))
        ).scalar_one()

    def sum_final_amount(self):
        return self.db.execute(
            select(func.coalesce(func.sum(OrderModel.final_amount), 0))
        ).scalar_one()

    def sum_discount_amount(self):
        return self.db.execute(
            select(func.coalesce(func.sum(OrderModel.discount_amount), 0))
        ).scalar_one()
