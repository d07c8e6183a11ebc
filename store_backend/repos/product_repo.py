# store_backend/repos/product_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from store_backend.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def existing_ids(self, product_ids) -> set[int]:
        ids = set(product_ids)
        if not ids:
            return set()
        rows = self.db.execute(select(ProductModel.id).where(ProductModel.id.in_(ids))).scalars()
        return set(rows)

    def decrement_stock(self, product_id: int, quantity: int) -> int:
        """
        Warunkowy update: stock = stock - quantity tylko gdy stock >= quantity.
        Zwraca rowcount (0 = ktos nas wyprzedzil i stanu juz nie ma).
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product
