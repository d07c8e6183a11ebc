from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint

from store_backend.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    image = Column(String(1024), nullable=True)

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)
