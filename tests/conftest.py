from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

import store_backend.data.models  # noqa: F401
from store_backend.data.database import Base, build_engine, get_db
from store_backend.data.models import (
    CartItemModel,
    CartModel,
    DiscountCodeModel,
    OrderModel,
    ProductModel,
    UserModel,
)
from store_backend.main import app
from store_backend.utils import settings

ADMIN_KEY = "test-admin-key"


@pytest.fixture()
def engine(tmp_path):
    """Fresh SQLite file per test."""
    engine = build_engine(f"sqlite:///{tmp_path / 'store_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_API_KEY", ADMIN_KEY)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class Factory:
    """Test data helpers; every call commits so HTTP sessions see the rows."""

    def __init__(self, db):
        self.db = db

    def user(self, mobile_no="1234567890") -> UserModel:
        user = UserModel(mobile_no=mobile_no)
        self.db.add(user)
        self.db.flush()
        self.db.add(CartModel(user_id=user.id))
        self.db.commit()
        return user

    def product(self, name="Product 1", price=100, stock=10) -> ProductModel:
        product = ProductModel(name=name, price=Decimal(str(price)), stock=stock)
        self.db.add(product)
        self.db.commit()
        return product

    def cart(self, user, lines):
        for product, quantity in lines:
            self.db.add(CartItemModel(cart_id=user.id, product_id=product.id, quantity=quantity))
        self.db.commit()

    def code(self, user, code, order_number, percent=10) -> DiscountCodeModel:
        discount = DiscountCodeModel(
            code=code,
            user_id=user.id if user is not None else None,
            order_number=order_number,
            discount_percent=Decimal(str(percent)),
            is_used=False,
            is_global_order=user is None,
        )
        self.db.add(discount)
        self.db.commit()
        return discount

    def past_orders(self, user, count=1):
        for _ in range(count):
            self.db.add(
                OrderModel(
                    user_id=user.id,
                    total_amount=Decimal("10.00"),
                    discount_amount=Decimal("0"),
                    final_amount=Decimal("10.00"),
                    shipping_address="Old Street 1",
                )
            )
        self.db.commit()

    # --- odczyty po commitach z innych sesji ---
    def stock_of(self, product) -> int:
        self.db.expire_all()
        return self.db.get(ProductModel, product.id).stock

    def cart_quantities(self, user) -> dict:
        self.db.expire_all()
        rows = self.db.execute(
            select(CartItemModel.product_id, CartItemModel.quantity).where(CartItemModel.cart_id == user.id)
        ).all()
        return {pid: qty for pid, qty in rows}

    def orders_of(self, user) -> list:
        self.db.expire_all()
        return list(self.db.execute(select(OrderModel).where(OrderModel.user_id == user.id)).scalars())

    def reload_code(self, code) -> DiscountCodeModel:
        self.db.expire_all()
        return self.db.execute(select(DiscountCodeModel).where(DiscountCodeModel.code == code)).scalar_one()


@pytest.fixture()
def make(db):
    return Factory(db)
