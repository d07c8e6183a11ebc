# store_backend/data/seed.py
from decimal import Decimal

from store_backend.data.database import SessionLocal
from store_backend.data.models.product import ProductModel
from store_backend.main import init_db
from store_backend.repos.product_repo import ProductRepo
from store_backend.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Keyboard", "price": "199.99", "stock": 25},
    {"name": "Mouse", "price": "49.50", "stock": 40},
    {"name": "Monitor", "price": "899.00", "stock": 8},
    {"name": "USB-C Cable", "price": "12.90", "stock": 120},
    {"name": "Laptop Stand", "price": "79.00", "stock": 15},
]


def seed() -> int:
    init_db()
    db = SessionLocal()
    try:
        # tylko gdy katalog pusty
        if db.query(ProductModel).first():
            logger.info("Products already present, skipping seed")
            return 0
        repo = ProductRepo(db)
        for p in PRODUCTS:
            repo.add_product(ProductModel(name=p["name"], price=Decimal(p["price"]), stock=p["stock"]))
        db.commit()
        logger.info(f"Seeded {len(PRODUCTS)} products")
        return len(PRODUCTS)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
