#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w Base.metadata

from store_backend.data.models.user import UserModel
from store_backend.data.models.product import ProductModel
from store_backend.data.models.cart import CartModel
from store_backend.data.models.cart_item import CartItemModel
from store_backend.data.models.order import OrderModel
from store_backend.data.models.order_item import OrderItemModel
from store_backend.data.models.discount_code import DiscountCodeModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "DiscountCodeModel",
]
