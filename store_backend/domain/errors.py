# store_backend/domain/errors.py
"""
Bledy domenowe sklepu.

Serwisy rzucaja je bez lapania, handler w main.py zamienia je
na {"error": true, "message": ...} z odpowiednim statusem HTTP.
"""


class StoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    status_code = 400


class UserNotFound(StoreError):
    status_code = 404

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class EmptyCart(StoreError):
    status_code = 400

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class InsufficientStock(StoreError):
    status_code = 400

    def __init__(self, product_name: str):
        super().__init__(f"Insufficient stock for {product_name}")
        self.product_name = product_name


class InvalidDiscountCode(StoreError):
    status_code = 400

    def __init__(self, message: str = "Invalid or already used discount code"):
        super().__init__(message)


class DiscountCodeRace(StoreError):
    status_code = 400

    def __init__(self, message: str = "Discount code was already used by another request"):
        super().__init__(message)


class StorageError(StoreError):
    status_code = 500
