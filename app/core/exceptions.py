# app/core/exceptions.py
"""
Domain exceptions shared by services and routers.

HTTP mapping lives in app/main.py:
  - ProviderError            -> 502 Bad Gateway
  - CartConsistencyViolation -> 409 Conflict
"""


class ProviderError(Exception):
    """
    The commerce provider could not be reached, answered with an error,
    or returned a product record we cannot map (no expanded default price,
    no amount, no image).
    """


class CartConsistencyViolation(Exception):
    """
    A mutation would break the one-line-per-product rule of a cart,
    e.g. adding a product that is already in it.
    """

    def __init__(self, cart_id, product_id: str):
        self.cart_id = cart_id
        self.product_id = product_id
        super().__init__(f"Product {product_id} is already in cart {cart_id}")
