# app/services/cart_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.currency import format_currency
from app.core.exceptions import CartConsistencyViolation
from app.repositories.cart_repo import CartRepository
from app.schemas.cart import CartItemRead, CartMembershipRead, CartSummary
from app.schemas.product import ProductView

logger = logging.getLogger(__name__)


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - answer "is this product in the cart?" without side effects
      - add a product line, snapshotting the ProductView
      - reject adding a product that is already in the cart
      - compute cart totals

    Callers are expected to gate add_to_cart on is_in_cart; the service
    still refuses duplicates with CartConsistencyViolation.
    """

    def __init__(
        self,
        cart_repo: CartRepository,
        locale: str = "pt-BR",
        currency: str = "BRL",
    ):
        self.cart_repo = cart_repo
        self.locale = locale
        self.currency = currency

    # ---- queries ----

    def is_in_cart(self, session: Session, cart_id: uuid.UUID, product_id: str) -> bool:
        return self.cart_repo.contains(session, cart_id, product_id)

    def membership(
        self, session: Session, cart_id: uuid.UUID, product_id: str
    ) -> CartMembershipRead:
        return CartMembershipRead(
            cart_id=cart_id,
            product_id=product_id,
            in_cart=self.is_in_cart(session, cart_id, product_id),
        )

    def product_ids(self, session: Session, cart_id: uuid.UUID) -> set[str]:
        return self.cart_repo.product_ids(session, cart_id)

    def get_cart_summary(self, session: Session, cart_id: uuid.UUID) -> CartSummary:
        """
        Return full cart summary:
          - list of CartItemRead
          - total_quantity (one per line)
          - total_price, from number_price only
        """
        items = self.cart_repo.list_for_cart(session, cart_id)
        total_price = sum(it.number_price for it in items)

        return CartSummary(
            cart_id=cart_id,
            items=[CartItemRead.model_validate(it, from_attributes=True) for it in items],
            total_quantity=len(items),
            total_price=total_price,
            total_price_formatted=format_currency(
                total_price, locale=self.locale, currency=self.currency
            ),
        )

    # ---- mutations ----

    def add_to_cart(
        self,
        session: Session,
        cart_id: uuid.UUID,
        product: ProductView,
    ) -> CartSummary:
        """
        Add a product to the cart.

        Raises:
            CartConsistencyViolation: the product is already in the cart.
            The cart is left untouched.
        """
        if self.is_in_cart(session, cart_id, product.id):
            raise CartConsistencyViolation(cart_id, product.id)

        try:
            self.cart_repo.create_from_product(session, cart_id=cart_id, product=product)
        except IntegrityError:
            # lost a race with a concurrent add of the same product
            session.rollback()
            raise CartConsistencyViolation(cart_id, product.id)
        logger.info("Added product %s to cart %s", product.id, cart_id)
        return self.get_cart_summary(session, cart_id)

    def remove_item(
        self,
        session: Session,
        cart_id: uuid.UUID,
        product_id: str,
    ) -> CartSummary:
        """
        Remove a product from the cart and return the updated summary.
        """
        item = self.cart_repo.get_item(session, cart_id, product_id)
        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Item not found in cart",
            )

        self.cart_repo.delete(session, item)
        return self.get_cart_summary(session, cart_id)

    def clear_cart(self, session: Session, cart_id: uuid.UUID) -> CartSummary:
        """
        Clear all items from the cart and return an empty summary.
        """
        self.cart_repo.clear_cart(session, cart_id)
        return self.get_cart_summary(session, cart_id)
