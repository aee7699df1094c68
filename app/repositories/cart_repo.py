# app/repositories/cart_repo.py
import uuid
from sqlmodel import Session, select
from app.models.cart import CartItem
from app.schemas.product import ProductView


class CartRepository:

    # Get lines for a cart, oldest first
    def list_for_cart(self, session: Session, cart_id: uuid.UUID) -> list[CartItem]:
        stmt = (
            select(CartItem)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.created_at, CartItem.id)
        )
        return list(session.exec(stmt).all())

    def get_item(
        self, session: Session, cart_id: uuid.UUID, product_id: str
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id, CartItem.product_id == product_id
        )
        return session.exec(stmt).first()

    def contains(self, session: Session, cart_id: uuid.UUID, product_id: str) -> bool:
        return self.get_item(session, cart_id, product_id) is not None

    def product_ids(self, session: Session, cart_id: uuid.UUID) -> set[str]:
        stmt = select(CartItem.product_id).where(CartItem.cart_id == cart_id)
        return set(session.exec(stmt).all())

    # CRUD
    def create_from_product(
        self,
        session: Session,
        *,
        cart_id: uuid.UUID,
        product: ProductView,
    ) -> CartItem:
        """
        Create a CartItem from a ProductView, snapshotting its fields.

        Duplicate checks belong to the service.
        """
        item = CartItem(
            cart_id=cart_id,
            product_id=product.id,
            name=product.name,
            image_url=product.image_url,
            price=product.price,
            number_price=product.number_price,
            default_price_id=product.default_price_id,
        )
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete(self, session: Session, item: CartItem) -> None:
        session.delete(item)
        session.commit()

    def clear_cart(self, session: Session, cart_id: uuid.UUID) -> None:
        for row in self.list_for_cart(session, cart_id):
            session.delete(row)
        session.commit()
