"""Order CRUD over the orders table. ORM rows are mapped to OrderRead on the way out."""

import logging

from sqlalchemy.orm import Session

from app.models import Order
from app.schemas.order import OrderCreate, OrderRead, OrderUpdate
from app.services.errors import NotFound

logger = logging.getLogger(__name__)


def list_orders(db: Session) -> list[OrderRead]:
    rows = db.query(Order).order_by(Order.id).all()
    return [OrderRead.model_validate(r) for r in rows]


def get_order(db: Session, order_id: int) -> OrderRead:
    row = db.get(Order, order_id)
    if row is None:
        raise NotFound("Order not found")
    return OrderRead.model_validate(row)


def create_order(db: Session, data: OrderCreate, created_by: int | None = None) -> OrderRead:
    """Insert a new order. data.id is ignored so a client can never force an id."""
    row = Order(
        order_number=data.order_number,
        product_name=data.product_name,
        price=data.price,
        quantity=data.quantity,
        created_by=created_by,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created order id=%s order_number=%r", row.id, row.order_number)
    return OrderRead.model_validate(row)


def update_order(db: Session, order_id: int, data: OrderUpdate) -> OrderRead:
    row = db.get(Order, order_id)
    if row is None:
        raise NotFound("Order not found")
    row.order_number = data.order_number
    row.product_name = data.product_name
    row.price = data.price
    row.quantity = data.quantity
    db.commit()
    db.refresh(row)
    return OrderRead.model_validate(row)


def delete_order(db: Session, order_id: int) -> bool:
    """Delete an order. Returns False if it did not exist."""
    deleted = db.query(Order).filter(Order.id == order_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info("Deleted order id=%s", order_id)
    return deleted > 0
