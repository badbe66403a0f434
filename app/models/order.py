"""ORM model for customer orders."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String

from app.models.base import Base


class Order(Base):
    """
    One order line: order number, product, unit price and quantity.

    created_by points at the account that entered the order. The FK is
    RESTRICT, so an account with orders cannot be deleted.
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(64), nullable=False, index=True)
    product_name = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    quantity = Column(Integer, nullable=False, default=0)
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
