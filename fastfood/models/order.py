from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Enum, Numeric, CheckConstraint, Index
from sqlalchemy.orm import relationship
from fastfood.utils.clock import utcnow
from fastfood.models.base import Base, enum_values
import uuid, enum


class OrderStatus(str, enum.Enum):
    ORDERED = "ordered"
    PREPARING = "preparing"
    DELIVERING = "delivering"  # only reachable once delivery is enabled
    DELIVERED = "delivered"


class Fulfillment(str, enum.Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    customer_id = Column(String, nullable=False)
    # Cleared if the restaurant is deleted; snapshots keep the order readable
    restaurant_id = Column(String, ForeignKey("restaurants.id", ondelete="SET NULL"), nullable=True)

    fulfillment = Column(
        Enum(Fulfillment, name="fulfillment", values_callable=enum_values),
        nullable=False,
    )
    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=enum_values),
        nullable=False,
        default=OrderStatus.ORDERED,
    )

    # Pricing snapshot
    subtotal = Column(Numeric(10, 2), nullable=False, default=0.00)
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0.00)
    total = Column(Numeric(10, 2), nullable=False, default=0.00)
    payment_method = Column(String, nullable=False)  # label only, no processing

    estimated_ready_at = Column(DateTime, nullable=True)
    menu_revision = Column(Integer, nullable=True)  # menu state the order was priced against

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    restaurant = relationship("Restaurant", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_orders_customer", "customer_id"),
        Index("idx_orders_restaurant_status", "restaurant_id", "status"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    # Plain reference: the snapshot must survive catalog deletions
    meal_id = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    # Snapshot pricing and name at time of order
    name_snapshot = Column(String, nullable=False)
    price_snapshot = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_item_quantity_positive"),
        CheckConstraint("price_snapshot >= 0", name="ck_order_item_price_non_negative"),
        Index("idx_order_items_order", "order_id"),
    )
