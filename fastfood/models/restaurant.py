from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, DateTime, Numeric, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from fastfood.utils.clock import utcnow
from fastfood.models.base import Base
import uuid


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    seller_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)

    # Bumped on every wholesale menu replacement
    menu_revision = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    menu_items = relationship(
        "RestaurantMenuItem",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="RestaurantMenuItem.position",
    )
    orders = relationship("Order", back_populates="restaurant")

    # One restaurant per seller, enforced by the database
    __table_args__ = (
        UniqueConstraint("seller_id", name="uq_restaurant_seller"),
        Index("idx_restaurants_city", "city"),
    )


class RestaurantMenuItem(Base):
    __tablename__ = "restaurant_menu_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(String, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    meal_id = Column(String, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    position = Column(Integer, nullable=False, default=0)

    restaurant = relationship("Restaurant", back_populates="menu_items")
    meal = relationship("Meal", back_populates="menu_entries", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("restaurant_id", "meal_id", name="uq_menu_item_restaurant_meal"),
        Index("idx_menu_items_restaurant", "restaurant_id"),
    )
