from sqlalchemy import Column, String, Boolean, DateTime, JSON, CheckConstraint, Index
from sqlalchemy.orm import relationship
from fastfood.utils.clock import utcnow
from fastfood.models.base import Base
import uuid


class Meal(Base):
    __tablename__ = "meals"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    source_id = Column(String, nullable=True, index=True)  # idMeal from the seed file
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    thumbnail_url = Column(String, nullable=False)

    # Parallel lists: measures[i] belongs to ingredients[i]
    ingredients = Column(JSON, nullable=False, default=list)
    measures = Column(JSON, nullable=False, default=list)

    is_global = Column(Boolean, nullable=False, default=True)
    created_by_seller_id = Column(String, nullable=True)  # custom meals only

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    menu_entries = relationship("RestaurantMenuItem", back_populates="meal", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint(
            "(is_global AND created_by_seller_id IS NULL) "
            "OR (NOT is_global AND created_by_seller_id IS NOT NULL)",
            name="ck_meal_owner_matches_scope",
        ),
        Index("idx_meals_name", "name"),
        Index("idx_meals_category", "category"),
        Index("idx_meals_seller", "created_by_seller_id"),
    )
