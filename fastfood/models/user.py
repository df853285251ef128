from sqlalchemy import Column, String, DateTime, Enum
from fastfood.utils.clock import utcnow
from fastfood.models.base import Base, enum_values
import uuid, enum


class UserRole(str, enum.Enum):
    CUSTOMER = "customer"
    SELLER = "seller"


class PaymentMethod(str, enum.Enum):
    CARD = "card"
    PREPAID = "prepaid"
    CASH = "cash"


# Methods that need brand, last-4 and holder on file
CARD_LIKE_METHODS = (PaymentMethod.CARD, PaymentMethod.PREPAID)


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    role = Column(String, nullable=False)  # "customer", "seller"
    email = Column(String, nullable=False, unique=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)

    # Payment profile (at most one per user)
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method", values_callable=enum_values),
        nullable=True,
    )
    card_brand = Column(String, nullable=True)
    card_last4 = Column(String(4), nullable=True)
    holder_name = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def payment(self):
        if not self.payment_method:
            return None
        return {
            "method": self.payment_method,
            "card_brand": self.card_brand,
            "card_last4": self.card_last4,
            "holder_name": self.holder_name,
        }
