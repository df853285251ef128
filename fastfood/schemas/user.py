import re
from typing import Optional

from pydantic import model_validator

from fastfood.models.user import CARD_LIKE_METHODS, PaymentMethod
from fastfood.schemas.common import CamelModel

LAST4_RE = re.compile(r"^[0-9]{4}$")


class PaymentProfile(CamelModel):
    method: PaymentMethod
    card_brand: Optional[str] = None
    card_last4: Optional[str] = None
    holder_name: Optional[str] = None

    @model_validator(mode="after")
    def check_card_fields(self):
        if self.method in CARD_LIKE_METHODS:
            brand = (self.card_brand or "").strip()
            holder = (self.holder_name or "").strip()
            last4 = (self.card_last4 or "").strip()
            if not brand or not holder or not last4:
                raise ValueError(
                    f"cardBrand, cardLast4 and holderName are required for {self.method.value}"
                )
            if not LAST4_RE.match(last4):
                raise ValueError("cardLast4 must be exactly 4 digits")
            self.card_brand, self.holder_name, self.card_last4 = brand, holder, last4
        else:
            # cash carries no card data
            self.card_brand = self.card_last4 = self.holder_name = None
        return self


class UserRead(CamelModel):
    id: str
    role: str
    email: str
    first_name: str
    last_name: str
    payment: Optional[PaymentProfile] = None
