from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fastfood.models.user import User
from fastfood.schemas.user import PaymentProfile


async def get_user(db: AsyncSession, user_id: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def set_payment_profile(db: AsyncSession, user: User, profile: PaymentProfile) -> User:
    """Replace the user's single payment profile"""
    user.payment_method = profile.method
    user.card_brand = profile.card_brand
    user.card_last4 = profile.card_last4
    user.holder_name = profile.holder_name
    await db.commit()
    return user
