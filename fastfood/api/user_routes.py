from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import Principal, get_current_principal
from fastfood.core.errors import NotFound
from fastfood.crud import user as user_crud
from fastfood.db import get_db
from fastfood.schemas.user import PaymentProfile, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
async def get_me(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    user = await user_crud.get_user(db, principal.id)
    if not user:
        raise NotFound("User not found")
    return user


@router.put("/me/payment", response_model=UserRead)
async def set_my_payment(
    profile: PaymentProfile,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Set or replace my payment profile"""
    user = await user_crud.get_user(db, principal.id)
    if not user:
        raise NotFound("User not found")
    return await user_crud.set_payment_profile(db, user, profile)
