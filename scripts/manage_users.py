# scripts/manage_users.py

import argparse
import asyncio
import sys

from sqlalchemy.future import select

from fastfood.auth.dependencies import issue_token
from fastfood.db import async_session
from fastfood.models.user import PaymentMethod, User, UserRole

# 🎯 USERS TO SEED
USERS_TO_SEED = [
    {"email": "seller@example.com", "first_name": "Sam", "last_name": "Seller", "role": UserRole.SELLER.value},
    {"email": "customer@example.com", "first_name": "Casey", "last_name": "Customer", "role": UserRole.CUSTOMER.value,
     "payment_method": PaymentMethod.CASH},
]

if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


async def seed_users():
    async with async_session() as session:
        for user_data in USERS_TO_SEED:
            result = await session.execute(select(User).where(User.email == user_data["email"]))
            if result.scalar_one_or_none():
                print(f"⚠️  User '{user_data['email']}' already exists. Skipping.")
                continue
            user = User(**user_data)
            session.add(user)
            await session.flush()
            print(f"✅ Created: {user.email} ({user.role})")

        await session.commit()
        print("✅ Done seeding users.\n")


async def print_tokens(email=None):
    async with async_session() as session:
        query = select(User)
        if email:
            query = query.where(User.email == email)
        result = await session.execute(query.order_by(User.email))
        users = result.scalars().all()
        if not users:
            print("⚠️  No users found.")
        for user in users:
            role = UserRole(user.role).value
            print(f"🔐 {user.email} ({role}): {issue_token(user.id, role)}")


async def delete_user(email):
    async with async_session() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user:
            await session.delete(user)
            await session.commit()
            print(f"🗑️  Deleted user: {email}")
        else:
            print(f"⚠️  No user found with email: {email}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manage FastFood users")
    parser.add_argument("--seed", action="store_true", help="Seed sample users")
    parser.add_argument("--tokens", action="store_true", help="Print Bearer tokens")
    parser.add_argument("--delete", action="store_true", help="Delete a user")
    parser.add_argument("--email", type=str, help="Email of the user")

    args = parser.parse_args()

    if args.seed:
        asyncio.run(seed_users())
    elif args.tokens:
        asyncio.run(print_tokens(email=args.email))
    elif args.delete and args.email:
        asyncio.run(delete_user(args.email))
    else:
        print("❗ Usage:")
        print("  python -m scripts.manage_users --seed")
        print("  python -m scripts.manage_users --tokens [--email seller@example.com]")
        print("  python -m scripts.manage_users --delete --email customer@example.com")
