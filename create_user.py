#!/usr/bin/env python3
"""
Standalone script to register a user and print a bearer token for it.

Accounts normally come from the identity provider; this is for local
development against the API.
Usage: python create_user.py
"""

import asyncio
from app.core.database import AsyncSessionLocal, engine
from app.core.security import create_access_token
from app.crud.user import create_user, get_user_by_email
import app.models  # noqa: F401

async def create_local_user():
    print("Creating user...")

    email = input("Enter email: ") or "dev@example.com"
    full_name = input("Enter full name (optional): ") or None

    async with AsyncSessionLocal() as session:
        try:
            user = await get_user_by_email(email, session)
            if user:
                print(f"User with email {email} already exists, issuing a new token")
            else:
                user = await create_user(email, session, full_name=full_name)
                print("✅ User created successfully!")

            print(f"📧 Email: {user.email}")
            print(f"🔑 ID: {user.id}")
            print(f"🎟️  Token: {create_access_token(str(user.id))}")
        finally:
            await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_local_user())
