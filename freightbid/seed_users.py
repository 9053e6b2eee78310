"""
Database seeding script for initial users.

Creates the ADMIN user (which cannot be registered via the API) and a demo
organization with one MANAGER and one ANALYST for development.
Run this script after the database is set up but before first use.
"""

import asyncio

from sqlalchemy import select

from freightbid.app.db.session import AsyncSessionLocal
from freightbid.app.models.organization import Organization
from freightbid.app.models.user import User
from freightbid.app.models.enums import UserRole
from freightbid.app.core.security import get_password_hash

DEMO_ORGANIZATION = "Demo Shipper"


async def seed_users(session_factory=AsyncSessionLocal) -> bool:
    """
    Seed initial users with different roles.

    Creates:
    - 1 ADMIN user (no organization)
    - 1 MANAGER and 1 ANALYST in the demo organization

    Returns False without changes if the ADMIN user already exists.
    """
    async with session_factory() as db:
        print("🌱 Starting user seeding...")

        result = await db.execute(
            select(User).where(User.username == "admin")
        )
        if result.scalar_one_or_none():
            print("ℹ️  ADMIN user already exists, skipping seeding")
            return False

        db.add(User(
            email="admin@freightbid.com",
            username="admin",
            full_name="Platform Admin",
            hashed_password=get_password_hash("admin123"),
            role=UserRole.ADMIN,
            is_active=True
        ))

        organization = Organization(name=DEMO_ORGANIZATION)
        db.add(organization)
        await db.flush()

        db.add_all([
            User(
                email="manager@demo-shipper.com",
                username="demo_manager",
                hashed_password=get_password_hash("manager123"),
                role=UserRole.MANAGER,
                organization_id=organization.id,
                is_active=True
            ),
            User(
                email="analyst@demo-shipper.com",
                username="demo_analyst",
                hashed_password=get_password_hash("analyst123"),
                role=UserRole.ANALYST,
                organization_id=organization.id,
                is_active=True
            ),
        ])

        await db.commit()

        print("\n🎉 User seeding completed successfully!")
        print("\nSeeded users:")
        print("  - ADMIN:   admin / admin123")
        print(f"  - MANAGER: demo_manager / manager123 ({DEMO_ORGANIZATION})")
        print(f"  - ANALYST: demo_analyst / analyst123 ({DEMO_ORGANIZATION})")
        print("\nNote: further users register via POST /auth/register")
        return True


if __name__ == "__main__":
    asyncio.run(seed_users())
