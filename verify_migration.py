#!/usr/bin/env python3
"""
Script to verify that the budget tables exist in the configured database
"""
import asyncio
import sys
import platform
from sqlalchemy import inspect, text
from app.core.database import engine, Base
import app.models  # noqa: F401

async def verify_database():
    """Compare the live schema with the models and print migration status"""

    try:
        async with engine.begin() as conn:
            print(f"🔗 Connected to {engine.dialect.name} database successfully!")

            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

            print("\n📋 Expected tables:")
            missing = []
            for table in sorted(Base.metadata.tables):
                if table in tables:
                    print(f"   ✅ {table}")
                else:
                    print(f"   ❌ {table} (missing)")
                    missing.append(table)

            # Check alembic version
            print("\n🔄 Migration status:")
            if "alembic_version" in tables:
                result = await conn.execute(text("SELECT version_num FROM alembic_version"))
                version = result.fetchone()
                if version:
                    print(f"   ✅ Current Alembic version: {version[0]}")
                else:
                    print("   ⚠️  No Alembic version found")
            else:
                print("   ⚠️  alembic_version table not found (tables created outside Alembic?)")

            # Check table row counts
            print("\n📊 Table statistics:")
            for table in sorted(Base.metadata.tables):
                if table in tables:
                    result = await conn.execute(text(f"SELECT COUNT(*) FROM {table}"))
                    print(f"   📈 {table}: {result.scalar()} rows")

        if missing:
            print(f"\n❌ Missing tables: {', '.join(missing)}. Run `alembic upgrade head`.")
            sys.exit(1)
        print("\n✅ Database verification completed successfully!")

    finally:
        # Properly dispose of the engine
        await engine.dispose()

def main():
    """Main function with proper asyncio handling"""
    if platform.system() == 'Windows':
        # Set the event loop policy for Windows
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

    try:
        asyncio.run(verify_database())
    except Exception as e:
        print(f"❌ Database verification failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
