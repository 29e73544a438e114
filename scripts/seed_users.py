#!/usr/bin/env python3
"""Create tables if needed and seed the default user directory."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from evalhub.core.database import Base, SessionLocal, engine
from evalhub.services.user_service import UserService
import evalhub.models  # noqa: F401


def seed_users():
    """Seed the roster unless users already exist."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        created = UserService(db).seed_directory()
        if created:
            print(f"\n✅ Created {created} users\n")
        else:
            print("\n✅ Users already present, nothing to do\n")
    except Exception as e:
        db.rollback()
        print(f"\n❌ Error: {str(e)}\n")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_users()
