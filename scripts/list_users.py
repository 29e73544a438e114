#!/usr/bin/env python3
"""List all users in the database, grouped by department."""
import sys
import os
from itertools import groupby

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from evalhub.core.database import SessionLocal
from evalhub.repositories.user_repository import UserRepository


def list_users():
    """List all users"""
    db = SessionLocal()
    try:
        users = UserRepository(db).get_all()

        print(f"\n=== Total users: {len(users)} ===\n")

        if not users:
            print("❌ No users in the database. Run scripts/seed_users.py\n")
            return

        for department, members in groupby(users, key=lambda u: u.department or "-"):
            print(f"🏢 {department.upper()}:")
            for user in members:
                print(f"   ID: {user.id} | {user.email} | {user.name} | {user.job_title}")
            print()
    finally:
        db.close()


if __name__ == "__main__":
    list_users()
