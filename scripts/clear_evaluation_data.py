#!/usr/bin/env python3
"""Delete all forms, assignments, responses and notifications. Users are kept."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from evalhub.core.database import SessionLocal
from evalhub.services.admin_service import AdminService


def clear_evaluation_data(assume_yes: bool = False):
    if not assume_yes:
        answer = input("This deletes every form, assignment, response and notification. Continue? [y/N] ")
        if answer.strip().lower() != "y":
            print("Aborted.")
            return

    db = SessionLocal()
    try:
        result = AdminService(db).clear_evaluation_data()
        for table, count in result.deleted.items():
            print(f"🗑️  {table}: {count}")
        print(f"\n✅ {result.message}\n")
    finally:
        db.close()


if __name__ == "__main__":
    clear_evaluation_data(assume_yes="--yes" in sys.argv)
