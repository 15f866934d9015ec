#!/usr/bin/env python3
"""
Create an Admin Account

Creates the admin user, or resets its password if it already exists.
Usage:
    python scripts/create_admin.py admin
    python scripts/create_admin.py admin --password 's3cret-pass'
"""

import argparse
import getpass
import sys

from blog.database import SessionLocal, init_db
from blog.services.auth_service import create_or_reset_admin


def main():
    parser = argparse.ArgumentParser(description="Create or reset an admin user")
    parser.add_argument("username", help="Admin username")
    parser.add_argument(
        "--password", help="Password (prompted for when omitted)", default=None
    )
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")

    init_db()
    db = SessionLocal()
    try:
        user = create_or_reset_admin(db, args.username, password)
        db.commit()
        print(f"Admin user '{user.username}' is ready")
    except ValueError as e:
        db.rollback()
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
