#!/usr/bin/env python3
"""
Script: create_admin.py
Purpose: Create a back-office admin account with the permissions of a role template

Usage:
    cd backend
    python scripts/create_admin.py --username owner --email owner@example.com --role super_admin

The password is prompted for unless --password is given.

Roles:
    super_admin  every permission
    manager      everything except manage_admins
    editor       products, testimonials, content
    support      orders, users, analytics
    analyst      analytics only
"""

import sys
import argparse
import getpass
from pathlib import Path

from dotenv import load_dotenv

# Add backend to path
BACKEND_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BACKEND_DIR))

load_dotenv(BACKEND_DIR / '.env')

from bakery.core.security import hash_password
from bakery.domain.admin import ROLE_PERMISSIONS
from bakery.repositories.admin_repository import AdminRepository


def main():
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument('--username', required=True)
    parser.add_argument('--email', default=None)
    parser.add_argument('--role', choices=sorted(ROLE_PERMISSIONS.keys()), default='editor')
    parser.add_argument('--password', default=None, help="Prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        print("Password must be at least 8 characters")
        return 1

    repo = AdminRepository()
    if repo.find_by_username(args.username):
        print(f"Admin '{args.username}' already exists")
        return 1

    admin = repo.create(
        username=args.username,
        hashed_password=hash_password(password),
        role=args.role,
        permissions=ROLE_PERMISSIONS[args.role],
        email=args.email,
    )

    print(f"Created admin '{admin.username}' (id {admin.id}, role {admin.role})")
    print(f"Permissions: {', '.join(admin.permissions)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
