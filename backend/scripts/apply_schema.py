#!/usr/bin/env python3
"""
Script: apply_schema.py
Purpose: Create the Dreamy Delights tables in the configured database

The schema uses CREATE ... IF NOT EXISTS throughout, so running it again on
an existing database is harmless.

Usage:
    cd backend
    python scripts/apply_schema.py [--dry-run]

Options:
    --dry-run    Print the SQL without executing it
"""

import os
import sys
import argparse
from pathlib import Path

import psycopg2
from dotenv import load_dotenv

BACKEND_DIR = Path(__file__).parent.parent
SCHEMA_FILE = BACKEND_DIR / 'sql' / 'schema.sql'

load_dotenv(BACKEND_DIR / '.env')


def print_header(title: str):
    """Print formatted header"""
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}\n")


def main():
    parser = argparse.ArgumentParser(description="Apply sql/schema.sql to DATABASE_URL")
    parser.add_argument('--dry-run', action='store_true', help="Print the SQL without executing it")
    args = parser.parse_args()

    print_header("Dreamy Delights - apply schema")

    sql = SCHEMA_FILE.read_text(encoding='utf-8')

    if args.dry_run:
        print(sql)
        return 0

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("DATABASE_URL is not set")
        return 1

    conn = psycopg2.connect(database_url)
    try:
        cursor = conn.cursor()
        cursor.execute(sql)
        conn.commit()

        cursor.execute("""
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = 'public'
            ORDER BY table_name
        """)
        tables = [row[0] for row in cursor.fetchall()]
        cursor.close()
    except psycopg2.Error as e:
        conn.rollback()
        print(f"Schema failed: {e}")
        return 1
    finally:
        conn.close()

    print(f"Schema applied. Tables: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
