#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database and the Gemini parsing API are reachable.
Usage: python scripts/check_connections.py
"""
from jobboard.db.postgres import test_postgres_connection
from jobboard.services.gemini_client import get_gemini_client
from jobboard.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB BOARD - CONNECTION CHECK")
    print("=" * 50)

    # Database
    print("\n[1] Testing database...")
    if settings.database_url:
        print(f"    URL: {settings.database_url.split('@')[-1]}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if test_postgres_connection():
        print("    ✅ Database: CONNECTED")
    else:
        print("    ❌ Database: FAILED")

    # Gemini (only if API key is set)
    print("\n[2] Testing Gemini API...")
    if settings.gemini_api_key:
        print(f"    Base URL: {settings.gemini_base_url}")
        if get_gemini_client().test_connection():
            print("    ✅ Gemini: CONNECTED")
        else:
            print("    ❌ Gemini: FAILED")
    else:
        print("    ⚠️  Gemini: API key not configured (skip for now)")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
