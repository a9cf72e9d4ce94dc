#!/usr/bin/env python3
"""Validate that the environment variables the bot needs are set."""

import os
import re
import sys

REQUIRED = [
    "DATABASE_URL",
    "REDIS_URL",
    "SLACK_BOT_TOKEN",
    "SLACK_SIGNING_SECRET",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REDIRECT_URI",
    "ENCRYPTION_KEY",
    "STATE_SECRET",
]

OPTIONAL = [
    "ANTHROPIC_API_KEY",
    "REMINDER_SECRET",
    "DEFAULT_TIMEZONE",
]


def main() -> int:
    missing = []
    print("=== Required Environment Variables ===")
    for var in REQUIRED:
        value = os.environ.get(var)
        if value:
            print(f"  {var}: OK")
        else:
            print(f"  {var}: MISSING")
            missing.append(var)

    print("\n=== Optional Environment Variables ===")
    for var in OPTIONAL:
        value = os.environ.get(var)
        if value:
            print(f"  {var}: set")
        else:
            print(f"  {var}: not set")

    key = os.environ.get("ENCRYPTION_KEY", "")
    if key and not re.fullmatch(r"[0-9a-fA-F]{64}", key):
        print("\nERROR: ENCRYPTION_KEY must be 64 hex characters (32 bytes)")
        return 1

    if missing:
        print(f"\nERROR: Missing required variables: {', '.join(missing)}")
        return 1

    if not os.environ.get("ANTHROPIC_API_KEY"):
        print("\nNote: entries will be cleaned up locally; no LLM refinement.")
    print("\nAll required environment variables are present.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
