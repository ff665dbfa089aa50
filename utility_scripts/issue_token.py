#!/usr/bin/env python3
"""
Development Token Script

Issues a bearer token for an existing user so the protected office
endpoints can be exercised locally. Real tokens come from the auth service.

Usage:
    python utility_scripts/issue_token.py --email host@example.com
    python utility_scripts/issue_token.py --email host@example.com --ability office.create

Environment Variables (from .env file):
    - DATABASE_URL: Database connection string
    - SECRET_KEY: Must match the API's signing key
"""

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Add the project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from office_api.core.database import get_db_session
from office_api.core.security import create_access_token, ABILITY_ALL
from office_api.models.user import User


def main() -> int:
    parser = argparse.ArgumentParser(description="Issue a development bearer token")
    parser.add_argument("--email", required=True, help="Email of the user to issue the token for")
    parser.add_argument(
        "--ability",
        action="append",
        dest="abilities",
        help=f"Token ability, repeatable (default: {ABILITY_ALL})"
    )
    parser.add_argument("--minutes", type=int, default=60, help="Token lifetime in minutes")
    args = parser.parse_args()

    with get_db_session() as db:
        user = db.query(User).filter(User.email == args.email).first()

    if not user:
        print(f"No user with email {args.email}", file=sys.stderr)
        return 1

    token = create_access_token(
        user.id,
        abilities=args.abilities or [ABILITY_ALL],
        expires_delta=timedelta(minutes=args.minutes)
    )
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
