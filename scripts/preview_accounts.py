#!/usr/bin/env python
"""
Print the first page of accounts straight from the dashboard API.

Usage:
    python scripts/preview_accounts.py [--limit N] [--offset N]
"""

import os
import sys
import asyncio
import argparse
import logging
from dotenv import load_dotenv

# Add the project root to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from accountdesk.external_apis import AccountApiClient, AccountApiError


async def preview_accounts(limit: int, offset: int):
    """Fetch one page and print code, name, contact count and address count."""
    client = AccountApiClient()
    try:
        accounts = await client.list_accounts(limit=limit, offset=offset)
    except AccountApiError as e:
        logger.error(f"Could not fetch accounts: {str(e)}")
        return False

    print(f"Fetched {len(accounts)} accounts from {client.base_url}")
    for account in accounts:
        print(f"- {account.code}: {account.name} "
              f"({len(account.contacts)} contacts, {len(account.addresses)} addresses, "
              f"{'active' if account.active else 'inactive'})")
    return True


def main():
    parser = argparse.ArgumentParser(description="Preview accounts from the API")
    parser.add_argument("--limit", type=int, default=10, help="Number of accounts to fetch")
    parser.add_argument("--offset", type=int, default=0, help="Offset of the first account")
    args = parser.parse_args()

    success = asyncio.run(preview_accounts(args.limit, args.offset))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
