#!/usr/bin/env python3
"""
Create every table that is missing.

Usage:
    python backend/scripts/init_db.py           # safe create
    python backend/scripts/init_db.py --drop    # wipe and recreate (DELETES DATA)
"""

import asyncio
import os
import sys

# Add parent directories to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from backend.app.core.database import init_models, get_database_url


async def main(drop: bool):
    await init_models(drop=drop)
    print(f"Database tables updated ({get_database_url()}).")


if __name__ == "__main__":
    asyncio.run(main("--drop" in sys.argv[1:]))
