#!/usr/bin/env python3
"""
Reset the stored cursor for an environment prefix back to index 0.

Usage:
    python scripts/reset_cursor.py OPENAI_API_KEY_ --storage DATABASE

MEMORY cursors only live inside a running process, so only DISK and
DATABASE are accepted here.
"""
import sys
import logging
import argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from envkey.config import settings
from envkey.models import StorageType
from envkey.services.cursor_store import get_cursor_store
from envkey.services.key_resolver import cursor_key_for

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Reset a rotation cursor to index 0")
    parser.add_argument("base_env_name", help="Prefix shared by the environment variables")
    parser.add_argument(
        "--storage",
        type=str.upper,
        choices=[StorageType.DISK.value, StorageType.DATABASE.value],
        default=StorageType.DATABASE.value,
    )
    args = parser.parse_args()

    cursor_key = cursor_key_for(args.base_env_name)
    try:
        get_cursor_store(args.storage).reset(cursor_key)
    except Exception as e:
        logger.error(f"Could not reset {cursor_key}: {e}")
        sys.exit(1)
    logger.info(f"Reset {cursor_key} in {args.storage} storage")


if __name__ == "__main__":
    main()
