#!/usr/bin/env python3
"""
Print the next key for an environment prefix and advance its cursor.

Usage:
    python scripts/next_env_key.py OPENAI_API_KEY_
    python scripts/next_env_key.py OPENAI_API_KEY_ --storage DISK

Exits 1 when no key could be produced. The key goes to stdout; the status
message is logged.
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
from envkey.services.key_rotator import get_next_env_key

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Rotate to the next key for an environment prefix")
    parser.add_argument("base_env_name", help="Prefix shared by the environment variables")
    parser.add_argument(
        "--storage",
        type=str.upper,
        choices=[s.value for s in StorageType],
        default=None,
        help=f"Cursor store (default: {settings.env_key_storage})",
    )
    args = parser.parse_args()

    result = get_next_env_key(args.base_env_name, storage=args.storage)
    logger.info(result.message)
    if not result.key:
        sys.exit(1)
    print(result.key)


if __name__ == "__main__":
    main()
