#!/bin/python3

# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

# pylint: disable=invalid-name

"""Pre-populate the keystash fixture file, so a test run does not have to generate keys.

Example:
-------
    python scripts/fill_keystash.py -n 20
    python scripts/fill_keystash.py -n 5 --path /tmp/keystash.yml --seed 42 -v

"""

import argparse
import logging
import random
from typing import List, Optional

from sslhelper.config import DEFAULT_KEYSTASH_PATH, KeyStashConfig
from sslhelper.keystash import KeyStash, fill_keystash

log = logging.getLogger("keystash")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(description="Fill the keystash with reusable test keys.")
    parser.add_argument(
        "-n", "--count", type=int, default=10, help="Minimum number of keys in the keystash (default: 10)"
    )
    parser.add_argument(
        "--path", default=DEFAULT_KEYSTASH_PATH, help=f"Path to the keystash file (default: {DEFAULT_KEYSTASH_PATH})"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the key type selection")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Fill the keystash and return the number of generated keys."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.count < 0:
        parser.error(f"the count must not be negative, got: {args.count}")

    logging.getLogger().setLevel(logging.DEBUG if args.verbose else logging.INFO)

    stash = KeyStash(config=KeyStashConfig(path=args.path), rng=random.Random(args.seed))
    generated = fill_keystash(stash, args.count)
    log.info("Generated %d new keys, the keystash now holds %d keys: %s", generated, len(stash), stash.path)
    return generated


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)5s - %(message)s")
    main()
