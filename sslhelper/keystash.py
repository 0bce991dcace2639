# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""A file-backed pool of reusable private keys for the test suite.

Generating a fresh RSA key for every test is slow, so the `KeyStash` hands out keys
which were generated in earlier runs. The keys are stored unencrypted as a YAML list of
PEM strings. When the loaded keys are used up, a new key is generated, appended to the
pool and the whole file is rewritten.

The stash is created once by the test setup and passed to the code which needs keys:

| ${stash}= | Create KeyStash |
| ${key}= | Generate Private Key | ${stash} |

"""

import logging
import os
import random
from collections import deque
from typing import Deque, List, Optional

import yaml
from robot.api.deco import keyword, not_keyword

from sslhelper import keyutils
from sslhelper.config import KeyStashConfig
from sslhelper.data_objects import StashedKey
from sslhelper.exceptions import CorruptedKeyStash
from sslhelper.typingutils import StashKey


class KeyStash:
    """Pool of private keys, loaded from and persisted to a YAML fixture file."""

    def __init__(self, config: Optional[KeyStashConfig] = None, rng: Optional[random.Random] = None):
        """Load the keys from the fixture file, if it exists.

        :param config: The keystash configuration. Defaults to `KeyStashConfig()`.
        :param rng: The random source for the shuffle and the key type selection.
        Defaults to a new `random.Random` instance.
        """
        self.config = config or KeyStashConfig()
        self.rng = rng or random.Random()
        self._keys: List[StashedKey] = self._load()
        self._queue: Deque[StashedKey] = deque(self._keys)

    @property
    def path(self) -> str:
        """Return the path of the fixture file."""
        return self.config.path

    @property
    def remaining(self) -> int:
        """Return the number of loaded keys which were not handed out yet."""
        return len(self._queue)

    def __len__(self) -> int:
        """Return the number of keys in the persisted pool."""
        return len(self._keys)

    def next(self) -> StashKey:
        """Return the next private key.

        Hands out the loaded keys in shuffled order. Once all of them were used, a new key
        is generated and the fixture file is rewritten with all keys.

        :return: An RSA or EC private key.
        """
        return self.next_stashed().private_key

    def next_stashed(self) -> StashedKey:
        """Return the next key together with its kind."""
        if self._queue:
            return self._queue.popleft()

        stashed = StashedKey.from_private_key(self.generate_key())
        self._keys.append(stashed)
        self.save()
        return stashed

    def generate_key(self) -> StashKey:
        """Generate a new key.

        Four equally likely slots are drawn: RSA, EC P-256, EC P-384 and RSA again, so
        RSA keys are generated half of the time.

        :return: The generated private key.
        """
        slot = int(self.rng.random() * 4)

        if slot == 1:
            private_key = self.generate_ecdsa_key("secp256r1")
        elif slot == 2:
            private_key = self.generate_ecdsa_key("secp384r1")
        else:
            # TODO: enable `secp521r1` for slot 3, once P-521 keys are accepted by the CA.
            private_key = keyutils.generate_key("rsa", length=self.config.rsa_length)

        logging.info("Generated a new %s key for the keystash.", keyutils.get_key_name(private_key))
        return private_key

    @staticmethod
    def generate_ecdsa_key(curve: str) -> StashKey:
        """Generate an EC key on the given curve.

        :param curve: The curve name, e.g. "secp256r1".
        :return: The generated EC private key.
        """
        return keyutils.generate_key("ecdsa", curve=curve)

    def save(self) -> None:
        """Rewrite the fixture file with all keys of the pool."""
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        pem_entries = [stashed.to_pem() for stashed in self._keys]
        with open(self.path, "w", encoding="ascii") as stash_file:
            yaml.safe_dump(pem_entries, stash_file, default_style="|")

        logging.debug("Saved %d keys to the keystash: %s", len(pem_entries), self.path)

    def _load(self) -> List[StashedKey]:
        """Load and shuffle the keys of the fixture file."""
        if not os.path.exists(self.path):
            logging.info("No keystash found at %s, starting with an empty pool.", self.path)
            return []

        with open(self.path, "r", encoding="ascii") as stash_file:
            try:
                entries = yaml.safe_load(stash_file)
            except yaml.YAMLError as err:
                raise CorruptedKeyStash(f"The keystash is not valid YAML: {self.path}", str(err)) from err

        if entries is None:
            entries = []

        if not isinstance(entries, list) or not all(isinstance(entry, str) for entry in entries):
            raise CorruptedKeyStash(f"The keystash must be a list of PEM strings: {self.path}")

        keys = [keyutils.load_stash_key(entry) for entry in entries]
        if self.config.shuffle:
            self.rng.shuffle(keys)

        logging.info("Loaded %d keys from the keystash: %s", len(keys), self.path)
        return keys


@keyword(name="Create KeyStash")
def create_keystash(path: Optional[str] = None, shuffle: bool = True) -> KeyStash:  # noqa D417 undocumented-param
    """Create a `KeyStash` for a test run.

    Arguments:
    ---------
        - `path`: The path to the fixture file. Defaults to `data/keystash.yml`.
        - `shuffle`: If the loaded keys should be shuffled. Defaults to `True`.

    Returns:
    -------
        - The loaded `KeyStash`.

    Examples:
    --------
    | ${stash}= | Create KeyStash |
    | ${stash}= | Create KeyStash | path=data/keystash.yml | shuffle=False |

    """
    config = KeyStashConfig(shuffle=shuffle)
    if path is not None:
        config.path = path
    return KeyStash(config=config)


@keyword(name="Generate Private Key")
def generate_private_key(stash: KeyStash) -> StashKey:  # noqa D417 undocumented-param
    """Return the next private key of the keystash.

    Arguments:
    ---------
        - `stash`: The `KeyStash` of the test run.

    Returns:
    -------
        - An RSA or EC private key.

    Examples:
    --------
    | ${key}= | Generate Private Key | ${stash} |

    """
    return stash.next()


@not_keyword
def fill_keystash(stash: KeyStash, count: int) -> int:
    """Generate keys until the persisted pool holds at least `count` keys.

    :param stash: The keystash to fill.
    :param count: The minimum number of keys in the pool.
    :return: The number of newly generated keys.
    """
    generated = 0
    # The loaded keys are consumed first, so drain them without counting.
    while stash.remaining:
        stash.next_stashed()

    while len(stash) < count:
        stash.next_stashed()
        generated += 1

    return generated
