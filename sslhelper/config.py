# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Dataclasses for configuration variables used by the keystash."""

import os
from abc import ABC
from dataclasses import dataclass, fields

# The fixture file lives in the `data` directory at the repository root.
DEFAULT_KEYSTASH_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data", "keystash.yml"
)

DEFAULT_RSA_LENGTH = 2048


@dataclass
class ConfigVal(ABC):
    """Base class for configuration values."""

    def to_dict(self) -> dict:
        """Convert the configuration to a dictionary."""
        out = {}
        for x in fields(self):
            out[x.name] = getattr(self, x.name)
        return out


@dataclass
class KeyStashConfig(ConfigVal):
    """Configuration variables for the keystash.

    Attributes
    ----------
        path: Path to the YAML fixture file holding the PEM-encoded keys.
        Defaults to `data/keystash.yml` in the repository root.
        rsa_length: The modulus size of generated RSA keys. Defaults to `2048`.
        shuffle: If the loaded keys should be shuffled before they are handed out. Defaults to `True`.

    """

    path: str = DEFAULT_KEYSTASH_PATH
    rsa_length: int = DEFAULT_RSA_LENGTH
    shuffle: bool = True
