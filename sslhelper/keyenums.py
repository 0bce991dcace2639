# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Enums for the key kinds which can be stored in the keystash."""

import enum
from typing import Union

from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from sslhelper.exceptions import InvalidKeyType


class KeyKind(enum.Enum):
    """The kind of private key a `StashedKey` wraps."""

    RSA = "rsa"
    EC = "ec"

    @staticmethod
    def from_key(key: object) -> "KeyKind":
        """Classify a private key.

        :param key: The private key to classify.
        :return: The matching `KeyKind`.
        :raises InvalidKeyType: If the key is neither an RSA nor an EC private key.
        """
        # Only place where the concrete key class is inspected.
        if isinstance(key, RSAPrivateKey):
            return KeyKind.RSA
        if isinstance(key, EllipticCurvePrivateKey):
            return KeyKind.EC
        raise InvalidKeyType(key)

    @staticmethod
    def get(value: Union[str, "KeyKind"]) -> "KeyKind":
        """Return the `KeyKind` for a name (case-insensitive).

        :param value: The name, e.g. "rsa" or "EC".
        :return: The corresponding enum member.
        :raises ValueError: If the value does not match any member.
        """
        if isinstance(value, KeyKind):
            return value

        try:
            return KeyKind[value.upper()]
        except KeyError as err:
            names = ", ".join(member.value for member in KeyKind)
            raise ValueError(f"'{value}' is not a valid KeyKind. Available values are: {names}.") from err
