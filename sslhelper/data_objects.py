# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Dataclass objects for the keys handed out by the keystash."""

from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives import serialization

from sslhelper.keyenums import KeyKind
from sslhelper.typingutils import StashKey


@dataclass(frozen=True)
class StashedKey:
    """A private key tagged with its kind.

    Attributes:
        kind: Whether the key is an RSA or an EC key.
        private_key: The `cryptography` private key object.

    """

    kind: KeyKind
    private_key: StashKey

    @staticmethod
    def from_private_key(key: Union[StashKey, "StashedKey"]) -> "StashedKey":
        """Wrap a private key, classifying it once.

        :param key: The private key (or an already tagged key).
        :return: The tagged key.
        :raises InvalidKeyType: If the key is neither an RSA nor an EC private key.
        """
        if isinstance(key, StashedKey):
            return key
        return StashedKey(kind=KeyKind.from_key(key), private_key=key)

    @property
    def name(self) -> str:
        """Return a short name, e.g. "rsa2048" or "ecdsa-secp384r1"."""
        if self.kind is KeyKind.RSA:
            return f"rsa{self.private_key.key_size}"
        return f"ecdsa-{self.private_key.curve.name}"

    def to_pem(self) -> str:
        """Serialize the key as an unencrypted PKCS#1 (RSA) or SEC1 (EC) PEM string."""
        data = self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return data.decode("ascii")
