# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Utility functions for generating, serializing and loading the keys used by the test fixtures.

Only RSA and elliptic-curve keys are supported, because those are the only kinds the
keystash hands out.
"""

import logging
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from robot.api.deco import keyword, not_keyword

from sslhelper.config import DEFAULT_RSA_LENGTH
from sslhelper.convertutils import str_to_bytes
from sslhelper.data_objects import StashedKey
from sslhelper.exceptions import CorruptedKeyStash
from sslhelper.keyenums import KeyKind
from sslhelper.typingutils import StashKey

CURVE_NAMES_TO_INSTANCES = {
    "secp256r1": ec.SECP256R1(),  # NIST P-256
    "prime256v1": ec.SECP256R1(),  # NIST P-256 (alias)
    "secp384r1": ec.SECP384R1(),  # NIST P-384
    "secp521r1": ec.SECP521R1(),  # NIST P-521
}


@not_keyword
def get_curve_instance(curve_name: str) -> ec.EllipticCurve:
    """Retrieve an instance of an elliptic curve based on its name.

    :param curve_name: A string name of the elliptic curve to retrieve.
    :raises ValueError: If the specified curve name is not supported.
    :return: `cryptography.hazmat.primitives.ec` EllipticCurve instance.
    """
    if curve_name not in CURVE_NAMES_TO_INSTANCES:
        raise ValueError(f"The Curve: {curve_name} is not Supported!")

    return CURVE_NAMES_TO_INSTANCES[curve_name]


@keyword(name="Generate Key")
def generate_key(algorithm: str = "rsa", **params) -> StashKey:  # noqa: D417 for RF docs
    """Generate a `cryptography` RSA or EC private key.

    Arguments:
    ---------
        - `algorithm`: The key algorithm. Either "rsa" or one of "ecdsa", "ecdh", "ecc", "ec".
        Defaults to "rsa".
        - `**params`: Additional parameters specific to the algorithm.

    Additional Parameters:
    ----------------------
        - For "rsa":
            - length (int, str): The modulus size in bits. Default is 2048.
        - For the EC names:
            - curve (str): The curve name, e.g. "secp384r1". Default is `secp256r1`.

    Returns:
    -------
        - The generated private key.

    Raises:
    ------
        - `ValueError` if the algorithm or the curve is not supported.

    Examples:
    --------
    | ${private_key}= | Generate Key | algorithm=rsa | length=2048 |
    | ${private_key}= | Generate Key | algorithm=ecdsa | curve=secp384r1 |

    """
    algorithm = algorithm.lower()

    if algorithm == "rsa":
        length = int(params.get("length", DEFAULT_RSA_LENGTH))
        return rsa.generate_private_key(public_exponent=65537, key_size=length)

    if algorithm in {"ecdsa", "ecdh", "ecc", "ec"}:
        curve = params.get("curve", "secp256r1")
        return ec.generate_private_key(curve=get_curve_instance(curve))

    raise ValueError(f"Unsupported key algorithm: {algorithm}. Expected 'rsa' or 'ecdsa'.")


@not_keyword
def private_key_to_pem(private_key: Union[StashKey, StashedKey]) -> str:
    """Serialize a private key as an unencrypted PKCS#1 or SEC1 PEM string.

    :param private_key: The RSA or EC private key.
    :return: The PEM string.
    :raises InvalidKeyType: If the key is neither an RSA nor an EC private key.
    """
    return StashedKey.from_private_key(private_key).to_pem()


def _load_rsa_key(data: bytes) -> rsa.RSAPrivateKey:
    """Load a PEM private key which must be an RSA key."""
    private_key = serialization.load_pem_private_key(data, password=None)
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise ValueError(f"Expected an RSA private key, got: {type(private_key).__name__}")
    return private_key


def _load_ec_key(data: bytes) -> ec.EllipticCurvePrivateKey:
    """Load a PEM private key which must be an EC key."""
    private_key = serialization.load_pem_private_key(data, password=None)
    if not isinstance(private_key, ec.EllipticCurvePrivateKey):
        raise ValueError(f"Expected an EC private key, got: {type(private_key).__name__}")
    return private_key


@not_keyword
def load_stash_key(pem: Union[str, bytes]) -> StashedKey:
    """Parse one keystash entry, trying RSA first and falling back to EC.

    :param pem: The PEM-encoded private key.
    :return: The tagged key.
    :raises CorruptedKeyStash: If the entry is neither an RSA nor an EC private key.
    """
    data = str_to_bytes(pem)

    try:
        return StashedKey(kind=KeyKind.RSA, private_key=_load_rsa_key(data))
    except (ValueError, TypeError, UnsupportedAlgorithm) as err:
        logging.debug("Keystash entry is not an RSA key, trying EC: %s", err)

    try:
        return StashedKey(kind=KeyKind.EC, private_key=_load_ec_key(data))
    except (ValueError, TypeError, UnsupportedAlgorithm) as err:
        raise CorruptedKeyStash(
            "The keystash entry could not be parsed as an RSA or EC private key.", error_details=str(err)
        ) from err


@keyword(name="Public Key To PEM")
def public_key_to_pem(private_key: Union[StashKey, StashedKey]) -> str:  # noqa: D417 undocumented-param
    """Export the public key of an RSA or EC private key as a PEM string.

    The output is a `SubjectPublicKeyInfo` structure ("BEGIN PUBLIC KEY"), so it never
    contains any private key material.

    Arguments:
    ---------
        - `private_key`: The RSA or EC private key.

    Returns:
    -------
        - The PEM-encoded public key.

    Raises:
    ------
        - `InvalidKeyType`: If the key is neither an RSA nor an EC private key.

    Examples:
    --------
    | ${pub_pem}= | Public Key To PEM | ${private_key} |

    """
    stashed = StashedKey.from_private_key(private_key)

    if stashed.kind is KeyKind.RSA:
        public_key = stashed.private_key.public_key()
    else:
        # Rebuild a public-only key from the point, so the private scalar is gone.
        public_numbers = stashed.private_key.public_key().public_numbers()
        public_key = ec.EllipticCurvePublicNumbers(
            x=public_numbers.x, y=public_numbers.y, curve=public_numbers.curve
        ).public_key()

    data = public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return data.decode("ascii")


@not_keyword
def get_key_name(private_key: Union[StashKey, StashedKey]) -> str:
    """Return a short name for the key, e.g. "rsa2048" or "ecdsa-secp256r1"."""
    return StashedKey.from_private_key(private_key).name
