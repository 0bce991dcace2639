# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Verifying signatures of certificate signing requests with RSA and EC keys."""

import logging
from typing import Optional, Union

from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding
from robot.api.deco import keyword, not_keyword

from sslhelper.data_objects import StashedKey
from sslhelper.keyenums import KeyKind
from sslhelper.typingutils import StashKey


@not_keyword
def verify_signature(
    key: Union[StashKey, StashedKey],
    signature: bytes,
    data: bytes,
    hash_alg: Optional[hashes.HashAlgorithm],
) -> None:
    """Verify a digital signature with the public half of an RSA or EC private key.

    Key Types and Verification:
        - RSA: Verifies with the derived public key, using PKCS1v15 padding and the provided hash algorithm.
        - EC: Verifies using ECDSA with the provided hash algorithm.

    :param key: The private key whose public key is used to verify the signature.
    :param signature: The signature data.
    :param data: The original data that was signed.
    :param hash_alg: The hash algorithm used for signing.
    :raises InvalidSignature: If the signature is invalid.
    :raises InvalidKeyType: If the key is neither an RSA nor an EC private key.
    :raises ValueError: If no hash algorithm is given.
    """
    stashed = StashedKey.from_private_key(key)

    if hash_alg is None:
        raise ValueError(f"The {stashed.name} key requires a hash algorithm.")

    public_key = stashed.private_key.public_key()
    if stashed.kind is KeyKind.EC:
        public_key.verify(signature, data, ec.ECDSA(hash_alg))
    else:
        public_key.verify(signature, data, padding.PKCS1v15(), hash_alg)


@keyword(name="Verify CSR")
def verify_csr(  # noqa D417 undocumented-param
    csr: x509.CertificateSigningRequest, priv: Union[StashKey, StashedKey]
) -> bool:
    """Verify the self-signature of a CSR with the public half of a private key.

    Arguments:
    ---------
        - `csr`: The CSR to verify.
        - `priv`: The RSA or EC private key, which is expected to have signed the CSR.

    Returns:
    -------
        - `True` if the signature is valid for the key, `False` otherwise.

    Raises:
    ------
        - `InvalidKeyType`: If `priv` is neither an RSA nor an EC private key.

    Examples:
    --------
    | ${result}= | Verify CSR | ${csr} | ${private_key} |
    | Should Be True | ${result} |

    """
    stashed = StashedKey.from_private_key(priv)

    try:
        verify_signature(
            key=stashed,
            signature=csr.signature,
            data=csr.tbs_certrequest_bytes,
            hash_alg=csr.signature_hash_algorithm,
        )
    except InvalidSignature:
        logging.info("The CSR signature is invalid for the provided %s key.", stashed.name)
        return False

    return True
