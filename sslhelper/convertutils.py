# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Converting between `pyasn1` and `cryptography` CSR objects and between text and bytes.

The naming convention is:
convert_<objectname>_crypto_to_pyasn1 -> pyasn1 object
convert_<objectname>_pyasn1_to_crypto -> cryptography object
"""

from typing import Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from pyasn1.codec.der import decoder, encoder
from pyasn1_alt_modules import rfc6402
from robot.api.deco import not_keyword


@not_keyword
def str_to_bytes(value: Union[str, bytes]) -> bytes:
    """Convert a given string or byte input to bytes.

    :param value: The value to convert. Bytes are returned unchanged, strings are encoded as UTF-8.
    :return: The converted bytes object.
    :raises ValueError: If the input is neither a string nor bytes.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, bytes):
        return value
    raise ValueError(f"Input must be of type 'str' or 'bytes'. Received: {type(value)}")


@not_keyword
def convert_csr_pyasn1_to_crypto(csr: rfc6402.CertificationRequest) -> x509.CertificateSigningRequest:
    """Convert a pyasn1 `rfc6402.CertificationRequest` to a `cryptography` `x509.CertificateSigningRequest`.

    :param csr: The pyasn1 certification request to be converted.
    :return: The converted certification request.
    """
    return x509.load_der_x509_csr(encoder.encode(csr))


@not_keyword
def convert_csr_crypto_to_pyasn1(csr: x509.CertificateSigningRequest) -> rfc6402.CertificationRequest:
    """Convert a `cryptography` `x509.CertificateSigningRequest` to a pyasn1 `rfc6402.CertificationRequest`.

    :param csr: The `cryptography` certification request to be converted.
    :return: The decoded pyasn1 structure.
    :raises ValueError: If the DER data has a remainder after decoding.
    """
    der_data = csr.public_bytes(serialization.Encoding.DER)
    csr_asn1, rest = decoder.decode(der_data, asn1Spec=rfc6402.CertificationRequest())
    if rest != b"":
        raise ValueError("The decoding of `CertificationRequest` structure had a remainder!")
    return csr_asn1
