# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Logic to build, encode and inspect certificate signing requests (CSRs)."""

import logging
from typing import Union

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.x509.oid import NameOID
from pyasn1.codec.der import decoder
from pyasn1_alt_modules import rfc5280
from robot.api.deco import keyword, not_keyword

from sslhelper import convertutils
from sslhelper.data_objects import StashedKey
from sslhelper.typingutils import StashKey


@not_keyword
def prepare_common_name(common_name: str) -> x509.Name:
    """Prepare a subject which consists of exactly one common name attribute.

    The value is encoded as `UTF8String`.

    :param common_name: The plain common name value, e.g. "example.com" (not "CN=example.com").
    :return: The `x509.Name` object.
    """
    # `UTF8String` is the default encoding for the common name attribute.
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])


@keyword(name="Generate CSR")
def generate_csr(  # noqa D417 undocumented-param
    common_name: str, private_key: Union[StashKey, StashedKey]
) -> x509.CertificateSigningRequest:
    """Build a PKCS#10 Certification Request (CSR) for a common name and sign it with SHA-256.

    Arguments:
    ---------
        - `common_name`: The common name placed as `CN=<common_name>` in the subject.
        - `private_key`: The RSA or EC private key. The public key of the CSR is set from it and
        it signs the CSR.

    Returns:
    -------
        - The signed `x509.CertificateSigningRequest`.

    Raises:
    ------
        - `InvalidKeyType`: If the key is neither an RSA nor an EC private key.

    Examples:
    --------
    | ${csr}= | Generate CSR | example.com | ${private_key} |

    """
    stashed = StashedKey.from_private_key(private_key)

    builder = x509.CertificateSigningRequestBuilder().subject_name(prepare_common_name(common_name))
    csr = builder.sign(stashed.private_key, hashes.SHA256())
    logging.info("Generated CSR for CN=%s with a %s key.", common_name, stashed.name)
    return csr


@keyword(name="CSR To PEM")
def csr_to_pem(csr: x509.CertificateSigningRequest) -> bytes:  # noqa D417 undocumented-param
    """Encode a CSR as PEM.

    Arguments:
    ---------
        - `csr`: The CSR to encode.

    Returns:
    -------
        - The PEM-encoded CSR as bytes.

    Examples:
    --------
    | ${pem}= | CSR To PEM | ${csr} |

    """
    return csr.public_bytes(serialization.Encoding.PEM)


@keyword(name="Parse CSR")
def parse_csr(data: Union[str, bytes]) -> x509.CertificateSigningRequest:  # noqa D417 undocumented-param
    """Parse a PEM- or DER-encoded CSR.

    Arguments:
    ---------
        - `data`: The encoded CSR. PEM is detected by its armour, everything else is treated as DER.

    Returns:
    -------
        - The parsed `x509.CertificateSigningRequest`.

    Raises:
    ------
        - `ValueError`: If the data is not a valid CSR.

    Examples:
    --------
    | ${csr}= | Parse CSR | ${pem_data} |

    """
    data = convertutils.str_to_bytes(data)
    if b"-----BEGIN" in data:
        return x509.load_pem_x509_csr(data)
    return x509.load_der_x509_csr(data)


@not_keyword
def get_common_name_string_type(csr: x509.CertificateSigningRequest) -> str:
    """Return the ASN.1 string type used for the common name in the CSR subject.

    :param csr: The CSR to inspect.
    :return: The name of the `DirectoryString` choice, e.g. "utf8String" or "printableString".
    :raises ValueError: If the subject has no common name attribute.
    """
    csr_asn1 = convertutils.convert_csr_crypto_to_pyasn1(csr)
    subject = csr_asn1["certificationRequestInfo"]["subject"]

    for rdn in subject["rdnSequence"]:
        for attribute in rdn:
            if attribute["type"] != rfc5280.id_at_commonName:
                continue
            value, _ = decoder.decode(attribute["value"], asn1Spec=rfc5280.X520CommonName())
            return value.getName()

    raise ValueError("The CSR subject does not contain a common name.")
