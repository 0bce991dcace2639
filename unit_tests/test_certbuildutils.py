# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

import unittest

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.x509.oid import NameOID

from sslhelper.certbuildutils import csr_to_pem, generate_csr, get_common_name_string_type, parse_csr
from sslhelper.convertutils import convert_csr_crypto_to_pyasn1, convert_csr_pyasn1_to_crypto
from sslhelper.exceptions import InvalidKeyType
from sslhelper.keyutils import generate_key, public_key_to_pem
from unit_tests.utils_for_test import generate_ec_key


class TestGenerateCSR(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.rsa_key = generate_key("rsa")
        cls.ec_key = generate_ec_key()

    def test_subject_is_common_name(self):
        """
        GIVEN a common name and an RSA key.
        WHEN the CSR is generated.
        THEN the subject consists only of the common name.
        """
        csr = generate_csr("example.com", self.rsa_key)
        attributes = list(csr.subject)
        self.assertEqual(len(attributes), 1)
        self.assertEqual(attributes[0].oid, NameOID.COMMON_NAME)
        self.assertEqual(attributes[0].value, "example.com")

    def test_common_name_is_utf8_string(self):
        """
        GIVEN a common name with non-ASCII characters.
        WHEN the CSR is generated.
        THEN the common name is encoded as `UTF8String`.
        """
        csr = generate_csr("Hans Müller", self.ec_key)
        self.assertEqual(get_common_name_string_type(csr), "utf8String")
        self.assertEqual(csr.subject.get_attributes_for_oid(NameOID.COMMON_NAME)[0].value, "Hans Müller")

    def test_signed_with_sha256(self):
        """
        GIVEN an RSA and an EC key.
        WHEN the CSRs are generated.
        THEN both are signed with SHA-256 and the signature is valid.
        """
        for key in (self.rsa_key, self.ec_key):
            csr = generate_csr("example.com", key)
            self.assertIsInstance(csr.signature_hash_algorithm, hashes.SHA256)
            self.assertTrue(csr.is_signature_valid)

    def test_public_key_from_private_key(self):
        """
        GIVEN an EC key.
        WHEN the CSR is generated.
        THEN the CSR carries the public key of the private key.
        """
        csr = generate_csr("example.com", self.ec_key)
        pem = csr.public_key().public_bytes(
            encoding=serialization.Encoding.PEM, format=serialization.PublicFormat.SubjectPublicKeyInfo
        )
        self.assertEqual(pem.decode("ascii"), public_key_to_pem(self.ec_key))

    def test_invalid_key_type(self):
        """
        GIVEN an Ed25519 key.
        WHEN a CSR is generated.
        THEN an `InvalidKeyType` exception is raised.
        """
        with self.assertRaises(InvalidKeyType):
            generate_csr("example.com", ed25519.Ed25519PrivateKey.generate())

    def test_pem_and_der_round_trip(self):
        """
        GIVEN a generated CSR.
        WHEN it is encoded as PEM and DER and parsed again.
        THEN the parsed CSRs are equal to the original one.
        """
        csr = generate_csr("example.com", self.ec_key)
        pem = csr_to_pem(csr)
        self.assertTrue(pem.startswith(b"-----BEGIN CERTIFICATE REQUEST-----"))

        self.assertEqual(parse_csr(pem), csr)
        self.assertEqual(parse_csr(pem.decode("ascii")), csr)
        self.assertEqual(parse_csr(csr.public_bytes(serialization.Encoding.DER)), csr)

    def test_convert_to_pyasn1_and_back(self):
        """
        GIVEN a generated CSR.
        WHEN it is converted to a `pyasn1` structure and back.
        THEN the version is 0 and the converted CSR is equal to the original one.
        """
        csr = generate_csr("example.com", self.rsa_key)
        csr_asn1 = convert_csr_crypto_to_pyasn1(csr)
        self.assertEqual(int(csr_asn1["certificationRequestInfo"]["version"]), 0)
        self.assertEqual(convert_csr_pyasn1_to_crypto(csr_asn1), csr)

    def test_common_name_missing(self):
        """
        GIVEN a CSR without a common name in the subject.
        WHEN the common name string type is requested.
        THEN a `ValueError` is raised.
        """
        subject = x509.Name([x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example Org")])
        csr = x509.CertificateSigningRequestBuilder().subject_name(subject).sign(self.ec_key, hashes.SHA256())
        with self.assertRaises(ValueError):
            get_common_name_string_type(csr)


if __name__ == "__main__":
    unittest.main()
