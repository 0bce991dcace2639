# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Type aliases for the keys handled by the keystash and the CSR helpers."""

from typing import Union

from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

# Every key stored in the keystash is one of these.
StashKey = Union[RSAPrivateKey, EllipticCurvePrivateKey]
