# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Contains Custom Exceptions for the SSL helper fixtures."""

from typing import List, Optional, Union


class SSLHelperError(Exception):
    """Base class for SSL helper errors."""

    error_details: List[str]

    def __init__(self, message: str, error_details: Optional[Union[List[str], str]] = None):
        """Initialize the exception with the message.

        :param message: The message to display.
        :param error_details: Additional details about the error.
        """
        self.message = message
        if error_details is None:
            self.error_details = []
        elif isinstance(error_details, str):
            self.error_details = [error_details]
        else:
            self.error_details = list(error_details)
        super().__init__(message)

    def get_error_details(self) -> List[str]:
        """Return the error details."""
        return self.error_details


class InvalidKeyType(SSLHelperError, ValueError):
    """Raised when a key is neither an RSA nor an EC private key."""

    def __init__(self, key: object, extra_info: str = ""):
        """Initialize the exception with the offending key.

        :param key: The unsupported key object.
        :param extra_info: Additional information, e.g. which argument was checked.
        """
        self.key_type = type(key).__name__
        message = f"Unsupported key type: {self.key_type}. Expected an RSA or EC private key."
        if extra_info:
            message = f"{message} {extra_info}"
        super().__init__(message)


class CorruptedKeyStash(SSLHelperError):
    """Raised when the keystash fixture file contains an entry which is neither an RSA nor an EC key."""
