# docsign_core/errors.py

"""
docsign_core.errors
-------------------
Structured error kinds raised by the core.

Every component raises one of these; only the command boundary
(docsign_core.commands) flattens them into plain strings.
"""

from __future__ import annotations
from typing import Optional


class DocSignError(Exception):
    """Base class for every error raised by docsign_core."""


class EmptyPassword(DocSignError):
    def __init__(self):
        super().__init__("Password cannot be empty.")


class UnsupportedAlgorithm(DocSignError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unsupported or unrecognized signature algorithm: {text}")


class UnsupportedFormat(DocSignError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unsupported signature format: {text}")


class KeyNotFound(DocSignError):
    def __init__(self, key_id: str):
        self.key_id = key_id
        super().__init__(f"Key with ID {key_id} not found")


class TruncatedCiphertext(DocSignError):
    def __init__(self):
        super().__init__("Encrypted data is too short (missing nonce)")


class DecryptionFailed(DocSignError):
    # wrong password and tampered ciphertext are deliberately indistinguishable
    def __init__(self):
        super().__init__("Failed to decrypt private key (check password)")


class KeyDecodeError(DocSignError):
    pass


class StorageIOError(DocSignError):
    def __init__(self, path, reason: Optional[str] = None):
        self.path = str(path)
        self.reason = reason
        msg = f"I/O error on {self.path}"
        if reason:
            msg = f"{reason}: {self.path}"
        super().__init__(msg)


class SignatureParseError(DocSignError):
    pass
