# docsign_core/service.py

"""
docsign_core.service
--------------------
End-to-end operations composed from the key store, codec and signature engine.

Signing writes the raw signature bytes (no header, no length prefix) to the
output path. Verification reports a cryptographic mismatch as
VerificationResult(is_valid=False); anything that prevents the verify step
from running (unknown key, unreadable file, malformed signature) raises.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from . import signing
from .algorithms import parse_algorithm
from .errors import EmptyPassword, UnsupportedFormat
from .keystore import KeyStore
from .logger import get_logger
from .storage import KeyDetails, KeyInfo, VerificationResult
from .utils import read_bytes, write_bytes

log = get_logger("DocSign.Service")


class SignatureFormat(Enum):
    DETACHED = "detached"

    @classmethod
    def parse(cls, text: Union[str, "SignatureFormat"]) -> "SignatureFormat":
        if isinstance(text, cls):
            return text
        try:
            return cls(str(text).lower())
        except ValueError:
            raise UnsupportedFormat(str(text)) from None


@dataclass
class SigningOptions:
    format: SignatureFormat = SignatureFormat.DETACHED

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SigningOptions":
        data = data or {}
        return cls(format=SignatureFormat.parse(data.get("format", SignatureFormat.DETACHED)))


class SigningService:
    def __init__(self, store: KeyStore):
        self.store = store

    # --- key management ---

    def generate_key_pair(self, name: str, algorithm: str, password: str) -> KeyDetails:
        log.info(f"[KEYGEN] generating key pair name='{name}' algorithm={algorithm}")
        if not password:
            raise EmptyPassword()
        return self.store.create(name, parse_algorithm(algorithm), password)

    def import_key_pair(self, name: str, key_path: str, password: str,
                        passphrase: Optional[str] = None) -> KeyDetails:
        log.info(f"[IMPORT] importing key pair name='{name}' from {key_path}")
        if not password:
            raise EmptyPassword()
        data = read_bytes(key_path, "key file")
        return self.store.import_key(name, data, password, passphrase)

    def list_keys(self) -> List[KeyInfo]:
        return self.store.list()

    def get_key_details(self, key_id: str) -> KeyDetails:
        return self.store.get(key_id)

    def delete_key(self, key_id: str) -> KeyInfo:
        return self.store.delete(key_id)

    # --- signing ---

    def sign_document(self, document_path: str, key_id: str, password: str, output_path: str,
                      options: Optional[SigningOptions] = None) -> None:
        log.info(f"[SIGN] signing '{document_path}' with key {key_id}")
        if not password:
            raise EmptyPassword()
        options = options or SigningOptions()
        if options.format is not SignatureFormat.DETACHED:
            raise UnsupportedFormat(str(options.format))

        algorithm, private_key = self.store.resolve_private(key_id, password)
        document = read_bytes(document_path, "document file")
        signature = signing.sign(algorithm, private_key, document)
        write_bytes(output_path, signature, "signature file")
        log.info(f"[SIGN] document signed with {algorithm}; signature saved to {output_path}")

    def verify_signature(self, document_path: str, signature_path: str, key_id: str) -> VerificationResult:
        log.info(f"[VERIFY] verifying '{document_path}' with key {key_id}")
        algorithm, public_key = self.store.resolve_public(key_id)
        document = read_bytes(document_path, "document file")
        signature = read_bytes(signature_path, "signature file")

        if signing.verify(algorithm, public_key, document, signature):
            log.info(f"[VERIFY] signature valid for {document_path}")
            return VerificationResult(is_valid=True)

        log.warning(f"[VERIFY] signature invalid for {document_path}")
        return VerificationResult(
            is_valid=False,
            error_message=f"Signature is invalid: {algorithm} verification failed for this document and key",
        )
