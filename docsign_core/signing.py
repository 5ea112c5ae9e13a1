# docsign_core/signing.py

"""
docsign_core.signing
--------------------
Stateless signature engine. One `SignatureScheme` per `Algorithm`:

| Algorithm          | Pre-processing     | Operation                     | Signature encoding      |
|--------------------|--------------------|-------------------------------|-------------------------|
| RSA-PKCS1-SHA256   | SHA-256 of document| PKCS#1 v1.5/SHA-256 on digest | raw, modulus length     |
| ECDSA-P256-SHA256  | SHA-256 of document| ECDSA(SHA-256) on digest      | fixed 64 bytes r||s     |
| Ed25519            | none               | direct sign of the message    | raw 64 bytes            |

The 32-byte document digest is the message handed to the scheme's own
SHA-256 primitive, matching signatures produced by earlier releases.

`verify` parses the signature bytes first; malformed input raises
SignatureParseError, a cryptographic mismatch returns False.
"""

from __future__ import annotations
from typing import Dict
import hashlib

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .algorithms import Algorithm
from .codec import PrivateKey, PublicKey
from .errors import SignatureParseError, UnsupportedAlgorithm
from .logger import get_logger

log = get_logger("DocSign.Signing")

P256_SCALAR_LEN = 32
P256_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
ED25519_SIGNATURE_LEN = 64


class SignatureScheme:
    algorithm: Algorithm

    def prepare(self, document: bytes) -> bytes:
        """Apply the algorithm's pre-processing to the document."""
        digest = self.algorithm.digest_name
        if digest is None:
            return document
        return hashlib.new(digest, document).digest()

    def sign(self, private_key: PrivateKey, document: bytes) -> bytes:
        raise NotImplementedError

    def verify(self, public_key: PublicKey, document: bytes, signature: bytes) -> bool:
        raise NotImplementedError


class RsaPkcs1Sha256(SignatureScheme):
    algorithm = Algorithm.RSA_PKCS1_SHA256

    def sign(self, private_key, document):
        return private_key.sign(self.prepare(document), padding.PKCS1v15(), hashes.SHA256())

    def verify(self, public_key, document, signature):
        expected = (public_key.key_size + 7) // 8
        if len(signature) != expected:
            raise SignatureParseError(
                f"Failed to parse signature bytes as RSA signature: expected {expected} bytes, got {len(signature)}"
            )
        try:
            public_key.verify(signature, self.prepare(document), padding.PKCS1v15(), hashes.SHA256())
            return True
        except InvalidSignature:
            return False


class EcdsaP256Sha256(SignatureScheme):
    algorithm = Algorithm.ECDSA_P256_SHA256

    def sign(self, private_key, document):
        der = private_key.sign(self.prepare(document), ec.ECDSA(hashes.SHA256()))
        r, s = decode_dss_signature(der)
        return r.to_bytes(P256_SCALAR_LEN, "big") + s.to_bytes(P256_SCALAR_LEN, "big")

    @staticmethod
    def parse(signature: bytes) -> bytes:
        """Convert a fixed-size r||s signature to the DER form the backend verifies."""
        if len(signature) != 2 * P256_SCALAR_LEN:
            raise SignatureParseError(
                f"Failed to parse signature bytes as ECDSA signature: expected "
                f"{2 * P256_SCALAR_LEN} bytes, got {len(signature)}"
            )
        r = int.from_bytes(signature[:P256_SCALAR_LEN], "big")
        s = int.from_bytes(signature[P256_SCALAR_LEN:], "big")
        if not (0 < r < P256_ORDER and 0 < s < P256_ORDER):
            raise SignatureParseError("Failed to parse signature bytes as ECDSA signature: scalar out of range")
        return encode_dss_signature(r, s)

    def verify(self, public_key, document, signature):
        der = self.parse(signature)
        try:
            public_key.verify(der, self.prepare(document), ec.ECDSA(hashes.SHA256()))
            return True
        except InvalidSignature:
            return False


class Ed25519(SignatureScheme):
    algorithm = Algorithm.ED25519

    def sign(self, private_key, document):
        return private_key.sign(self.prepare(document))

    def verify(self, public_key, document, signature):
        if len(signature) != ED25519_SIGNATURE_LEN:
            raise SignatureParseError(
                f"Failed to parse signature bytes as Ed25519 signature: expected "
                f"{ED25519_SIGNATURE_LEN} bytes, got {len(signature)}"
            )
        try:
            public_key.verify(signature, self.prepare(document))
            return True
        except InvalidSignature:
            return False


_SCHEMES: Dict[Algorithm, SignatureScheme] = {
    scheme.algorithm: scheme for scheme in (RsaPkcs1Sha256(), EcdsaP256Sha256(), Ed25519())
}


def get_scheme(algorithm: Algorithm) -> SignatureScheme:
    try:
        return _SCHEMES[algorithm]
    except KeyError:
        raise UnsupportedAlgorithm(str(algorithm)) from None


def sign(algorithm: Algorithm, private_key: PrivateKey, document: bytes) -> bytes:
    log.debug(f"[SIGN] algorithm={algorithm} bytes={len(document)}")
    return get_scheme(algorithm).sign(private_key, document)


def verify(algorithm: Algorithm, public_key: PublicKey, document: bytes, signature: bytes) -> bool:
    log.debug(f"[VERIFY] algorithm={algorithm} bytes={len(document)} sig={len(signature)}")
    return get_scheme(algorithm).verify(public_key, document, signature)
