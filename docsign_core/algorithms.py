# docsign_core/algorithms.py

"""
docsign_core.algorithms
-----------------------
Canonical enumeration of the supported signature algorithms.

The display name is what gets persisted in key metadata; `parse` accepts it
back along with a handful of common aliases ("RSA", "P256", ...), ignoring
case, hyphens and underscores.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Optional

from .errors import UnsupportedAlgorithm


class Algorithm(Enum):
    RSA_PKCS1_SHA256 = "RSA-PKCS1-SHA256"
    ECDSA_P256_SHA256 = "ECDSA-P256-SHA256"
    ED25519 = "Ed25519"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def digest_name(self) -> Optional[str]:
        """Pre-hash applied to the document before signing, or None for direct signing."""
        return _DIGESTS[self]

    @classmethod
    def parse(cls, text: str) -> "Algorithm":
        return parse_algorithm(text)


_DIGESTS: Dict[Algorithm, Optional[str]] = {
    Algorithm.RSA_PKCS1_SHA256: "sha256",
    Algorithm.ECDSA_P256_SHA256: "sha256",
    Algorithm.ED25519: None,
}

_ALIASES: Dict[str, Algorithm] = {
    # RSA
    "RSAPKCS1SHA256": Algorithm.RSA_PKCS1_SHA256,
    "RSA2048": Algorithm.RSA_PKCS1_SHA256,
    "RSA": Algorithm.RSA_PKCS1_SHA256,
    # ECDSA
    "ECDSAP256SHA256": Algorithm.ECDSA_P256_SHA256,
    "P256": Algorithm.ECDSA_P256_SHA256,
    "ECDSAP256": Algorithm.ECDSA_P256_SHA256,
    "ECP256": Algorithm.ECDSA_P256_SHA256,
    # Ed25519
    "ED25519": Algorithm.ED25519,
}


def normalize(text: str) -> str:
    return text.upper().replace("-", "").replace("_", "")


def parse_algorithm(text: str) -> Algorithm:
    if isinstance(text, Algorithm):
        return text
    alg = _ALIASES.get(normalize(text or ""))
    if alg is None:
        raise UnsupportedAlgorithm(text)
    return alg


def display_name(alg: Algorithm) -> str:
    return alg.value
