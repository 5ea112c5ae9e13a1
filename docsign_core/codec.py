# docsign_core/codec.py

"""
docsign_core.codec
------------------
Key generation and portable encodings for every supported algorithm.

- private keys: unencrypted PKCS#8 DER (only ever stored inside the envelope cipher)
- public keys:  SubjectPublicKeyInfo DER wrapped in a "PUBLIC KEY" PEM, LF line endings

Decoded keys are `cryptography` key objects; they live only for the duration
of a signing or verification call.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
import re

from cryptography.exceptions import UnsupportedAlgorithm as _BackendUnsupported
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from .algorithms import Algorithm
from .constants import PUBLIC_KEY_PEM_LABEL, RSA_KEY_SIZE, RSA_PUBLIC_EXPONENT
from .errors import KeyDecodeError
from .logger import get_logger

log = get_logger("DocSign.Codec")

PrivateKey = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey, ed25519.Ed25519PrivateKey]
PublicKey = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey, ed25519.Ed25519PublicKey]

_PEM_BEGIN = re.compile(r"-----BEGIN ([A-Z0-9 ]+)-----")


@dataclass
class KeyPairEncoding:
    private_der: bytes
    public_pem: str


# --------- generation ----------
def generate_private_key(algorithm: Algorithm) -> PrivateKey:
    if algorithm is Algorithm.RSA_PKCS1_SHA256:
        log.debug("Generating RSA-2048 key pair")
        return rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=RSA_KEY_SIZE)
    if algorithm is Algorithm.ECDSA_P256_SHA256:
        log.debug("Generating ECDSA P-256 key pair")
        return ec.generate_private_key(ec.SECP256R1())
    if algorithm is Algorithm.ED25519:
        log.debug("Generating Ed25519 key pair")
        return ed25519.Ed25519PrivateKey.generate()
    raise KeyDecodeError(f"No key generator for {algorithm}")


def generate(algorithm: Algorithm) -> KeyPairEncoding:
    sk = generate_private_key(algorithm)
    return KeyPairEncoding(private_der=encode_private(sk), public_pem=encode_public(sk.public_key()))


# --------- encoding ----------
def encode_private(sk: PrivateKey) -> bytes:
    return sk.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def encode_public(pk: PublicKey) -> str:
    pem = pk.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return pem.decode("ascii")


# --------- algorithm checks ----------
def algorithm_for_key(key: Union[PrivateKey, PublicKey]) -> Algorithm:
    """Infer the signature algorithm a key belongs to, rejecting anything we cannot sign with."""
    if isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        if key.key_size < RSA_KEY_SIZE:
            raise KeyDecodeError(f"RSA key too small: {key.key_size} bits (minimum {RSA_KEY_SIZE})")
        return Algorithm.RSA_PKCS1_SHA256
    if isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        if not isinstance(key.curve, ec.SECP256R1):
            raise KeyDecodeError(f"Unsupported elliptic curve: {key.curve.name}")
        return Algorithm.ECDSA_P256_SHA256
    if isinstance(key, (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey)):
        return Algorithm.ED25519
    raise KeyDecodeError(f"Unsupported key type: {type(key).__name__}")


def _expect(algorithm: Algorithm, key, kind: str):
    try:
        actual = algorithm_for_key(key)
    except KeyDecodeError as e:
        raise KeyDecodeError(f"Failed to parse {kind} as {algorithm} key: {e}") from None
    if actual is not algorithm:
        raise KeyDecodeError(f"Failed to parse {kind} as {algorithm} key: found {actual} key")
    return key


# --------- decoding ----------
def decode_private(algorithm: Algorithm, der: Union[bytes, bytearray]) -> PrivateKey:
    try:
        sk = serialization.load_der_private_key(bytes(der), password=None)
    except (ValueError, TypeError, _BackendUnsupported) as e:
        raise KeyDecodeError(f"Failed to parse decrypted data as {algorithm} private key") from e
    return _expect(algorithm, sk, "private key")


def pem_label(pem_text: str) -> Optional[str]:
    m = _PEM_BEGIN.search(pem_text)
    return m.group(1) if m else None


def decode_public(algorithm: Algorithm, pem_text: str) -> PublicKey:
    label = pem_label(pem_text)
    if label is None:
        raise KeyDecodeError("Failed to decode public key PEM: no PEM header found")
    if label != PUBLIC_KEY_PEM_LABEL:
        raise KeyDecodeError(
            f"Invalid PEM label for public key: expected '{PUBLIC_KEY_PEM_LABEL}', found '{label}'"
        )
    try:
        pk = serialization.load_pem_public_key(pem_text.encode("ascii"))
    except (ValueError, UnicodeEncodeError, _BackendUnsupported) as e:
        raise KeyDecodeError(f"Failed to parse SPKI as {algorithm} public key") from e
    return _expect(algorithm, pk, "public key")


def load_importable_private_key(data: bytes, passphrase: Optional[str] = None) -> PrivateKey:
    """Load an existing private key (PEM or DER, PKCS#8 or traditional) for import."""
    password = passphrase.encode("utf-8") if passphrase else None
    loader = serialization.load_pem_private_key if b"-----BEGIN" in data else serialization.load_der_private_key
    try:
        sk = loader(data, password=password)
    except TypeError as e:
        # raised for a missing or superfluous passphrase
        raise KeyDecodeError(f"Failed to load private key: {e}") from e
    except (ValueError, _BackendUnsupported) as e:
        raise KeyDecodeError("Failed to load private key (malformed data or wrong passphrase)") from e
    algorithm_for_key(sk)
    return sk
