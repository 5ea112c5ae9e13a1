from __future__ import annotations
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
import os

from .constants import AES_KEY_LEN, NONCE_LEN, PBKDF2_ITERATIONS, SALT_LEN
from .errors import DecryptionFailed, EmptyPassword, TruncatedCiphertext
from .logger import get_logger

"""
docsign_core.crypto
-------------------
Envelope cipher protecting private keys at rest:

- PBKDF2-HMAC-SHA256 (100k iterations) derives a 256-bit key from password + salt
- AES-256-GCM encrypts the payload with a fresh 96-bit nonce, no AAD
- Blob layout: ciphertext||tag||nonce (nonce appended, not prepended)

Salts are per key and stored in plaintext next to the metadata; they need
not be secret.
"""

log = get_logger("DocSign.Crypto")


def new_salt() -> bytes:
    return os.urandom(SALT_LEN)


def derive_key(password: str, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=AES_KEY_LEN,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(password.encode("utf-8"))  # 256-bit AEAD key


# --------- AES-GCM (encrypt/decrypt) ----------
def encrypt(plaintext: bytes, password: str, salt: bytes) -> bytes:
    if not password:
        raise EmptyPassword()
    aes = AESGCM(derive_key(password, salt))
    nonce = os.urandom(NONCE_LEN)
    ct = aes.encrypt(nonce, bytes(plaintext), None)
    log.debug(f"[ENCRYPT] {len(plaintext)} bytes -> {len(ct) + NONCE_LEN} bytes")
    return ct + nonce


def decrypt(blob: bytes, password: str, salt: bytes) -> bytes:
    if not password:
        raise EmptyPassword()
    if len(blob) < NONCE_LEN:
        raise TruncatedCiphertext()
    ct, nonce = blob[:-NONCE_LEN], blob[-NONCE_LEN:]
    aes = AESGCM(derive_key(password, salt))
    try:
        return aes.decrypt(nonce, ct, None)
    except InvalidTag:
        log.warning("[DECRYPT] authentication failed")
        raise DecryptionFailed() from None
