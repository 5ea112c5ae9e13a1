# docsign_core/keystore.py

"""
docsign_core.keystore
---------------------
Durable catalog of signing keys.

Layout under the injected base directory:

    key_metadata.json          every KeyRecord, rewritten as a whole list
    keys/<uuid>.pub.pem        SPKI public key, "PUBLIC KEY" PEM
    keys/<uuid>.key.enc        PKCS#8 DER private key, envelope-encrypted

Writers (create / import / delete) hold a single store-wide lock for the
whole read-modify-write of the metadata list. Readers never mutate metadata.
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Tuple
import binascii
import threading

from . import codec, crypto
from .algorithms import Algorithm, parse_algorithm
from .constants import KEY_STORAGE_DIR, PRIVATE_KEY_SUFFIX, PUBLIC_KEY_SUFFIX, SALT_LEN
from .errors import EmptyPassword, KeyDecodeError, KeyNotFound, StorageIOError
from .logger import get_logger
from .storage import KeyDetails, KeyInfo, KeyRecord, StorageProvider, load_storage_provider
from .utils import (
    ensure_dir, hex_decode, hex_encode, new_id, normalize_id, now_ts,
    read_bytes, read_text, remove_file, wipe, write_bytes,
)

log = get_logger("DocSign.KeyStore")


class KeyStore:
    def __init__(self, base_dir, storage: Optional[StorageProvider] = None):
        self.base_dir = ensure_dir(base_dir)
        self.keys_dir = ensure_dir(self.base_dir / KEY_STORAGE_DIR)
        self.storage = storage or load_storage_provider(self.base_dir)
        self._write_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _canonical_id(key_id) -> str:
        try:
            return normalize_id(key_id)
        except ValueError:
            raise KeyNotFound(str(key_id)) from None

    def _find(self, key_id: str) -> KeyRecord:
        key_id = self._canonical_id(key_id)
        for rec in self.storage.load_records():
            if rec.key_id == key_id:
                return rec
        raise KeyNotFound(key_id)

    def _key_path(self, relative: str) -> Path:
        root = self.keys_dir.resolve()
        path = (root / relative).resolve()
        if path.parent != root:
            raise StorageIOError(relative, "Key file path escapes the key directory")
        return path

    @staticmethod
    def _salt(rec: KeyRecord) -> bytes:
        try:
            salt = hex_decode(rec.salt_hex)
        except (binascii.Error, ValueError) as e:
            raise KeyDecodeError(f"Failed to decode salt from hex for key {rec.key_id}") from e
        if len(salt) != SALT_LEN:
            raise KeyDecodeError(f"Invalid salt length for key {rec.key_id}: {len(salt)} bytes")
        return salt

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def create(self, name: str, algorithm: Algorithm, password: str) -> KeyDetails:
        # checked before the (possibly slow) asymmetric key generation
        if not password:
            raise EmptyPassword()
        algorithm = parse_algorithm(algorithm)
        pair = codec.generate(algorithm)
        return self._store(name, algorithm, pair.private_der, pair.public_pem, password)

    def import_key(self, name: str, private_key_data: bytes, password: str,
                   passphrase: Optional[str] = None) -> KeyDetails:
        if not password:
            raise EmptyPassword()
        sk = codec.load_importable_private_key(private_key_data, passphrase)
        algorithm = codec.algorithm_for_key(sk)
        log.info(f"[IMPORT] detected {algorithm} key for '{name}'")
        return self._store(name, algorithm, codec.encode_private(sk),
                           codec.encode_public(sk.public_key()), password)

    def _store(self, name: str, algorithm: Algorithm, private_der: bytes,
               public_pem: str, password: str) -> KeyDetails:
        salt = crypto.new_salt()
        blob = crypto.encrypt(private_der, password, salt)

        key_id = new_id()
        rec = KeyRecord(
            key_id=key_id,
            name=name,
            algorithm=algorithm.display_name,
            public_key_pem_path=f"{key_id}{PUBLIC_KEY_SUFFIX}",
            encrypted_private_key_path=f"{key_id}{PRIVATE_KEY_SUFFIX}",
            salt_hex=hex_encode(salt),
            created_at=now_ts(),
        )
        pub_path = self.keys_dir / rec.public_key_pem_path
        priv_path = self.keys_dir / rec.encrypted_private_key_path

        with self._write_lock:
            try:
                write_bytes(pub_path, public_pem.encode("ascii"), "public key")
                write_bytes(priv_path, blob, "encrypted private key")
                records = self.storage.load_records()
                records.append(rec)
                self.storage.save_records(records)
            except Exception:
                # no record references these files yet
                remove_file(pub_path)
                remove_file(priv_path)
                raise

        log.info(f"[KEYGEN] stored {algorithm} key pair id={key_id} name='{name}'")
        return KeyDetails(info=rec.info(), public_key_pem=public_pem)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list(self) -> List[KeyInfo]:
        return [rec.info() for rec in self.storage.load_records()]

    def get(self, key_id: str) -> KeyDetails:
        rec = self._find(key_id)
        pem = read_text(self._key_path(rec.public_key_pem_path), "public key file")
        return KeyDetails(info=rec.info(), public_key_pem=pem)

    def resolve_public(self, key_id: str) -> Tuple[Algorithm, codec.PublicKey]:
        rec = self._find(key_id)
        algorithm = parse_algorithm(rec.algorithm)
        pem = read_text(self._key_path(rec.public_key_pem_path), "public key file")
        return algorithm, codec.decode_public(algorithm, pem)

    def resolve_private(self, key_id: str, password: str) -> Tuple[Algorithm, codec.PrivateKey]:
        if not password:
            raise EmptyPassword()
        rec = self._find(key_id)
        algorithm = parse_algorithm(rec.algorithm)
        salt = self._salt(rec)
        blob = read_bytes(self._key_path(rec.encrypted_private_key_path), "encrypted private key file")

        der = bytearray(crypto.decrypt(blob, password, salt))
        try:
            return algorithm, codec.decode_private(algorithm, der)
        finally:
            wipe(der)

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    def delete(self, key_id: str) -> KeyInfo:
        """Drop the metadata entry first, then the files, so no record ever points at missing files."""
        key_id = self._canonical_id(key_id)
        with self._write_lock:
            records = self.storage.load_records()
            rec = next((r for r in records if r.key_id == key_id), None)
            if rec is None:
                raise KeyNotFound(key_id)
            self.storage.save_records([r for r in records if r.key_id != key_id])

        for relative in (rec.public_key_pem_path, rec.encrypted_private_key_path):
            try:
                remove_file(self._key_path(relative))
            except StorageIOError as e:
                # metadata is already consistent; the file is merely orphaned
                log.warning(f"[DELETE] could not remove {relative}: {e}")
        log.info(f"[DELETE] removed key id={key_id}")
        return rec.info()
