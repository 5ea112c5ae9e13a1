# docsign_core/storage/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from docsign_core.utils import now_ts


@dataclass
class KeyRecord:
    """
    Persisted metadata for one key pair.

    Paths are relative to the key storage directory. `salt_hex` is the
    per-key PBKDF2 salt; it is not secret but never leaves the store.
    """
    key_id: str
    name: str
    algorithm: str            # canonical display name, e.g. "Ed25519"
    public_key_pem_path: str
    encrypted_private_key_path: str
    salt_hex: str
    created_at: str = field(default_factory=now_ts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyId": self.key_id,
            "name": self.name,
            "publicKeyPemPath": self.public_key_pem_path,
            "encryptedPrivateKeyPath": self.encrypted_private_key_path,
            "algorithm": self.algorithm,
            "createdAt": self.created_at,
            "saltHex": self.salt_hex,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyRecord":
        return cls(
            key_id=data["keyId"],
            name=data.get("name", ""),
            algorithm=data["algorithm"],
            public_key_pem_path=data["publicKeyPemPath"],
            encrypted_private_key_path=data["encryptedPrivateKeyPath"],
            salt_hex=data["saltHex"],
            created_at=data["createdAt"],
        )

    def info(self) -> "KeyInfo":
        return KeyInfo(key_id=self.key_id, name=self.name, algorithm=self.algorithm, created_at=self.created_at)


@dataclass
class KeyInfo:
    """Externally safe view of a key: no paths, no salt."""
    key_id: str
    name: str
    algorithm: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyId": self.key_id,
            "name": self.name,
            "algorithm": self.algorithm,
            "createdAt": self.created_at,
        }


@dataclass
class KeyDetails:
    info: KeyInfo
    public_key_pem: str

    def to_dict(self) -> Dict[str, Any]:
        return {"info": self.info.to_dict(), "publicKeyPem": self.public_key_pem}


@dataclass
class VerificationResult:
    is_valid: bool
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"isValid": self.is_valid}
        if self.error_message is not None:
            d["errorMessage"] = self.error_message
        return d
