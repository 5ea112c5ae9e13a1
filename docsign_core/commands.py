# docsign_core/commands.py

"""
docsign_core.commands
---------------------
Boundary adapter between a host front-end and the signing service.

Commands use the camelCase names and parameters of the host invocation
contract and always return a JSON-able dict:

    {"ok": True,  "data": ...}
    {"ok": False, "error": "<human readable message>"}

This is the only place structured DocSignError values are flattened to text.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Optional
import inspect

from .errors import DocSignError
from .logger import get_logger
from .service import SigningOptions, SigningService

log = get_logger("DocSign.Commands")


class CommandDispatcher:
    def __init__(self, service: SigningService):
        self.service = service
        self._commands: Dict[str, Callable[..., Any]] = {
            "generateKeyPair": self.generate_key_pair,
            "importKeyPair": self.import_key_pair,
            "listKeys": self.list_keys,
            "getKeyDetails": self.get_key_details,
            "deleteKey": self.delete_key,
            "signDocument": self.sign_document,
            "verifySignature": self.verify_signature,
        }

    @property
    def commands(self):
        return sorted(self._commands)

    def invoke(self, command: str, **params) -> Dict[str, Any]:
        handler = self._commands.get(command)
        if handler is None:
            return {"ok": False, "error": f"Unknown command: {command}"}
        try:
            inspect.signature(handler).bind(**params)
        except TypeError as e:
            log.error(f"[CMD] {command} rejected parameters: {e}")
            return {"ok": False, "error": f"Invalid parameters for {command}: {e}"}
        try:
            return {"ok": True, "data": handler(**params)}
        except DocSignError as e:
            log.error(f"[CMD] {command} failed: {e}")
            return {"ok": False, "error": str(e)}
        except Exception as e:
            log.exception(f"[CMD] {command} crashed")
            return {"ok": False, "error": f"Internal error: {type(e).__name__}"}

    # ------------------------------------------------------------------
    # Command handlers (camelCase parameters, camelCase results)
    # ------------------------------------------------------------------
    def generate_key_pair(self, name: str, algorithm: str, password: str):
        return self.service.generate_key_pair(name, algorithm, password).to_dict()

    def import_key_pair(self, name: str, keyPath: str, password: str, passphrase: Optional[str] = None):
        return self.service.import_key_pair(name, keyPath, password, passphrase).to_dict()

    def list_keys(self):
        return [info.to_dict() for info in self.service.list_keys()]

    def get_key_details(self, keyId: str):
        return self.service.get_key_details(keyId).to_dict()

    def delete_key(self, keyId: str):
        return self.service.delete_key(keyId).to_dict()

    def sign_document(self, documentPath: str, keyId: str, password: str, outputPath: str,
                      options: Optional[Dict[str, Any]] = None):
        self.service.sign_document(documentPath, keyId, password, outputPath, SigningOptions.from_dict(options))
        return None

    def verify_signature(self, documentPath: str, signaturePath: str, keyId: str):
        return self.service.verify_signature(documentPath, signaturePath, keyId).to_dict()
