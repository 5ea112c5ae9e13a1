"""
docsign Core Package
====================
Credential custody and detached document signing for the docsign desktop tool.

Provides:
- Algorithm registry (RSA-PKCS1-SHA256, ECDSA-P256-SHA256, Ed25519)
- Password-based envelope encryption of private keys at rest
- JSON-backed key store with per-key PEM / encrypted key files
- Detached sign / verify and a command boundary for host front-ends
"""

__version__ = "0.1.0"
