# docsign_core/constants.py

APP_NAME = "docsign"

# --------- on-disk layout ----------
KEY_METADATA_FILENAME = "key_metadata.json"
KEY_STORAGE_DIR = "keys"
PUBLIC_KEY_SUFFIX = ".pub.pem"
PRIVATE_KEY_SUFFIX = ".key.enc"

# --------- envelope cipher ----------
PBKDF2_ITERATIONS = 100_000
SALT_LEN = 16
AES_KEY_LEN = 32   # AES-256
NONCE_LEN = 12     # 96-bit GCM nonce, appended to the ciphertext

# --------- key generation ----------
RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
PUBLIC_KEY_PEM_LABEL = "PUBLIC KEY"
