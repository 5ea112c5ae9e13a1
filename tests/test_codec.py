import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from docsign_core import codec
from docsign_core.algorithms import Algorithm
from docsign_core.errors import KeyDecodeError


@pytest.mark.parametrize("alg", list(Algorithm))
def test_generate_and_decode(alg):
    pair = codec.generate(alg)
    assert pair.public_pem.startswith("-----BEGIN PUBLIC KEY-----\n")
    sk = codec.decode_private(alg, pair.private_der)
    pk = codec.decode_public(alg, pair.public_pem)
    assert codec.encode_public(sk.public_key()) == codec.encode_public(pk)


def test_key_types():
    assert isinstance(codec.generate_private_key(Algorithm.RSA_PKCS1_SHA256), rsa.RSAPrivateKey)
    assert codec.generate_private_key(Algorithm.RSA_PKCS1_SHA256).key_size == 2048
    ec_key = codec.generate_private_key(Algorithm.ECDSA_P256_SHA256)
    assert isinstance(ec_key.curve, ec.SECP256R1)
    assert isinstance(codec.generate_private_key(Algorithm.ED25519), ed25519.Ed25519PrivateKey)


def test_private_key_algorithm_mismatch():
    pair = codec.generate(Algorithm.ED25519)
    with pytest.raises(KeyDecodeError):
        codec.decode_private(Algorithm.ECDSA_P256_SHA256, pair.private_der)


def test_malformed_private_der():
    with pytest.raises(KeyDecodeError):
        codec.decode_private(Algorithm.ED25519, b"not a key")


def test_public_pem_label_mismatch():
    sk = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pkcs1_pem = sk.public_key().public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.PKCS1
    ).decode()
    assert "RSA PUBLIC KEY" in pkcs1_pem
    with pytest.raises(KeyDecodeError, match="Invalid PEM label"):
        codec.decode_public(Algorithm.RSA_PKCS1_SHA256, pkcs1_pem)


def test_public_pem_garbage():
    with pytest.raises(KeyDecodeError):
        codec.decode_public(Algorithm.ED25519, "-----BEGIN PUBLIC KEY-----\nAAAA\n-----END PUBLIC KEY-----\n")
    with pytest.raises(KeyDecodeError):
        codec.decode_public(Algorithm.ED25519, "no pem here")


def test_public_key_algorithm_mismatch():
    pair = codec.generate(Algorithm.ECDSA_P256_SHA256)
    with pytest.raises(KeyDecodeError):
        codec.decode_public(Algorithm.ED25519, pair.public_pem)


def test_algorithm_for_key_rejects_other_curves_and_small_rsa():
    with pytest.raises(KeyDecodeError):
        codec.algorithm_for_key(ec.generate_private_key(ec.SECP384R1()))
    with pytest.raises(KeyDecodeError):
        codec.algorithm_for_key(rsa.generate_private_key(public_exponent=65537, key_size=1024))


def test_load_importable_private_key_with_passphrase():
    sk = ec.generate_private_key(ec.SECP256R1())
    pem = sk.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.BestAvailableEncryption(b"hunter2"),
    )
    loaded = codec.load_importable_private_key(pem, "hunter2")
    assert codec.algorithm_for_key(loaded) is Algorithm.ECDSA_P256_SHA256
    with pytest.raises(KeyDecodeError):
        codec.load_importable_private_key(pem, "wrong")
    with pytest.raises(KeyDecodeError):
        codec.load_importable_private_key(pem)
