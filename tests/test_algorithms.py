import pytest

from docsign_core.algorithms import Algorithm, display_name, parse_algorithm
from docsign_core.errors import UnsupportedAlgorithm


@pytest.mark.parametrize("alg", list(Algorithm))
def test_display_name_roundtrip(alg):
    assert parse_algorithm(display_name(alg)) is alg
    assert Algorithm.parse(str(alg)) is alg


def test_canonical_names():
    assert str(Algorithm.RSA_PKCS1_SHA256) == "RSA-PKCS1-SHA256"
    assert str(Algorithm.ECDSA_P256_SHA256) == "ECDSA-P256-SHA256"
    assert str(Algorithm.ED25519) == "Ed25519"


@pytest.mark.parametrize("text,expected", [
    ("rsa", Algorithm.RSA_PKCS1_SHA256),
    ("RSA-PKCS1-SHA256", Algorithm.RSA_PKCS1_SHA256),
    ("rsa_2048", Algorithm.RSA_PKCS1_SHA256),
    ("p256", Algorithm.ECDSA_P256_SHA256),
    ("ec-p256", Algorithm.ECDSA_P256_SHA256),
    ("ecdsa_p256", Algorithm.ECDSA_P256_SHA256),
    ("ed25519", Algorithm.ED25519),
    ("ED-25519", Algorithm.ED25519),
])
def test_aliases(text, expected):
    assert parse_algorithm(text) is expected


def test_unknown_algorithm_keeps_original_text():
    with pytest.raises(UnsupportedAlgorithm) as exc:
        parse_algorithm("bogus")
    assert exc.value.text == "bogus"
    assert "bogus" in str(exc.value)


def test_digest_table():
    assert Algorithm.RSA_PKCS1_SHA256.digest_name == "sha256"
    assert Algorithm.ECDSA_P256_SHA256.digest_name == "sha256"
    assert Algorithm.ED25519.digest_name is None
