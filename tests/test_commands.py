import json

import pytest

from docsign_core.commands import CommandDispatcher


@pytest.fixture
def dispatcher(service):
    return CommandDispatcher(service)


def test_list_keys_empty(dispatcher):
    assert dispatcher.invoke("listKeys") == {"ok": True, "data": []}


def test_generate_sign_verify(dispatcher, document, tmp_path):
    res = dispatcher.invoke("generateKeyPair", name="test", algorithm="ed25519", password="pw1234")
    assert res["ok"] is True
    key_id = res["data"]["info"]["keyId"]
    assert res["data"]["info"]["algorithm"] == "Ed25519"
    assert res["data"]["publicKeyPem"].startswith("-----BEGIN PUBLIC KEY-----")

    sig = tmp_path / "doc.sig"
    res = dispatcher.invoke(
        "signDocument", documentPath=str(document), keyId=key_id, password="pw1234",
        outputPath=str(sig), options={"format": "detached"},
    )
    assert res == {"ok": True, "data": None}

    res = dispatcher.invoke("verifySignature", documentPath=str(document), signaturePath=str(sig), keyId=key_id)
    assert res == {"ok": True, "data": {"isValid": True}}
    json.dumps(res)


def test_errors_are_flattened_to_strings(dispatcher):
    res = dispatcher.invoke("generateKeyPair", name="k", algorithm="Ed25519", password="")
    assert res == {"ok": False, "error": "Password cannot be empty."}

    res = dispatcher.invoke("generateKeyPair", name="k", algorithm="bogus", password="pw")
    assert res["ok"] is False
    assert "bogus" in res["error"]

    res = dispatcher.invoke("getKeyDetails", keyId="nope")
    assert res == {"ok": False, "error": "Key with ID nope not found"}


def test_invalid_signature_is_not_an_error(dispatcher, document, tmp_path):
    key_id = dispatcher.invoke("generateKeyPair", name="k", algorithm="P256", password="pw")["data"]["info"]["keyId"]
    sig = tmp_path / "doc.sig"
    dispatcher.invoke("signDocument", documentPath=str(document), keyId=key_id, password="pw", outputPath=str(sig))
    document.write_bytes(b"changed")
    res = dispatcher.invoke("verifySignature", documentPath=str(document), signaturePath=str(sig), keyId=key_id)
    assert res["ok"] is True
    assert res["data"]["isValid"] is False
    assert res["data"]["errorMessage"].startswith("Signature is invalid:")


def test_unknown_command_and_bad_params(dispatcher):
    assert dispatcher.invoke("rotateKey")["ok"] is False
    res = dispatcher.invoke("getKeyDetails", key_id="snake_case")
    assert res["ok"] is False
    assert res["error"].startswith("Invalid parameters for getKeyDetails")


def test_unexpected_errors_hide_details(dispatcher, monkeypatch):
    def explode():
        raise RuntimeError("/secret/internal/path")

    monkeypatch.setattr(dispatcher.service, "list_keys", explode)
    res = dispatcher.invoke("listKeys")
    assert res == {"ok": False, "error": "Internal error: RuntimeError"}


def test_command_names(dispatcher):
    assert dispatcher.commands == sorted([
        "deleteKey", "generateKeyPair", "getKeyDetails", "importKeyPair",
        "listKeys", "signDocument", "verifySignature",
    ])
