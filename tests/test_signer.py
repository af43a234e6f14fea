import json

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solsigner.encoding import b58decode, b58encode, decode_bytes
from solsigner.errors import (
    InvalidKeyFormat,
    InvalidPublicKey,
    InvalidSignatureFormat,
    KeypairFileError,
    MalformedInput,
)
from solsigner.keypair import save_keypair
from solsigner.signer import MessageSigner, SignResult, sign, verify

FIXED_KEYPAIR = list(range(64))


@pytest.fixture
def signer():
    return MessageSigner()


@pytest.fixture
def keypair():
    return Keypair()


@pytest.fixture
def keypair_path(tmp_path, keypair):
    return save_keypair(tmp_path / "test-keypair.json", keypair)


def _off_curve_pubkey() -> bytes:
    for value in range(256):
        candidate = bytes([value]) * 32
        if not Pubkey.from_bytes(candidate).is_on_curve():
            return candidate
    raise AssertionError("no off-curve candidate found")


def test_sign_verify_soundness(keypair):
    for message in (b"", b"Hello, Solana!", "ünicode".encode("utf-8"), bytes(1024)):
        signature = sign(message, keypair)
        assert len(signature) == 64
        assert verify(message, signature, bytes(keypair.pubkey()))


def test_sign_is_deterministic(keypair):
    assert sign(b"same", keypair) == sign(b"same", keypair)


def test_verify_detects_tampering(keypair):
    signature = sign(b"message one", keypair)
    assert verify(b"message one", signature, bytes(keypair.pubkey()))
    assert not verify(b"message two", signature, bytes(keypair.pubkey()))
    assert not verify(b"message one", signature, bytes(Keypair().pubkey()))


def test_verify_malformed_lengths(keypair):
    signature = sign(b"msg", keypair)
    with pytest.raises(MalformedInput):
        verify(b"msg", signature[:63], bytes(keypair.pubkey()))
    with pytest.raises(MalformedInput):
        verify(b"msg", signature, bytes(keypair.pubkey())[:31])


def test_verify_rejects_off_curve_public_key(keypair):
    signature = sign(b"msg", keypair)
    with pytest.raises(MalformedInput, match="curve"):
        verify(b"msg", signature, _off_curve_pubkey())


def test_hello_solana_with_fixed_keypair(signer):
    result = signer.sign_with_private_key(
        "Hello, Solana!", json.dumps(FIXED_KEYPAIR), "base58"
    )
    derived = Keypair.from_seed(bytes(FIXED_KEYPAIR[:32])).pubkey()
    assert isinstance(result, SignResult)
    assert result.public_key == str(derived)
    assert len(b58decode(result.signature)) == 64
    assert signer.verify_signature("Hello, Solana!", result.signature, result.public_key, "base58")
    assert not signer.verify_signature("Wrong message", result.signature, result.public_key, "base58")


def test_sign_with_keypair_file(signer, keypair, keypair_path):
    result = signer.sign_with_keypair_file("Hello, Solana!", keypair_path)
    assert result.public_key == str(keypair.pubkey())
    assert decode_bytes(result.signature, "base58") == sign(b"Hello, Solana!", keypair)


@pytest.mark.parametrize("fmt", ["hex", "base58", "base64"])
def test_sign_and_verify_each_format(signer, keypair_path, fmt):
    result = signer.sign_with_keypair_file("Format test message", keypair_path, fmt)
    assert signer.verify_signature("Format test message", result.signature, result.public_key, fmt)


def test_output_formats_render_differently(signer, keypair_path):
    hex_result = signer.sign_with_keypair_file("Test message", keypair_path, "hex")
    b64_result = signer.sign_with_keypair_file("Test message", keypair_path, "base64")
    assert len(hex_result.signature) == 128
    assert len(b64_result.signature) == 88
    assert bytes.fromhex(hex_result.signature) == decode_bytes(b64_result.signature, "base64")


def test_sign_with_keypair_file_missing(signer, tmp_path):
    with pytest.raises(KeypairFileError):
        signer.sign_with_keypair_file("msg", tmp_path / "nonexistent.json")


@pytest.mark.parametrize("encode", [b58encode, bytes.hex, lambda raw: json.dumps(list(raw))])
def test_sign_with_private_key_encodings(signer, keypair, encode):
    result = signer.sign_with_private_key("msg", encode(bytes(keypair.to_bytes())))
    assert result.public_key == str(keypair.pubkey())


def test_sign_with_seed_only(signer):
    seed = bytes(range(1, 33))
    result = signer.sign_with_private_key("msg", b58encode(seed))
    assert result.public_key == str(Keypair.from_seed(seed).pubkey())


def test_sign_with_invalid_private_key(signer):
    with pytest.raises(InvalidKeyFormat):
        signer.sign_with_private_key("msg", "invalid-key")


def test_verify_signature_invalid_inputs(signer, keypair):
    result = signer.sign_message("msg", keypair)
    with pytest.raises(InvalidPublicKey):
        signer.verify_signature("msg", result.signature, "invalid-public-key")
    with pytest.raises(InvalidSignatureFormat):
        signer.verify_signature("msg", "zz", result.public_key, "hex")


def test_default_format_from_constructor(keypair):
    signer = MessageSigner("hex")
    result = signer.sign_message("msg", keypair)
    assert len(result.signature) == 128
    assert signer.verify_signature("msg", result.signature, result.public_key)


def test_generate_keypair_unique(signer):
    first = signer.generate_keypair()
    second = signer.generate_keypair()
    assert b58encode(bytes(first.pubkey())) != b58encode(bytes(second.pubkey()))
