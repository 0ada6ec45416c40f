"""
Unit tests for RecordCipher.
"""

import pytest

from healthchain.exceptions import CipherError
from healthchain.utils.encryption_util import RecordCipher, IV_LENGTH


@pytest.fixture
def cipher():
    return RecordCipher()


def test_round_trip(cipher):
    iv, ciphertext = cipher.encrypt(b"blood panel results")
    assert len(iv) == IV_LENGTH
    assert ciphertext != b"blood panel results"
    assert cipher.decrypt(ciphertext, iv) == b"blood panel results"


def test_empty_payload_round_trips(cipher):
    iv, ciphertext = cipher.encrypt(b"")
    assert cipher.decrypt(ciphertext, iv) == b""


def test_each_encryption_uses_a_fresh_iv(cipher):
    ivs = {cipher.encrypt(b"same bytes")[0] for _ in range(50)}
    assert len(ivs) == 50


def test_other_key_cannot_decrypt(cipher):
    """A restarted process has a new key; old blobs become unreadable."""
    iv, ciphertext = cipher.encrypt(b"x-ray")
    with pytest.raises(CipherError):
        RecordCipher().decrypt(ciphertext, iv)


def test_tampered_ciphertext_is_rejected(cipher):
    iv, ciphertext = cipher.encrypt(b"x-ray")
    tampered = bytes([ciphertext[0] ^ 0x01]) + ciphertext[1:]
    with pytest.raises(CipherError):
        cipher.decrypt(tampered, iv)


@pytest.mark.parametrize("iv", [b"", b"short", b"x" * 16, "not-bytes", None])
def test_malformed_iv_is_rejected(cipher, iv):
    _, ciphertext = cipher.encrypt(b"x-ray")
    with pytest.raises(CipherError):
        cipher.decrypt(ciphertext, iv)


def test_truncated_ciphertext_is_rejected(cipher):
    iv, _ = cipher.encrypt(b"x-ray")
    with pytest.raises(CipherError):
        cipher.decrypt(b"abc", iv)


def test_plaintext_must_be_bytes(cipher):
    with pytest.raises(CipherError):
        cipher.encrypt("a string")
