# /healthchain/utils/encryption_util.py
import os
import logging

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from healthchain.exceptions import CipherError

logger = logging.getLogger(__name__)

KEY_BITS = 256
IV_LENGTH = 12


class RecordCipher:
    """
    AES-256-GCM encryption for record payloads.

    The key is generated when the cipher is created and only ever lives in
    memory. Blobs written by a previous process cannot be decrypted by a new
    one; that surfaces as a CipherError.
    """
    def __init__(self, key=None):
        self._aesgcm = AESGCM(key or AESGCM.generate_key(bit_length=KEY_BITS))

    def encrypt(self, plaintext: bytes) -> tuple[bytes, bytes]:
        """Encrypts bytes under a fresh random IV. Returns (iv, ciphertext)."""
        if not isinstance(plaintext, (bytes, bytearray)):
            raise CipherError('plaintext must be bytes')

        iv = os.urandom(IV_LENGTH)
        return iv, self._aesgcm.encrypt(iv, bytes(plaintext), None)

    def decrypt(self, ciphertext: bytes, iv: bytes) -> bytes:
        """Decrypts ciphertext produced by encrypt()."""
        if not isinstance(iv, (bytes, bytearray)) or len(iv) != IV_LENGTH:
            raise CipherError('malformed initialization vector')
        if not isinstance(ciphertext, (bytes, bytearray)):
            raise CipherError('malformed ciphertext')

        try:
            return self._aesgcm.decrypt(bytes(iv), bytes(ciphertext), None)
        except InvalidTag:
            # Wrong key (e.g. after a restart) or tampered/truncated data.
            logger.warning("Decryption failed: authentication tag mismatch")
            raise CipherError('ciphertext does not match key')
        except ValueError as e:
            raise CipherError(f'malformed ciphertext: {e}')
