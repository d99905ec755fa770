"""Symmetric encryption for stored configuration documents.

Documents are encrypted with AES-128 in CFB mode (full-block feedback)
using a fixed key and a per-store initialization vector. There is no
authentication: a corrupted payload decrypts to garbage without error
and is caught later when the document fails to parse.

"""

from cryptography.hazmat.primitives.ciphers import Cipher
from cryptography.hazmat.primitives.ciphers import algorithms
from cryptography.hazmat.primitives.ciphers import modes

from sealedconfig import exceptions


ENCRYPT_KEY = bytes([
    0x44, 0x4C, 0x67, 0x70, 0x6B, 0x46, 0x4D, 0x43,
    0x31, 0x4D, 0x6D, 0x4F, 0x79, 0x79, 0x41, 0x78,
])

KEY_SIZE = 16
BLOCK_SIZE = algorithms.AES.block_size // 8


def normalize_iv(iv: bytes, size: int = BLOCK_SIZE) -> bytes:
    """Truncates or zero-pads iv to exactly size bytes.

    Existing encrypted documents depend on this exact rule.
    """
    iv = bytes(iv)
    if len(iv) >= size:
        return iv[:size]
    return iv + b"\x00" * (size - len(iv))


def _cipher(key: bytes, iv: bytes) -> Cipher:
    if len(key) != KEY_SIZE:
        raise ValueError("key must be %d bytes, got %d" % (KEY_SIZE, len(key)))
    return Cipher(algorithms.AES(bytes(key)), modes.CFB(normalize_iv(iv)))


def encrypt(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    try:
        encryptor = _cipher(key, iv).encryptor()
    except ValueError as e:
        raise exceptions.EncryptError(str(e)) from e
    return encryptor.update(plaintext) + encryptor.finalize()


def decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    try:
        decryptor = _cipher(key, iv).decryptor()
    except ValueError as e:
        raise exceptions.DecryptError(str(e)) from e
    return decryptor.update(ciphertext) + decryptor.finalize()
