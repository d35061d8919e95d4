"""
NIP-04 encrypted direct-message content.

    shared key = x-coordinate of ECDH(my private key, their public key)
    content    = base64(AES-256-CBC(plaintext, shared key, iv)) + "?iv=" + base64(iv)
"""
import base64
import binascii
import logging
import os

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.padding import PKCS7

from .errors import DecryptionFailed, InvalidKey, MalformedContent
from .keys import PrivateKey, PublicKey

logger = logging.getLogger(__name__)

SEPARATOR = "?iv="
IV_SIZE = 16
BLOCK_SIZE = 16
KEY_SIZE = 32


def _require_aes256_key(key: bytes) -> None:
    if not isinstance(key, (bytes, bytearray)) or len(key) != KEY_SIZE:
        raise InvalidKey(f"NIP-04 shared key must be {KEY_SIZE} bytes (AES-256)")


def _aes_cbc_encrypt(key32: bytes, iv16: bytes, plaintext: bytes) -> bytes:
    padder = PKCS7(128).padder()
    padded = padder.update(plaintext) + padder.finalize()

    cipher = Cipher(algorithms.AES(key32), modes.CBC(iv16))
    enc = cipher.encryptor()
    return enc.update(padded) + enc.finalize()


def _aes_cbc_decrypt(key32: bytes, iv16: bytes, ciphertext: bytes) -> bytes:
    cipher = Cipher(algorithms.AES(key32), modes.CBC(iv16))
    dec = cipher.decryptor()
    padded = dec.update(ciphertext) + dec.finalize()

    unpadder = PKCS7(128).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


def derive_shared_key(private_key: PrivateKey, their_public_key: PublicKey) -> bytes:
    """
    NIP-04: use ONLY the X coordinate of the ECDH shared point (32 bytes) as the AES key.
    Do NOT hash it.

    Nostr pubkeys are x-only; the point is lifted with EVEN Y (prefix 0x02).
    Either Y gives the same shared X, so the key is symmetric between the two parties.
    """
    sk_int = int.from_bytes(private_key.raw, "big")
    priv = ec.derive_private_key(sk_int, ec.SECP256K1())
    try:
        pub = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), b"\x02" + their_public_key.raw)
    except ValueError as e:
        raise InvalidKey("public key is not a valid curve point") from e

    shared = priv.exchange(ec.ECDH(), pub)  # cryptography returns 32-byte X coordinate
    if len(shared) != 32:
        raise ValueError(f"ECDH shared secret unexpected length: {len(shared)}")
    return shared


def encrypt(plaintext: str, shared_key: bytes) -> tuple[bytes, bytes]:
    """
    Returns (ciphertext, iv). A fresh random IV is drawn for every call.
    """
    _require_aes256_key(shared_key)
    iv = os.urandom(IV_SIZE)
    return _aes_cbc_encrypt(shared_key, iv, plaintext.encode("utf-8")), iv


def encode(ciphertext: bytes, iv: bytes) -> str:
    """
    Returns: base64(ciphertext)?iv=base64(iv)
    """
    b64_ct = base64.b64encode(ciphertext).decode("ascii")
    b64_iv = base64.b64encode(iv).decode("ascii")
    return f"{b64_ct}{SEPARATOR}{b64_iv}"


def decode(content: str) -> tuple[bytes, bytes]:
    if not isinstance(content, str) or SEPARATOR not in content:
        raise MalformedContent("Invalid NIP-04 content (missing ?iv=)")

    b64_ct, b64_iv = content.split(SEPARATOR, 1)
    try:
        ct = base64.b64decode(b64_ct, validate=True)
        iv = base64.b64decode(b64_iv, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedContent(f"Invalid NIP-04 content (bad base64: {e})") from e

    if len(iv) != IV_SIZE:
        raise MalformedContent(f"Invalid NIP-04 content (iv must be {IV_SIZE} bytes, got {len(iv)})")
    if not ct or len(ct) % BLOCK_SIZE:
        raise MalformedContent("Invalid NIP-04 content (ciphertext is not a whole number of blocks)")
    return ct, iv


def decrypt(ciphertext: bytes, iv: bytes, shared_key: bytes) -> str:
    _require_aes256_key(shared_key)
    try:
        pt = _aes_cbc_decrypt(shared_key, iv, ciphertext)
        return pt.decode("utf-8")
    except (ValueError, UnicodeDecodeError) as e:
        logger.debug("nip04 decryption failed: %s", type(e).__name__)
        raise DecryptionFailed("could not decrypt content (wrong key or corrupted ciphertext)") from e


def encrypt_for_recipient(plaintext: str, sender_private_key: PrivateKey, recipient_public_key: PublicKey) -> str:
    key = derive_shared_key(sender_private_key, recipient_public_key)
    return encode(*encrypt(plaintext, key))


def decrypt_from_sender(content: str, reader_private_key: PrivateKey, other_public_key: PublicKey) -> str:
    ct, iv = decode(content)
    key = derive_shared_key(reader_private_key, other_public_key)
    return decrypt(ct, iv, key)
