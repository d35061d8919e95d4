"""
secp256k1 key material.

Nostr public keys are 32-byte x-only keys (BIP-340); private keys are 32-byte
scalars. Both are immutable value objects carrying raw bytes, with hex and
NIP-19 (npub / nsec) views.
"""
import logging
import os
from dataclasses import dataclass, field

import secp256k1
from secp256k1 import ffi, lib, secp256k1_ctx

from .errors import InvalidKey
from .utils import decode_nip19_key, encode_nip19, require_32byte_hex

logger = logging.getLogger(__name__)


def _require_32_bytes(raw, label: str) -> bytes:
    if not isinstance(raw, (bytes, bytearray)) or len(raw) != 32:
        raise InvalidKey(f"{label} must be 32 bytes")
    return bytes(raw)


@dataclass(frozen=True)
class PublicKey:
    raw: bytes

    def __post_init__(self):
        object.__setattr__(self, "raw", _require_32_bytes(self.raw, "public key"))

    @classmethod
    def from_hex(cls, hex_str: str) -> "PublicKey":
        return cls(bytes.fromhex(require_32byte_hex(hex_str, "public key")))

    @classmethod
    def from_npub(cls, npub: str) -> "PublicKey":
        return cls(decode_nip19_key(npub, "npub"))

    @property
    def hex(self) -> str:
        return self.raw.hex()

    @property
    def npub(self) -> str:
        return encode_nip19("npub", self.raw)

    def to_secp256k1(self) -> secp256k1.PublicKey:
        """
        Lift the x-only key to a full point. BIP-340 uses the point with EVEN Y,
        i.e. the compressed encoding 0x02 || x.
        """
        try:
            return secp256k1.PublicKey(b"\x02" + self.raw, raw=True)
        except Exception as e:  # the binding raises bare Exception for off-curve points
            raise InvalidKey(f"public key is not a valid curve point: {e}") from e

    def verify_signature(self, message: bytes, signature: bytes) -> bool:
        """
        BIP-340 Schnorr check of a 64-byte signature over a 32-byte message.
        """
        if len(message) != 32 or len(signature) != 64:
            return False
        return bool(self.to_secp256k1().schnorr_verify(message, signature, None, raw=True))

    def __str__(self) -> str:
        return self.hex


@dataclass(frozen=True, repr=False)
class PrivateKey:
    raw: bytes

    def __post_init__(self):
        raw = _require_32_bytes(self.raw, "private key")
        try:
            secp256k1.PrivateKey(raw, raw=True)
        except Exception as e:  # zero or >= curve order
            raise InvalidKey("private key is out of range") from e
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_hex(cls, hex_str: str) -> "PrivateKey":
        return cls(bytes.fromhex(require_32byte_hex(hex_str, "private key")))

    @classmethod
    def from_nsec(cls, nsec: str) -> "PrivateKey":
        return cls(decode_nip19_key(nsec, "nsec"))

    @classmethod
    def generate(cls) -> "PrivateKey":
        return cls(secp256k1.PrivateKey().private_key)

    @property
    def hex(self) -> str:
        return self.raw.hex()

    @property
    def nsec(self) -> str:
        return encode_nip19("nsec", self.raw)

    def to_secp256k1(self) -> secp256k1.PrivateKey:
        return secp256k1.PrivateKey(self.raw, raw=True)

    @property
    def public_key(self) -> PublicKey:
        # drop 02/03 prefix -> X only (32 bytes)
        return PublicKey(self.to_secp256k1().pubkey.serialize(compressed=True)[1:33])

    def sign(self, message: bytes) -> bytes:
        """
        BIP-340 Schnorr signature (64 bytes) over exactly the 32-byte message.

        A fresh 32-byte aux_rand is drawn for every call, so signing the same
        message twice gives two different, equally valid signatures.
        `schnorr_sign` on the binding passes no aux_rand, so call the C function directly.
        """
        if len(message) != 32:
            raise ValueError("schnorr message must be 32 bytes")

        sk = self.to_secp256k1()
        sig64 = ffi.new("char [64]")
        signed = lib.secp256k1_schnorrsig_sign(secp256k1_ctx, sig64, message, sk.keypair, os.urandom(32))
        if signed != 1:
            raise ValueError("schnorr signing failed")
        return bytes(ffi.buffer(sig64, 64))

    def __repr__(self) -> str:
        return "PrivateKey(<redacted>)"


@dataclass(frozen=True)
class Keypair:
    """
    A private key together with the public key derived from it.

    Only the private key is passed in; the public key is always derived, so the
    two can never disagree.
    """

    private_key: PrivateKey
    public_key: PublicKey = field(init=False)

    def __post_init__(self):
        if not isinstance(self.private_key, PrivateKey):
            raise InvalidKey("Keypair requires a PrivateKey")
        object.__setattr__(self, "public_key", self.private_key.public_key)

    @classmethod
    def generate(cls) -> "Keypair":
        kp = cls(PrivateKey.generate())
        logger.debug("generated keypair for %s", kp.public_key.hex[:12])
        return kp

    @classmethod
    def from_hex(cls, private_key_hex: str) -> "Keypair":
        return cls(PrivateKey.from_hex(private_key_hex))

    @classmethod
    def from_nsec(cls, nsec: str) -> "Keypair":
        return cls(PrivateKey.from_nsec(nsec))
