class NostrError(Exception):
    """Base class for every error raised by nostr_sdk."""


class InvalidKey(NostrError, ValueError):
    """Key material is not valid hex / bech32 or is not a point on the curve."""


class MalformedEvent(NostrError, ValueError):
    """A wire record does not have the NIP-01 shape or the shape its kind requires."""


class EventVerificationError(NostrError):
    pass


class InvalidId(EventVerificationError):
    """The id recomputed from the event fields does not match the stored id."""


class InvalidSignature(EventVerificationError):
    """The signature does not verify for (id, pubkey)."""


class Nip04Error(NostrError):
    pass


class MalformedContent(Nip04Error, ValueError):
    """Direct-message content is not `<base64>?iv=<base64>`."""


class DecryptionFailed(Nip04Error):
    """Padding or text decoding failed after decryption (wrong key or corrupted data)."""
