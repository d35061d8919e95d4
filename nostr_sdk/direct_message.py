import logging

from .event_types import DirectMessageEvent
from .events import build_event
from .keys import Keypair, PrivateKey, PublicKey
from .kinds import EventKind
from .nip04 import decrypt_from_sender, encrypt_for_recipient
from .tags import Tag
from .utils import normalize_pubkey_input

logger = logging.getLogger(__name__)


def _as_public_key(recipient) -> PublicKey:
    if isinstance(recipient, PublicKey):
        return recipient
    return PublicKey.from_hex(normalize_pubkey_input(recipient))


# NIP-04 DM (kind:4)
def build_direct_message(
    content: str,
    recipient,
    sender: Keypair,
    created_at: int | None = None,
) -> DirectMessageEvent:
    """
    NIP-04 DM: kind 4
    tags: [["p", recipient_pubkey]]
    content: encrypted string

    `recipient` may be a PublicKey, a 64-hex pubkey or an npub1... string.
    """
    if not isinstance(content, str):
        raise TypeError("content must be str")
    if not content.strip():
        raise ValueError("DM message cannot be empty")

    recipient_key = _as_public_key(recipient)
    encrypted = encrypt_for_recipient(content, sender.private_key, recipient_key)

    return build_event(
        sender,
        EventKind.DIRECT_MESSAGE,
        encrypted,
        [Tag.pubkey(recipient_key.hex)],
        created_at,
    )


def read_direct_message(event: DirectMessageEvent, private_key: PrivateKey) -> str:
    """
    Returns the plaintext of a kind 4 event for the holder of `private_key`,
    whether they sent it or received it.
    """
    me = private_key.public_key.hex
    sender = event.pubkey.lower()

    if sender == me:
        partner = event.recipient_pubkey
        logger.debug("dm %s: reading own message to %s", event.id[:12], (partner or "?")[:12])
    else:
        partner = sender

    return decrypt_from_sender(event.content, private_key, PublicKey.from_hex(partner))
