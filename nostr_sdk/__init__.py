import logging

from .direct_message import build_direct_message, read_direct_message
from .errors import (
    DecryptionFailed,
    EventVerificationError,
    InvalidId,
    InvalidKey,
    InvalidSignature,
    MalformedContent,
    MalformedEvent,
    Nip04Error,
    NostrError,
)
from .event_types import DirectMessageEvent, resolve_event_class
from .events import (
    NostrEvent,
    build_deletion,
    build_event,
    build_follow_list,
    build_reaction,
    build_text_note,
    compute_event_id,
    decode_event,
    verify_event,
)
from .keys import Keypair, PrivateKey, PublicKey
from .kinds import (
    EventKind,
    UnknownEventKind,
    is_non_parameterized_replaceable,
    is_parameterized_replaceable,
    kind_code,
    kind_from_code,
)
from .tags import Tag, TagName

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DecryptionFailed",
    "DirectMessageEvent",
    "EventKind",
    "EventVerificationError",
    "InvalidId",
    "InvalidKey",
    "InvalidSignature",
    "Keypair",
    "MalformedContent",
    "MalformedEvent",
    "Nip04Error",
    "NostrError",
    "NostrEvent",
    "PrivateKey",
    "PublicKey",
    "Tag",
    "TagName",
    "UnknownEventKind",
    "build_deletion",
    "build_direct_message",
    "build_event",
    "build_follow_list",
    "build_reaction",
    "build_text_note",
    "compute_event_id",
    "decode_event",
    "is_non_parameterized_replaceable",
    "is_parameterized_replaceable",
    "kind_code",
    "kind_from_code",
    "read_direct_message",
    "resolve_event_class",
    "verify_event",
]
