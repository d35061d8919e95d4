import hashlib
import json
import logging
import time
from dataclasses import dataclass
from typing import ClassVar

from .errors import InvalidId, InvalidKey, InvalidSignature, MalformedEvent
from .keys import Keypair, PrivateKey, PublicKey
from .kinds import EventKind, UnknownEventKind, kind_code, kind_from_code
from .tags import Tag, TagName, as_tags
from .utils import is_32byte_hex, is_lower_hex, require_32byte_hex

logger = logging.getLogger(__name__)

WIRE_FIELDS = ("id", "pubkey", "created_at", "kind", "tags", "content", "sig")


def _dumps(obj) -> str:
    # compact, UTF-8, "/" left unescaped: the exact NIP-01 byte form
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


# NIP-01 canonical preimage
def serialize_for_id(pubkey: str, created_at: int, kind, tags, content: str) -> bytes:
    event_data = [
        0,
        pubkey,
        created_at,
        kind_code(kind),
        [t.to_list() for t in as_tags(tags)],
        content,
    ]
    return _dumps(event_data).encode("utf-8")


# NIP-01 event id from fields
def compute_event_id(pubkey: str, created_at: int, kind, tags, content: str) -> str:
    return hashlib.sha256(serialize_for_id(pubkey, created_at, kind, tags, content)).hexdigest()


# NIP-01 sign event
def sign_event_id(event_id_hex: str, private_key: PrivateKey) -> str:
    return private_key.sign(bytes.fromhex(event_id_hex)).hex()


@dataclass(frozen=True)
class NostrEvent:
    """
    A signed NIP-01 event.

    Instances are immutable. Build new ones with `build_event` (or one of the
    `build_*` helpers) and decode wire records with `decode_event`.
    """

    id: str
    pubkey: str
    created_at: int
    kind: EventKind | UnknownEventKind
    tags: tuple[Tag, ...]
    content: str
    sig: str

    # tag names this shape must carry at least once
    required_tags: ClassVar[tuple[str, ...]] = ()

    def __post_init__(self):
        object.__setattr__(self, "kind", kind_from_code(self.kind))
        object.__setattr__(self, "tags", as_tags(self.tags))

    # ---------- tags ----------

    def tags_named(self, name: str) -> list[Tag]:
        return [t for t in self.tags if t.name == name]

    def first_tag_value(self, name: str) -> str | None:
        for t in self.tags:
            if t.name == name and t.value is not None:
                return t.value
        return None

    @property
    def identifier(self) -> str | None:
        """Value of the first "d" tag (parameterized replaceable events)."""
        return self.first_tag_value(TagName.IDENTIFIER)

    @property
    def author(self) -> PublicKey:
        return PublicKey.from_hex(self.pubkey)

    # ---------- shape ----------

    def validate(self) -> None:
        """
        Structural checks specific to the concrete event type.
        """
        for name in self.required_tags:
            if not any(t.name == name and t.value for t in self.tags):
                raise MalformedEvent(
                    f"{type(self).__name__} (kind {kind_code(self.kind)}) requires a '{name}' tag"
                )

    # ---------- identity / authentication ----------

    def compute_id(self) -> str:
        return compute_event_id(self.pubkey, self.created_at, self.kind, self.tags, self.content)

    def verify(self) -> None:
        """
        Recompute the id from the fields, then check the signature against (id, pubkey).
        Raises InvalidId or InvalidSignature.
        """
        expected = self.compute_id()
        if expected != self.id:
            logger.debug("event %s: id mismatch (recomputed %s)", self.id[:12], expected[:12])
            raise InvalidId(f"event id {self.id} does not match recomputed id {expected}")

        try:
            ok = PublicKey.from_hex(self.pubkey).verify_signature(
                bytes.fromhex(self.id),
                bytes.fromhex(self.sig),
            )
        except (InvalidKey, ValueError) as e:
            logger.debug("event %s: cannot check signature: %s", self.id[:12], e)
            raise InvalidSignature(f"event {self.id}: {e}") from e

        if not ok:
            logger.debug("event %s: bad signature", self.id[:12])
            raise InvalidSignature(f"signature does not verify for event {self.id}")

    def is_valid(self) -> bool:
        try:
            self.verify()
        except (InvalidId, InvalidSignature):
            return False
        return True

    # ---------- wire ----------

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "created_at": self.created_at,
            "kind": kind_code(self.kind),
            "tags": [t.to_list() for t in self.tags],
            "content": self.content,
            "sig": self.sig,
        }

    def to_json(self) -> str:
        return _dumps(self.to_dict())


def verify_event(event: NostrEvent) -> None:
    event.verify()


def validate_event_shape(event) -> str | None:
    """
    Basic structural validation of a wire record.
    Return error string if invalid, else None.
    """
    if not isinstance(event, dict):
        return "event must be an object"

    for k in WIRE_FIELDS:
        if k not in event:
            return f"missing field: {k}"

    if not is_lower_hex(event["id"], 64):
        return "invalid id (must be 32-byte lowercase hex / 64 chars)"
    if not is_lower_hex(event["pubkey"], 64):
        return "invalid pubkey (must be 32-byte lowercase hex / 64 chars, x-only)"
    if not is_lower_hex(event["sig"], 128):
        return "invalid sig (must be 64-byte lowercase hex / 128 chars)"
    if not isinstance(event["created_at"], int) or isinstance(event["created_at"], bool):
        return "created_at must be int"
    if not isinstance(event["kind"], int) or isinstance(event["kind"], bool):
        return "kind must be int"
    if not isinstance(event["tags"], list):
        return "tags must be list"
    for t in event["tags"]:
        if not isinstance(t, list) or not t or not all(isinstance(x, str) for x in t):
            return "each tag must be a non-empty list of strings"
    if not isinstance(event["content"], str):
        return "content must be string"
    return None


def decode_event(data) -> NostrEvent:
    """
    Decode a wire record (dict, JSON text or bytes) into the concrete event type for its kind.
    The signature is NOT checked here; call `verify()`.
    """
    from .event_types import resolve_event_class

    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise MalformedEvent(f"event is not valid JSON: {e}") from e

    err = validate_event_shape(data)
    if err:
        raise MalformedEvent(err)

    cls = resolve_event_class(kind_from_code(data["kind"]))
    event = cls(**{k: data[k] for k in WIRE_FIELDS})
    event.validate()
    return event


def build_event(
    keypair: Keypair,
    kind,
    content: str = "",
    tags=(),
    created_at: int | None = None,
) -> NostrEvent:
    """
    Fill in pubkey and created_at, compute the id, sign it, and return the
    concrete event type for `kind`.
    """
    from .event_types import resolve_event_class

    if not isinstance(content, str):
        raise TypeError("content must be str")

    pubkey = keypair.public_key.hex
    created_at = int(time.time()) if created_at is None else created_at
    kind = kind_from_code(kind)
    tags = as_tags(tags)

    event_id = compute_event_id(pubkey, created_at, kind, tags, content)
    sig = sign_event_id(event_id, keypair.private_key)

    cls = resolve_event_class(kind)
    event = cls(
        id=event_id,
        pubkey=pubkey,
        created_at=created_at,
        kind=kind,
        tags=tags,
        content=content,
        sig=sig,
    )
    event.validate()
    logger.debug("built %s %s (kind %d)", cls.__name__, event_id[:12], kind_code(kind))
    return event


# NIP-01 text note (kind:1)
def build_text_note(keypair: Keypair, content: str, tags=(), created_at: int | None = None) -> NostrEvent:
    return build_event(keypair, EventKind.TEXT_NOTE, content, tags, created_at)


# NIP-02 follow list (kind:3)
def build_follow_list(
    keypair: Keypair,
    followed_pubkeys: list[str],
    content: str = "",
    created_at: int | None = None,
) -> NostrEvent:
    """
    Tags: [["p", <pubkey>], ...]
    """
    # normalize + dedupe + stable order
    clean = sorted({
        pk.strip().lower()
        for pk in followed_pubkeys
        if is_32byte_hex(pk)
    })
    tags = [Tag.pubkey(pk) for pk in clean]
    return build_event(keypair, EventKind.FOLLOW_LIST, content, tags, created_at)


# NIP-25 reaction (kind:7)
def build_reaction(
    keypair: Keypair,
    target_event_id: str,
    target_pubkey: str | None = None,
    reaction: str = "+",
    created_at: int | None = None,
) -> NostrEvent:
    """
    - content: "+" (like) by default
    - tags: [["e", <event_id>]] and optionally ["p", <pubkey>]
    """
    eid = require_32byte_hex(target_event_id, "event id")
    tags = [Tag.event(eid)]

    if is_32byte_hex(target_pubkey):
        tags.append(Tag.pubkey(target_pubkey.strip().lower()))

    content = (reaction or "+").strip() or "+"
    return build_event(keypair, EventKind.REACTION, content, tags, created_at)


# NIP-09 deletion request (kind:5)
def build_deletion(
    keypair: Keypair,
    event_ids: list[str],
    reason: str = "",
    created_at: int | None = None,
) -> NostrEvent:
    tags = [Tag.event(require_32byte_hex(eid, "event id")) for eid in event_ids]
    if not tags:
        raise ValueError("deletion needs at least one event id")
    return build_event(keypair, EventKind.DELETION, reason, tags, created_at)
